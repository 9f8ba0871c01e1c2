# schemas/order.py

from pydantic import BaseModel
from datetime import date
from decimal import Decimal
from typing import List


class OrderDetailResponse(BaseModel):
    process: str | None
    description: str | None
    pieces: int
    quantity: int
    date: date | None
    price: Decimal

    class Config:
        from_attributes = True


class OrderResponse(BaseModel):
    number: int
    ticket: int | None
    total: Decimal
    date: date | None
    customer_id: int
    customer_name: str | None = None
    details: List[OrderDetailResponse] = []


class Pagination(BaseModel):
    page: int
    limit: int
    total_items: int
    total_pages: int


class OrderPageResponse(BaseModel):
    data: List[OrderResponse]
    pagination: Pagination
