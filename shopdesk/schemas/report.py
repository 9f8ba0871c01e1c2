# schemas/report.py

from pydantic import BaseModel
from typing import List


class DailyReportResponse(BaseModel):
    date: str
    total_money: float
    total_pieces: int


class MonthlySalesResponse(BaseModel):
    month: str
    total_sales: float


class CategoryPiecesResponse(BaseModel):
    category: str
    total_pieces: int


class ProductSummaryResponse(BaseModel):
    name: str
    category: str | None
    price: float
    stock: int
    sales: int


class RangeStatsResponse(BaseModel):
    total_pieces_range: int
    total_sales_range: float


class PeriodSnapshot(BaseModel):
    orders: int
    sales: float
    average_ticket: float
    customers: int
    pieces: int


class PeriodTrends(BaseModel):
    orders: float
    average_ticket: float
    customers: float
    pieces: float
    sales: float


class PeriodStatsResponse(BaseModel):
    period: str
    current: PeriodSnapshot
    previous: PeriodSnapshot
    trends: PeriodTrends
    total_sales: float
    new_clients: int
    total_pieces: int
    change_percentage: float


class YearStatsResponse(BaseModel):
    total_sales: float
    new_clients: int
    total_pieces: int
    change_percentage: float
    new_clients_trend: float
    pieces_trend: float
    inventory_count: int
    frequent_clients: int
    lost_clients: int
    info_range: str
