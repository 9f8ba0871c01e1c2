# schemas/sale.py

from pydantic import BaseModel, Field, ValidationInfo, field_validator
from datetime import datetime
from typing import List, Literal
from decimal import Decimal

TOTAL_TOLERANCE = Decimal("0.01")


def cart_total(items) -> Decimal:
    return sum((item.price * item.quantity for item in items), Decimal("0.00"))


class SaleItemCreate(BaseModel):
    name: str = Field(..., min_length=1)
    category: str | None = None
    price: Decimal = Field(..., ge=0)
    quantity: int = Field(..., gt=0)


class SaleCreate(BaseModel):
    """Cart submitted by the point of sale.

    Cross-field rules live on field validators so their messages are reported
    together with plain field errors. The amount due for cash is the items
    total, which is what gets stored.
    """

    items: List[SaleItemCreate] = Field(..., min_length=1)
    total: Decimal = Field(..., ge=0)
    payment_method: Literal["cash", "card"] = Field(..., alias="paymentMethod")
    cash_received: Decimal | None = Field(None, alias="cashReceived", validate_default=True)
    change: Decimal | None = Field(None, validate_default=True)
    date: datetime | None = None
    customer_name: str | None = Field(None, alias="customerName")

    class Config:
        populate_by_name = True

    @property
    def items_total(self) -> Decimal:
        return cart_total(self.items)

    @field_validator("total")
    @classmethod
    def total_matches_items(cls, value: Decimal, info: ValidationInfo):
        items = info.data.get("items")
        if items is not None:
            items_total = cart_total(items)
            if abs(items_total - value) > TOTAL_TOLERANCE:
                raise ValueError(f"total {value} does not match the items total {items_total}")
        return value

    @field_validator("cash_received")
    @classmethod
    def cash_covers_total(cls, value: Decimal | None, info: ValidationInfo):
        if info.data.get("payment_method") != "cash":
            return value

        if value is None:
            raise ValueError("cashReceived is required for cash payments")

        items = info.data.get("items")
        due = cart_total(items) if items is not None else info.data.get("total")
        if due is not None and value < due:
            raise ValueError("cashReceived must be greater than or equal to the total")

        return value

    @field_validator("change")
    @classmethod
    def change_present_for_cash(cls, value: Decimal | None, info: ValidationInfo):
        if info.data.get("payment_method") == "cash" and value is None:
            raise ValueError("change is required for cash payments")
        return value


class SaleItemResponse(BaseModel):
    product_name: str
    product_category: str | None
    price: Decimal
    quantity: int
    subtotal: Decimal

    class Config:
        from_attributes = True


class SaleSummaryResponse(BaseModel):
    sale_id: int
    date: datetime
    total: Decimal
    payment_method: str
    cash_received: Decimal | None
    change_given: Decimal | None
    customer_name: str
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class SaleResponse(SaleSummaryResponse):
    items: List[SaleItemResponse]


class SaleCreatedResponse(BaseModel):
    message: str
    sale_id: int
    total: Decimal
    items: int
    customer_name: str
    date: datetime


class SalesOverviewStats(BaseModel):
    total_sales: int
    revenue: float
    average_sale: float
    active_days: int
    total_customers: int


class PaymentMethodStats(BaseModel):
    payment_method: str
    count: int
    total: float


class TopProductStats(BaseModel):
    product_name: str
    product_category: str | None
    total_quantity: int
    total_amount: float


class TopCustomerStats(BaseModel):
    customer_name: str
    visits: int
    total_spent: float


class SalesStatsResponse(BaseModel):
    overview: SalesOverviewStats
    payment_methods: List[PaymentMethodStats]
    top_products: List[TopProductStats]
    top_customers: List[TopCustomerStats]
