# shopdesk/models/sales.py

from sqlalchemy import CheckConstraint, Column, DateTime, Index, Integer, Numeric, String
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from shopdesk.database import Base

DEFAULT_CUSTOMER_NAME = "Walk-in Customer"


class Sale(Base):
    __tablename__ = "sales"

    sale_id = Column(Integer, primary_key=True, index=True)

    date = Column(DateTime, nullable=False, index=True)
    total = Column(Numeric(10, 2), nullable=False)

    payment_method = Column(String(10), nullable=False)
    cash_received = Column(Numeric(10, 2), nullable=True)
    change_given = Column(Numeric(10, 2), nullable=True)

    customer_name = Column(String(255), nullable=False, default=DEFAULT_CUSTOMER_NAME)

    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    items = relationship(
        "SaleItem",
        back_populates="sale",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        Index("ix_sales_customer_date", "customer_name", "date"),
        CheckConstraint("payment_method IN ('cash', 'card')", name="ck_sales_payment_method"),
        CheckConstraint("total >= 0", name="ck_sales_total_non_negative"),
    )
