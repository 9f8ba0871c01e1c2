# shopdesk/models/orders.py

from sqlalchemy import Column, Date, ForeignKey, Index, Integer, Numeric
from sqlalchemy.orm import relationship

from shopdesk.database import Base


class Order(Base):
    __tablename__ = "orders"

    number = Column(Integer, primary_key=True, autoincrement=False)
    ticket = Column(Integer, nullable=True, index=True)
    total = Column(Numeric(10, 2), nullable=False, default=0)
    date = Column(Date, nullable=True, index=True)

    id = Column(Integer, ForeignKey("customers.id"), nullable=False, index=True)

    customer = relationship("Customer", back_populates="orders")

    details = relationship("OrderDetail", back_populates="order")

    __table_args__ = (
        Index("ix_orders_customer_date", "id", "date"),
    )
