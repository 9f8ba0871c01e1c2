# shopdesk/models/order_details.py

from sqlalchemy import Column, Date, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from shopdesk.database import Base


class OrderDetail(Base):
    __tablename__ = "order_details"

    detail_id = Column(Integer, primary_key=True, index=True)

    number = Column(Integer, ForeignKey("orders.number"), nullable=False, index=True)

    process = Column(String(255), nullable=True)
    description = Column(String(255), nullable=True)
    pieces = Column(Integer, nullable=False, default=0)
    quantity = Column(Integer, nullable=False, default=0)
    date = Column(Date, nullable=True, index=True)
    price = Column(Numeric(10, 2), nullable=False, default=0)

    order = relationship("Order", back_populates="details")
