# shopdesk/models/customers.py

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from shopdesk.database import Base


class Customer(Base):
    __tablename__ = "customers"

    # Ids come from the shop's own system, never generated here
    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(255), nullable=False, index=True)
    phone = Column(String(20), nullable=True)

    orders = relationship("Order", back_populates="customer")
