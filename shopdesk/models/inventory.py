# shopdesk/models/inventory.py

from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.sql import func

from shopdesk.database import Base


class InventoryEntry(Base):
    """A ticket that has been received at the counter.

    `registro` matches `Order.ticket` by convention only.
    """

    __tablename__ = "inventario"

    id = Column(Integer, primary_key=True, index=True)
    registro = Column(Integer, nullable=False, unique=True, index=True)
    telefono = Column(String(20), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
