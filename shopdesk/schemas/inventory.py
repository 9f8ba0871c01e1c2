from pydantic import BaseModel
from datetime import date, datetime


class InventoryCreate(BaseModel):
    registro: int


class InventoryUpdate(BaseModel):
    telefono: str | None = None


class InventoryResponse(BaseModel):
    id: int
    registro: int
    telefono: str | None
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class InventoryDetailResponse(BaseModel):
    ticket: int
    date: date | None
    name: str
    telefono: str


class InventoryCreatedResponse(BaseModel):
    message: str
    id: int
    telefono: str | None


class InventoryChangeResponse(BaseModel):
    message: str
    ticket: int
