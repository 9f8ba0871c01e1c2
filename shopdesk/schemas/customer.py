from pydantic import BaseModel


class CustomerResponse(BaseModel):
    id: int
    name: str
    phone: str | None = None

    class Config:
        from_attributes = True
