# shopdesk/routers/customers.py

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from shopdesk.database import get_db
from shopdesk.models.customers import Customer
from shopdesk.schemas.customer import CustomerResponse

router = APIRouter(
    prefix="/customers",
    tags=["Customers"],
)


@router.get("", response_model=list[CustomerResponse])
def search_customers(
    query: str = Query(..., min_length=2),
    limit: int = Query(50, ge=1, le=200),
    db: Session = Depends(get_db),
):
    return (
        db.query(Customer)
        .filter(Customer.name.ilike(f"%{query.strip()}%"))
        .order_by(Customer.name)
        .limit(limit)
        .all()
    )
