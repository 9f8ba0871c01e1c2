# shopdesk/routers/orders.py

import math

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from shopdesk.database import get_db
from shopdesk.models.customers import Customer
from shopdesk.models.orders import Order
from shopdesk.models.order_details import OrderDetail
from shopdesk.schemas.order import OrderPageResponse, OrderResponse

router = APIRouter(
    prefix="/orders",
    tags=["Orders"],
)


def _details_by_order(db: Session, order_numbers: list[int]) -> dict:
    grouped = {number: [] for number in order_numbers}

    if not order_numbers:
        return grouped

    details = (
        db.query(OrderDetail)
        .filter(OrderDetail.number.in_(order_numbers))
        .order_by(OrderDetail.number, OrderDetail.process, OrderDetail.description)
        .all()
    )

    for detail in details:
        grouped[detail.number].append(detail)

    return grouped


def _serialize_order(order: Order, customer_name: str | None, details: list) -> dict:
    return {
        "number": order.number,
        "ticket": order.ticket,
        "total": order.total,
        "date": order.date,
        "customer_id": order.id,
        "customer_name": customer_name,
        "details": details,
    }


def _page(query, page: int, limit: int):
    total_items = query.order_by(None).count()
    rows = (
        query
        .order_by(Order.date.desc(), Order.number.desc())
        .limit(limit)
        .offset((page - 1) * limit)
        .all()
    )
    pagination = {
        "page": page,
        "limit": limit,
        "total_items": total_items,
        "total_pages": math.ceil(total_items / limit) if total_items else 0,
    }
    return rows, pagination


@router.get("", response_model=OrderPageResponse)
def list_orders(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
):
    query = db.query(Order, Customer.name).join(Customer, Order.id == Customer.id)

    rows, pagination = _page(query, page, limit)
    details = _details_by_order(db, [order.number for order, _ in rows])

    return {
        "data": [
            _serialize_order(order, name, details[order.number])
            for order, name in rows
        ],
        "pagination": pagination,
    }


@router.get("/byCustomer/{customer_id}", response_model=OrderPageResponse)
def list_orders_by_customer(
    customer_id: int,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
):
    query = (
        db.query(Order, Customer.name)
        .join(Customer, Order.id == Customer.id)
        .filter(Order.id == customer_id)
    )

    rows, pagination = _page(query, page, limit)
    details = _details_by_order(db, [order.number for order, _ in rows])

    return {
        "data": [
            _serialize_order(order, name, details[order.number])
            for order, name in rows
        ],
        "pagination": pagination,
    }


@router.get("/{ticket}", response_model=OrderResponse)
def get_order_by_ticket(
    ticket: int,
    db: Session = Depends(get_db),
):
    row = (
        db.query(Order, Customer.name)
        .join(Customer, Order.id == Customer.id)
        .filter(Order.ticket == ticket)
        .order_by(Order.date.desc())
        .first()
    )

    if not row:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No order found with that ticket",
        )

    order, customer_name = row
    details = _details_by_order(db, [order.number])

    return _serialize_order(order, customer_name, details[order.number])
