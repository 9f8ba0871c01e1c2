# =========================================================
# SALES ROUTER (POINT OF SALE)
#
# - A sale is written as one header row + one row per cart line
# - Header and lines share a single transaction (all-or-nothing)
# - Sales are flat: customer_name is free text, no customer FK
# =========================================================

import logging
from datetime import date, datetime, time, timedelta
from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from shopdesk.database import get_db
from shopdesk.models.sales import Sale, DEFAULT_CUSTOMER_NAME
from shopdesk.models.sale_items import SaleItem
from shopdesk.schemas.sale import (
    SaleCreate,
    SaleCreatedResponse,
    SaleResponse,
    SaleSummaryResponse,
    SalesStatsResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sales", tags=["Sales"])

STATS_PERIODS = ("today", "yesterday", "week", "month", "year")


def _day_range(start_date: date | None, end_date: date | None):
    start_dt = datetime.combine(start_date, time.min) if start_date else None
    end_dt = datetime.combine(end_date + timedelta(days=1), time.min) if end_date else None
    return start_dt, end_dt


def _period_range(period: str | None, today: date):
    if period == "today":
        return _day_range(today, today)

    if period == "yesterday":
        yesterday = today - timedelta(days=1)
        return _day_range(yesterday, yesterday)

    if period == "week":
        monday = today - timedelta(days=today.weekday())
        return _day_range(monday, monday + timedelta(days=6))

    if period == "month":
        first = today.replace(day=1)
        next_first = (first + timedelta(days=32)).replace(day=1)
        return _day_range(first, next_first - timedelta(days=1))

    if period == "year":
        return _day_range(today.replace(month=1, day=1), today.replace(month=12, day=31))

    return None, None


def _date_filters(start_dt: datetime | None, end_dt: datetime | None):
    filters = []
    if start_dt is not None:
        filters.append(Sale.date >= start_dt)
    if end_dt is not None:
        filters.append(Sale.date < end_dt)
    return filters


# =========================================================
# CREATE SALE
# =========================================================
@router.post("", response_model=SaleCreatedResponse, status_code=status.HTTP_201_CREATED)
def create_sale(
    sale_data: SaleCreate,
    db: Session = Depends(get_db),
):
    is_cash = sale_data.payment_method == "cash"
    sale_date = sale_data.date or datetime.now()
    customer_name = (sale_data.customer_name or "").strip() or DEFAULT_CUSTOMER_NAME

    total_amount = Decimal("0.00")
    sale_items_objects = []

    try:
        sale = Sale(
            date=sale_date,
            total=Decimal("0.00"),
            payment_method=sale_data.payment_method,
            customer_name=customer_name,
        )
        db.add(sale)
        db.flush()

        for item in sale_data.items:
            subtotal = item.price * item.quantity
            total_amount += subtotal

            sale_items_objects.append(
                SaleItem(
                    sale_id=sale.sale_id,
                    product_name=item.name,
                    product_category=item.category,
                    price=item.price,
                    quantity=item.quantity,
                    subtotal=subtotal,
                )
            )

        sale.total = total_amount

        if is_cash:
            sale.cash_received = sale_data.cash_received
            sale.change_given = sale_data.cash_received - total_amount

        db.add_all(sale_items_objects)
        db.commit()
        db.refresh(sale)

    except SQLAlchemyError as exc:
        db.rollback()
        logger.error(f"Sale rolled back | items={len(sale_data.items)} | {exc}")
        raise HTTPException(status_code=500, detail="Unable to complete sale")

    logger.info(
        f"Sale {sale.sale_id} saved | total={sale.total} "
        f"items={len(sale_items_objects)} customer={customer_name}"
    )

    return {
        "message": "Sale processed successfully",
        "sale_id": sale.sale_id,
        "total": sale.total,
        "items": len(sale_items_objects),
        "customer_name": sale.customer_name,
        "date": sale.date,
    }


# =========================================================
# LIST SALES
# =========================================================
@router.get("", response_model=list[SaleSummaryResponse])
def list_sales(
    start_date: date | None = Query(None),
    end_date: date | None = Query(None),
    customer_name: str | None = Query(None),
    db: Session = Depends(get_db),
):
    query = db.query(Sale).filter(*_date_filters(*_day_range(start_date, end_date)))

    if customer_name:
        query = query.filter(Sale.customer_name.ilike(f"%{customer_name}%"))

    return query.order_by(Sale.date.desc()).all()


# =========================================================
# SALES STATS
# =========================================================
@router.get("/stats/summary", response_model=SalesStatsResponse)
def sales_stats(
    period: str | None = Query(None),
    start_date: date | None = Query(None),
    end_date: date | None = Query(None),
    db: Session = Depends(get_db),
):
    if start_date or end_date:
        start_dt, end_dt = _day_range(start_date, end_date)
    elif period is not None and period not in STATS_PERIODS:
        raise HTTPException(
            status_code=400,
            detail=f"period must be one of: {', '.join(STATS_PERIODS)}",
        )
    else:
        start_dt, end_dt = _period_range(period, date.today())

    base_filter = _date_filters(start_dt, end_dt)

    total_sales, revenue, active_days, total_customers = (
        db.query(
            func.count(Sale.sale_id),
            func.coalesce(func.sum(Sale.total), 0),
            func.count(func.distinct(func.date(Sale.date))),
            func.count(func.distinct(Sale.customer_name)),
        )
        .filter(*base_filter)
        .one()
    )

    revenue = float(revenue or 0)
    average_sale = round(revenue / total_sales, 2) if total_sales else 0.0

    payment_rows = (
        db.query(
            Sale.payment_method,
            func.count(Sale.sale_id),
            func.coalesce(func.sum(Sale.total), 0),
        )
        .filter(*base_filter)
        .group_by(Sale.payment_method)
        .all()
    )

    total_quantity = func.sum(SaleItem.quantity)
    product_rows = (
        db.query(
            SaleItem.product_name,
            SaleItem.product_category,
            total_quantity,
            func.coalesce(func.sum(SaleItem.subtotal), 0),
        )
        .join(Sale, SaleItem.sale_id == Sale.sale_id)
        .filter(*base_filter)
        .group_by(SaleItem.product_name, SaleItem.product_category)
        .order_by(total_quantity.desc())
        .limit(5)
        .all()
    )

    total_spent = func.sum(Sale.total)
    customer_rows = (
        db.query(Sale.customer_name, func.count(Sale.sale_id), total_spent)
        .filter(
            *base_filter,
            Sale.customer_name.isnot(None),
            Sale.customer_name != DEFAULT_CUSTOMER_NAME,
        )
        .group_by(Sale.customer_name)
        .order_by(total_spent.desc())
        .limit(5)
        .all()
    )

    return {
        "overview": {
            "total_sales": total_sales,
            "revenue": revenue,
            "average_sale": average_sale,
            "active_days": active_days,
            "total_customers": total_customers,
        },
        "payment_methods": [
            {"payment_method": method, "count": count, "total": float(amount or 0)}
            for method, count, amount in payment_rows
        ],
        "top_products": [
            {
                "product_name": name,
                "product_category": category,
                "total_quantity": int(quantity or 0),
                "total_amount": float(amount or 0),
            }
            for name, category, quantity, amount in product_rows
        ],
        "top_customers": [
            {"customer_name": name, "visits": visits, "total_spent": float(spent or 0)}
            for name, visits, spent in customer_rows
        ],
    }


# =========================================================
# GET SINGLE SALE
# =========================================================
@router.get("/{sale_id}", response_model=SaleResponse)
def get_sale(
    sale_id: int,
    db: Session = Depends(get_db),
):
    sale = (
        db.query(Sale)
        .options(joinedload(Sale.items))
        .filter(Sale.sale_id == sale_id)
        .first()
    )

    if not sale:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Sale not found",
        )

    return sale
