# =========================================================
# DASHBOARD STATS ROUTER
#
# Three modes, picked from the query string:
# - from + to   -> pieces and revenue in a date range
# - period      -> rolling window vs the window right before it
# - (nothing)   -> year to date vs the same span last year
# =========================================================

import logging
from calendar import monthrange
from datetime import date, timedelta
from typing import Union

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import exists, extract, func
from sqlalchemy.orm import Session

from shopdesk.database import get_db
from shopdesk.models.customers import Customer
from shopdesk.models.inventory import InventoryEntry
from shopdesk.models.orders import Order
from shopdesk.models.order_details import OrderDetail
from shopdesk.schemas.report import (
    PeriodStatsResponse,
    RangeStatsResponse,
    YearStatsResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dashboardStats", tags=["Dashboard"])

PERIOD_DAYS = {
    "semana": 7,
    "mes": 30,
    "trimestre": 90,
    "año": 365,
}

FREQUENT_CLIENT_MIN_ORDERS = 5
FREQUENT_CLIENT_MONTHS = 6
LOST_CLIENT_MONTHS = 3


def calc_trend(current, previous) -> float:
    """Percentage change from previous to current, rounded to 2 places.

    A zero baseline yields 100 when there is any current value, else 0.
    """
    current = float(current or 0)
    previous = float(previous or 0)

    if previous == 0:
        return 100.0 if current > 0 else 0.0

    return round((current - previous) / previous * 100, 2)


def subtract_months(value: date, months: int) -> date:
    month_index = value.year * 12 + (value.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(value.day, monthrange(year, month)[1])
    return date(year, month, day)


def rolling_windows(today: date, days: int):
    current_start = today - timedelta(days=days - 1)
    previous_end = current_start - timedelta(days=1)
    previous_start = previous_end - timedelta(days=days - 1)
    return (current_start, today), (previous_start, previous_end)


# =========================================================
# AGGREGATES
# =========================================================
def _order_totals(db: Session, start: date, end: date):
    count, total = (
        db.query(func.count(Order.number), func.coalesce(func.sum(Order.total), 0))
        .filter(Order.date.between(start, end))
        .one()
    )
    return int(count or 0), float(total or 0)


def _distinct_customers(db: Session, start: date, end: date) -> int:
    return (
        db.query(func.count(func.distinct(Order.id)))
        .filter(Order.date.between(start, end))
        .scalar()
    ) or 0


def _pieces(db: Session, start: date, end: date) -> int:
    pieces = (
        db.query(func.coalesce(func.sum(OrderDetail.pieces), 0))
        .join(Order, OrderDetail.number == Order.number)
        .filter(Order.date.between(start, end))
        .scalar()
    )
    return int(pieces or 0)


def _new_clients(db: Session, start: date, end: date) -> int:
    """Customers whose first ever order falls inside the range."""
    first_orders = (
        db.query(Order.id)
        .group_by(Order.id)
        .having(func.min(Order.date).between(start, end))
        .subquery()
    )
    return db.query(func.count()).select_from(first_orders).scalar() or 0


def _frequent_clients(db: Session, start: date, end: date) -> int:
    frequent = (
        db.query(Order.id)
        .filter(Order.date.between(start, end))
        .group_by(Order.id)
        .having(func.count(Order.number) > FREQUENT_CLIENT_MIN_ORDERS)
        .subquery()
    )
    return db.query(func.count()).select_from(frequent).scalar() or 0


def _lost_clients(db: Session, since: date) -> int:
    """Customers with orders, none of them after `since`."""
    has_orders = exists().where(Order.id == Customer.id)
    recent = exists().where(Order.id == Customer.id, Order.date > since)
    return (
        db.query(func.count(Customer.id))
        .filter(has_orders, ~recent)
        .scalar()
    ) or 0


def _snapshot(db: Session, start: date, end: date) -> dict:
    orders, sales = _order_totals(db, start, end)
    return {
        "orders": orders,
        "sales": sales,
        "average_ticket": round(sales / orders, 2) if orders else 0.0,
        "customers": _distinct_customers(db, start, end),
        "pieces": _pieces(db, start, end),
    }


# =========================================================
# MODES
# =========================================================
def _range_stats(db: Session, start: date, end: date) -> dict:
    _, total_sales = _order_totals(db, start, end)
    return {
        "total_pieces_range": _pieces(db, start, end),
        "total_sales_range": total_sales,
    }


def _period_stats(db: Session, period: str, today: date) -> dict:
    (current_start, current_end), (previous_start, previous_end) = rolling_windows(
        today, PERIOD_DAYS[period]
    )
    logger.info(
        f"Dashboard period {period} | current {current_start}..{current_end} "
        f"previous {previous_start}..{previous_end}"
    )

    current = _snapshot(db, current_start, current_end)
    previous = _snapshot(db, previous_start, previous_end)

    trends = {
        key: calc_trend(current[key], previous[key])
        for key in ("orders", "average_ticket", "customers", "pieces", "sales")
    }

    return {
        "period": period,
        "current": current,
        "previous": previous,
        "trends": trends,
        "total_sales": current["sales"],
        "new_clients": current["customers"],
        "total_pieces": current["pieces"],
        "change_percentage": trends["sales"],
    }


def _year_stats(db: Session, today: date) -> dict:
    last_order_date = (
        db.query(func.max(Order.date))
        .filter(extract("year", Order.date) == today.year)
        .scalar()
    ) or today

    current_start = date(today.year, 1, 1)
    current_end = last_order_date
    previous_start = date(today.year - 1, 1, 1)
    previous_end = subtract_months(current_end, 12)

    _, current_sales = _order_totals(db, current_start, current_end)
    _, previous_sales = _order_totals(db, previous_start, previous_end)

    new_clients = _new_clients(db, current_start, current_end)
    previous_new_clients = _new_clients(db, previous_start, previous_end)

    total_pieces = _pieces(db, current_start, current_end)
    previous_pieces = _pieces(db, previous_start, previous_end)

    inventory_count = db.query(func.count(InventoryEntry.id)).scalar() or 0

    frequent_clients = _frequent_clients(
        db, subtract_months(current_end, FREQUENT_CLIENT_MONTHS), current_end
    )
    lost_clients = _lost_clients(db, subtract_months(current_end, LOST_CLIENT_MONTHS))

    return {
        "total_sales": round(current_sales, 2),
        "new_clients": new_clients,
        "total_pieces": total_pieces,
        "change_percentage": calc_trend(current_sales, previous_sales),
        "new_clients_trend": calc_trend(new_clients, previous_new_clients),
        "pieces_trend": calc_trend(total_pieces, previous_pieces),
        "inventory_count": inventory_count,
        "frequent_clients": frequent_clients,
        "lost_clients": lost_clients,
        "info_range": f"Compared with last year ({previous_start} to {previous_end})",
    }


@router.get("", response_model=Union[RangeStatsResponse, PeriodStatsResponse, YearStatsResponse])
def dashboard_stats(
    date_from: date | None = Query(None, alias="from"),
    date_to: date | None = Query(None, alias="to"),
    period: str | None = Query(None),
    db: Session = Depends(get_db),
):
    if date_from and date_to:
        if date_to < date_from:
            raise HTTPException(status_code=400, detail="'to' must be on or after 'from'")
        return _range_stats(db, date_from, date_to)

    if period:
        if period not in PERIOD_DAYS:
            raise HTTPException(
                status_code=400,
                detail=f"period must be one of: {', '.join(PERIOD_DAYS)}",
            )
        return _period_stats(db, period, date.today())

    return _year_stats(db, date.today())
