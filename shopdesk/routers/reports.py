# =========================================================
# REPORTS ROUTER
#
# Order-side reporting consumed by the dashboard:
# - daily money / pieces
# - monthly revenue overview
# - garment category distribution
# - per-service product summary
# =========================================================

from collections import Counter
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import extract, func
from sqlalchemy.orm import Session

from shopdesk.database import get_db
from shopdesk.models.orders import Order
from shopdesk.models.order_details import OrderDetail
from shopdesk.schemas.report import (
    CategoryPiecesResponse,
    DailyReportResponse,
    MonthlySalesResponse,
    ProductSummaryResponse,
)

router = APIRouter(tags=["Reports"])

TOP_CATEGORIES = 5
OTHER_CATEGORY = "OTHER"
EXCLUDED_PROCESS = "%spot on%"


def category_of(description: str) -> str:
    """First word of the description, upper-cased, without slashes."""
    return description.upper().split(" ", 1)[0].replace("/", "")


def fold_categories(pieces_by_category: Counter, top: int = TOP_CATEGORIES) -> list[dict]:
    ranked = pieces_by_category.most_common()

    results = [
        {"category": category, "total_pieces": pieces}
        for category, pieces in ranked[:top]
    ]

    rest = sum(pieces for _, pieces in ranked[top:])
    if len(ranked) > top:
        results.append({"category": OTHER_CATEGORY, "total_pieces": rest})

    return sorted(results, key=lambda row: row["total_pieces"], reverse=True)


# =========================================================
# DAILY REPORT
# =========================================================
@router.get("/dailyReport", response_model=DailyReportResponse)
def daily_report(
    report_date: date = Query(..., alias="date"),
    db: Session = Depends(get_db),
):
    total_money = (
        db.query(func.coalesce(func.sum(Order.total), 0))
        .filter(Order.date == report_date)
        .scalar()
    )

    total_pieces = (
        db.query(func.coalesce(func.sum(OrderDetail.pieces), 0))
        .filter(OrderDetail.date == report_date)
        .scalar()
    )

    return {
        "date": report_date.isoformat(),
        "total_money": float(total_money or 0),
        "total_pieces": int(total_pieces or 0),
    }


# =========================================================
# MONTHLY SALES OVERVIEW
# =========================================================
@router.get("/salesOverview", response_model=list[MonthlySalesResponse])
def sales_overview(
    db: Session = Depends(get_db),
):
    year = extract("year", Order.date)
    month = extract("month", Order.date)

    rows = (
        db.query(year, month, func.coalesce(func.sum(Order.total), 0))
        .filter(Order.date.isnot(None))
        .group_by(year, month)
        .order_by(year, month)
        .all()
    )

    return [
        {"month": f"{int(y):04d}-{int(m):02d}", "total_sales": float(total or 0)}
        for y, m, total in rows
    ]


# =========================================================
# CATEGORY DISTRIBUTION (CURRENT YEAR)
# =========================================================
@router.get("/categoryDistribution", response_model=list[CategoryPiecesResponse])
def category_distribution(
    db: Session = Depends(get_db),
):
    today = date.today()

    rows = (
        db.query(OrderDetail.description, func.coalesce(func.sum(OrderDetail.pieces), 0))
        .filter(
            OrderDetail.description.isnot(None),
            OrderDetail.date.between(today.replace(month=1, day=1), today.replace(month=12, day=31)),
        )
        .group_by(OrderDetail.description)
        .all()
    )

    pieces_by_category = Counter()
    for description, pieces in rows:
        pieces_by_category[category_of(description)] += int(pieces or 0)

    return fold_categories(pieces_by_category)


# =========================================================
# PRODUCT SUMMARY
# =========================================================
@router.get("/products", response_model=list[ProductSummaryResponse])
def product_summary(
    date_from: date | None = Query(None, alias="from"),
    date_to: date | None = Query(None, alias="to"),
    db: Session = Depends(get_db),
):
    if date_from and date_to and date_to < date_from:
        raise HTTPException(status_code=400, detail="'to' must be on or after 'from'")

    total_pieces = func.coalesce(func.sum(OrderDetail.pieces), 0)

    query = (
        db.query(
            OrderDetail.description,
            OrderDetail.process,
            func.coalesce(func.sum(OrderDetail.price), 0),
            func.coalesce(func.sum(OrderDetail.quantity), 0),
            total_pieces,
        )
        .filter(
            OrderDetail.description.isnot(None),
            OrderDetail.process.not_ilike(EXCLUDED_PROCESS),
        )
    )

    if date_from and date_to:
        query = query.filter(OrderDetail.date.between(date_from, date_to))

    rows = (
        query
        .group_by(OrderDetail.description, OrderDetail.process)
        .order_by(total_pieces.desc())
        .all()
    )

    results = []
    for description, process, price_sum, quantity_sum, pieces in rows:
        quantity_sum = int(quantity_sum or 0)
        unit_price = float(price_sum) / quantity_sum if quantity_sum else 0.0

        results.append({
            "name": description,
            "category": process,
            "price": round(unit_price, 2),
            "stock": quantity_sum,
            "sales": int(pieces or 0),
        })

    return results
