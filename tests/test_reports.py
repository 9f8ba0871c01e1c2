from collections import Counter
from datetime import date
from decimal import Decimal

import pytest

from shopdesk.models.customers import Customer
from shopdesk.models.orders import Order
from shopdesk.models.order_details import OrderDetail
from shopdesk.routers.reports import category_of, fold_categories


def detail(number, description, pieces, quantity, on, price, process="LAVADO"):
    return OrderDetail(
        number=number,
        process=process,
        description=description,
        pieces=pieces,
        quantity=quantity,
        date=on,
        price=Decimal(price),
    )


@pytest.fixture()
def history(seed):
    seed(
        Customer(id=1, name="Ana"),
        Order(number=1, ticket=1, total=Decimal("30.00"), date=date(2024, 1, 5), id=1),
        Order(number=2, ticket=2, total=Decimal("12.50"), date=date(2024, 1, 20), id=1),
        Order(number=3, ticket=3, total=Decimal("8.00"), date=date(2024, 3, 9), id=1),
        detail(1, "2x CAMISA", 4, 2, date(2024, 1, 5), "20.00"),
        detail(1, "PANTALON", 1, 1, date(2024, 1, 5), "10.00"),
        detail(2, "2x CAMISA", 2, 1, date(2024, 1, 20), "12.50"),
        detail(3, "MANCHA", 1, 1, date(2024, 3, 9), "8.00", process="SPOT ON"),
    )


def test_category_of():
    assert category_of("camisa/blusa manga larga") == "CAMISABLUSA"
    assert category_of("SACO") == "SACO"


def test_fold_categories_keeps_top_five_and_groups_rest():
    counts = Counter({"A": 50, "B": 40, "C": 30, "D": 20, "E": 10, "F": 3, "G": 2})

    result = fold_categories(counts)

    assert [row["category"] for row in result] == ["A", "B", "C", "D", "E", "OTHER"]
    assert result[-1]["total_pieces"] == 5


def test_fold_categories_resorts_when_other_is_large():
    counts = Counter({"A": 10, "B": 9, "C": 8, "D": 7, "E": 6, "F": 5, "G": 5, "H": 5})

    result = fold_categories(counts)

    assert result[0] == {"category": "OTHER", "total_pieces": 15}
    assert len(result) == 6


def test_fold_categories_without_overflow():
    assert fold_categories(Counter({"A": 1})) == [{"category": "A", "total_pieces": 1}]


def test_daily_report(client, history):
    response = client.get("/api/dailyReport", params={"date": "2024-01-05"})

    assert response.status_code == 200
    assert response.json() == {"date": "2024-01-05", "total_money": 30.0, "total_pieces": 5}


def test_daily_report_empty_day(client, history):
    body = client.get("/api/dailyReport", params={"date": "2024-06-01"}).json()

    assert body["total_money"] == 0
    assert body["total_pieces"] == 0


def test_daily_report_requires_date(client):
    assert client.get("/api/dailyReport").status_code == 400


def test_sales_overview_groups_by_month(client, history):
    response = client.get("/api/salesOverview")

    assert response.json() == [
        {"month": "2024-01", "total_sales": 42.5},
        {"month": "2024-03", "total_sales": 8.0},
    ]


def test_category_distribution_current_year(client, seed):
    today = date.today()
    seed(
        Customer(id=1, name="Ana"),
        Order(number=1, ticket=1, total=Decimal("10.00"), date=today, id=1),
        detail(1, "CAMISA blanca", 3, 3, today, "6.00"),
        detail(1, "camisa azul", 2, 2, today, "4.00"),
        detail(1, "SACO/CHAQUETA", 1, 1, today, "5.00"),
        detail(1, "VESTIDO", 9, 9, date(today.year - 1, 6, 1), "5.00"),
    )

    response = client.get("/api/categoryDistribution")

    assert response.json() == [
        {"category": "CAMISA", "total_pieces": 5},
        {"category": "SACOCHAQUETA", "total_pieces": 1},
    ]


def test_products_excludes_spot_on_and_averages_price(client, history):
    response = client.get("/api/products")

    assert response.status_code == 200
    assert response.json() == [
        {"name": "2x CAMISA", "category": "LAVADO", "price": 10.83, "stock": 3, "sales": 6},
        {"name": "PANTALON", "category": "LAVADO", "price": 10.0, "stock": 1, "sales": 1},
    ]


def test_products_date_range(client, history):
    response = client.get("/api/products", params={"from": "2024-01-10", "to": "2024-01-31"})

    assert response.json() == [
        {"name": "2x CAMISA", "category": "LAVADO", "price": 12.5, "stock": 1, "sales": 2},
    ]


def test_products_rejects_inverted_range(client):
    response = client.get("/api/products", params={"from": "2024-02-01", "to": "2024-01-01"})

    assert response.status_code == 400
