from datetime import date, timedelta
from decimal import Decimal

import pytest

from shopdesk.models.customers import Customer
from shopdesk.models.orders import Order
from shopdesk.models.order_details import OrderDetail
from shopdesk.routers.dashboard import calc_trend, rolling_windows, subtract_months


def order(number, customer_id, on, total, pieces):
    return [
        Order(number=number, ticket=number, total=Decimal(total), date=on, id=customer_id),
        OrderDetail(
            number=number,
            process="LAVADO",
            description="CAMISA",
            pieces=pieces,
            quantity=pieces,
            date=on,
            price=Decimal(total),
        ),
    ]


@pytest.mark.parametrize(
    "current, previous, expected",
    [
        (150, 100, 50.0),
        (50, 100, -50.0),
        (10, 0, 100.0),
        (0, 0, 0.0),
        (1, 3, -66.67),
        (None, None, 0.0),
    ],
)
def test_calc_trend(current, previous, expected):
    assert calc_trend(current, previous) == expected


def test_subtract_months_clamps_day():
    assert subtract_months(date(2024, 3, 31), 1) == date(2024, 2, 29)
    assert subtract_months(date(2024, 1, 15), 3) == date(2023, 10, 15)
    assert subtract_months(date(2024, 2, 29), 12) == date(2023, 2, 28)


def test_rolling_windows_are_adjacent():
    current, previous = rolling_windows(date(2024, 3, 14), 7)

    assert current == (date(2024, 3, 8), date(2024, 3, 14))
    assert previous == (date(2024, 3, 1), date(2024, 3, 7))


def test_range_mode(client, seed):
    seed(
        Customer(id=1, name="Ana"),
        *order(1, 1, date(2024, 1, 5), "30.00", 4),
        *order(2, 1, date(2024, 2, 5), "12.00", 2),
    )

    response = client.get("/api/dashboardStats", params={"from": "2024-01-01", "to": "2024-01-31"})

    assert response.status_code == 200
    assert response.json() == {"total_pieces_range": 4, "total_sales_range": 30.0}


def test_range_mode_rejects_inverted_range(client):
    response = client.get("/api/dashboardStats", params={"from": "2024-02-01", "to": "2024-01-01"})

    assert response.status_code == 400


def test_period_mode_compares_with_previous_window(client, seed):
    today = date.today()
    seed(
        Customer(id=1, name="Ana"),
        Customer(id=2, name="Luis"),
        *order(1, 1, today, "20.00", 3),
        *order(2, 2, today - timedelta(days=8), "10.00", 1),
    )

    response = client.get("/api/dashboardStats", params={"period": "semana"})

    assert response.status_code == 200
    body = response.json()
    assert body["period"] == "semana"
    assert body["total_sales"] == 20.0
    assert body["total_pieces"] == 3
    assert body["change_percentage"] == 100.0
    assert body["current"]["average_ticket"] == 20.0
    assert body["previous"]["orders"] == 1
    assert body["trends"]["orders"] == 0.0
    assert body["trends"]["pieces"] == 200.0


def test_period_mode_rejects_unknown_period(client):
    assert client.get("/api/dashboardStats", params={"period": "decada"}).status_code == 400


def test_year_mode(client, seed):
    today = date.today()
    seed(
        Customer(id=1, name="Ana"),
        Customer(id=2, name="Luis"),
        *order(1, 1, today, "50.00", 3),
        *order(2, 1, subtract_months(today, 12), "25.00", 1),
        *order(3, 2, date(today.year - 3, 6, 1), "5.00", 1),
    )

    response = client.get("/api/dashboardStats")

    assert response.status_code == 200
    body = response.json()
    assert body["total_sales"] == 50.0
    assert body["change_percentage"] == 100.0
    assert body["new_clients"] == 0
    assert body["new_clients_trend"] == -100.0
    assert body["pieces_trend"] == 200.0
    assert body["lost_clients"] == 1
    assert body["frequent_clients"] == 0
    assert body["inventory_count"] == 0
    assert body["info_range"].startswith("Compared with last year")
