from datetime import date
from decimal import Decimal

from shopdesk.models.customers import Customer
from shopdesk.models.inventory import InventoryEntry
from shopdesk.models.orders import Order


def seed_order(seed, ticket=5001, phone="5551234"):
    seed(
        Customer(id=7, name="Ana Perez", phone=phone),
        Order(number=100, ticket=ticket, total=Decimal("20.00"), date=date(2024, 1, 5), id=7),
    )


def test_add_copies_phone_from_ticket_owner(client, seed, session_factory):
    seed_order(seed)

    response = client.post("/api/inventario", json={"registro": 5001})

    assert response.status_code == 201
    assert response.json()["telefono"] == "5551234"

    with session_factory() as session:
        entry = session.query(InventoryEntry).one()
        assert entry.registro == 5001
        assert entry.telefono == "5551234"


def test_add_unknown_ticket_has_no_phone(client):
    response = client.post("/api/inventario", json={"registro": 42})

    assert response.status_code == 201
    assert response.json()["telefono"] is None


def test_add_duplicate_ticket_conflicts(client, session_factory):
    client.post("/api/inventario", json={"registro": 42})

    response = client.post("/api/inventario", json={"registro": 42})

    assert response.status_code == 409

    with session_factory() as session:
        assert session.query(InventoryEntry).count() == 1


def test_add_requires_numeric_ticket(client):
    assert client.post("/api/inventario", json={"registro": "abc"}).status_code == 400


def test_details_join_order_and_customer(client, seed):
    seed_order(seed)
    client.post("/api/inventario", json={"registro": 5001})
    client.post("/api/inventario", json={"registro": 9999})

    response = client.get("/api/inventario/details")

    assert response.status_code == 200
    assert response.json() == [
        {"ticket": 5001, "date": "2024-01-05", "name": "Ana Perez", "telefono": "5551234"},
        {"ticket": 9999, "date": None, "name": "Not available", "telefono": ""},
    ]


def test_update_and_delete(client, session_factory):
    client.post("/api/inventario", json={"registro": 42})

    response = client.put("/api/inventario/details/42", json={"telefono": " 5550000 "})
    assert response.status_code == 200
    assert response.json() == {"message": "Entry updated", "ticket": 42}

    listing = client.get("/api/inventario").json()
    assert listing[0]["telefono"] == "5550000"

    response = client.delete("/api/inventario/details/42")
    assert response.status_code == 200

    with session_factory() as session:
        assert session.query(InventoryEntry).count() == 0


def test_update_or_delete_unknown_ticket(client):
    assert client.put("/api/inventario/details/1", json={"telefono": "1"}).status_code == 404
    assert client.delete("/api/inventario/details/1").status_code == 404
