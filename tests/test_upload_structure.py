from sqlalchemy import inspect, text


def columns_of(engine):
    return {column["name"] for column in inspect(engine).get_columns("customers")}


def test_check_structure_ready(client):
    response = client.get("/api/upload/check-structure")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert set(body["columns"]) == {"id", "name", "phone"}
    assert body["columns_added"] == 0


def test_check_structure_adds_phone(client, engine):
    with engine.begin() as connection:
        connection.execute(text("DROP TABLE customers"))
        connection.execute(text("CREATE TABLE customers (id INTEGER PRIMARY KEY, name VARCHAR(255) NOT NULL)"))

    response = client.get("/api/upload/check-structure")

    assert response.status_code == 200
    assert response.json()["columns_added"] == 1
    assert "phone" in columns_of(engine)


def test_check_structure_missing_table(client, engine):
    with engine.begin() as connection:
        connection.execute(text("DROP TABLE customers"))

    response = client.get("/api/upload/check-structure")

    assert response.status_code == 404
    assert response.json()["detail"]["needs_setup"] is True


def test_setup_table_creates_missing_table(client, engine):
    with engine.begin() as connection:
        connection.execute(text("DROP TABLE customers"))

    response = client.post("/api/upload/setup-table")

    assert response.status_code == 200
    assert response.json()["message"] == "Customers table created"
    assert columns_of(engine) == {"id", "name", "phone"}


def test_setup_table_adds_missing_columns(client, engine):
    with engine.begin() as connection:
        connection.execute(text("DROP TABLE customers"))
        connection.execute(text("CREATE TABLE customers (id INTEGER PRIMARY KEY)"))

    response = client.post("/api/upload/setup-table")

    assert response.status_code == 200
    assert response.json()["columns_added"] == 2
    assert columns_of(engine) == {"id", "name", "phone"}
