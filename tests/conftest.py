# tests/conftest.py
# ---------------------------------------------------------------------
# - Every test gets a fresh in-memory SQLite database (StaticPool, one
#   shared connection), with SAVEPOINT support enabled
# - Sessions opened by tests must be closed before the next request;
#   use the `seed` fixture and short `with session_factory() as s:` blocks
# - Rate limiting is switched off; uploads go to a temp directory
# ---------------------------------------------------------------------

import os
from io import BytesIO

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")

import pytest
from fastapi.testclient import TestClient
from openpyxl import Workbook
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import shopdesk.models  # noqa: F401
from shopdesk.core.config import settings
from shopdesk.core.rate_limiter import limiter
from shopdesk.database import Base, configure_sqlite, get_db
from shopdesk.main import app

XLSX_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    configure_sqlite(engine)
    Base.metadata.create_all(bind=engine)

    yield engine

    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture()
def seed(session_factory):
    """Insert and commit model instances in a short-lived session."""

    def _seed(*objects):
        with session_factory() as session:
            session.add_all(objects)
            session.commit()

    return _seed


@pytest.fixture()
def upload_dir(tmp_path, monkeypatch):
    path = tmp_path / "uploads"
    path.mkdir()
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(path))
    return path


@pytest.fixture()
def client(session_factory, upload_dir):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    limiter.enabled = False

    yield TestClient(app)

    app.dependency_overrides.clear()
    limiter.enabled = True


@pytest.fixture()
def make_xlsx():
    """Build an .xlsx file in memory from a header row and data rows."""

    def _make(headers, rows) -> bytes:
        workbook = Workbook()
        sheet = workbook.active
        sheet.append(list(headers))
        for row in rows:
            sheet.append(list(row))

        output = BytesIO()
        workbook.save(output)
        return output.getvalue()

    return _make


@pytest.fixture()
def upload_xlsx(client):
    def _upload(url, content: bytes, filename="data.xlsx", content_type=XLSX_TYPE):
        return client.post(url, files={"excelFile": (filename, content, content_type)})

    return _upload
