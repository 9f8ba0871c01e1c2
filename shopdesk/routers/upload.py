# =========================================================
# UPLOAD ROUTER (EXCEL IMPORTS)
#
# POST /upload            -> order export from the counter system
# POST /upload/customers  -> customer list (Nombre / Teléfono / ID)
# GET  /upload/check-structure, POST /upload/setup-table
#                         -> customers table schema management
# =========================================================

import logging

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile, status
from sqlalchemy import inspect, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shopdesk.core.importers import import_customers, import_orders
from shopdesk.core.rate_limiter import limiter
from shopdesk.core.spreadsheets import SpreadsheetError, read_first_sheet
from shopdesk.core.uploads import discard_upload, save_upload
from shopdesk.database import get_db
from shopdesk.models.customers import Customer
from shopdesk.schemas.upload import (
    CustomerImportResponse,
    OrderImportResponse,
    TableStructureResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/upload", tags=["Upload"])

CUSTOMERS_TABLE = Customer.__tablename__

MISSING_COLUMN_DDL = {
    "name": "ADD COLUMN name VARCHAR(255) NOT NULL DEFAULT ''",
    "phone": "ADD COLUMN phone VARCHAR(20)",
}


def _load_rows(path) -> list[dict]:
    try:
        rows = read_first_sheet(path)
    except SpreadsheetError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    if not rows:
        raise HTTPException(status_code=400, detail="The file contains no data")

    return rows


def _customer_columns(db: Session) -> list[str] | None:
    inspector = inspect(db.connection())

    if not inspector.has_table(CUSTOMERS_TABLE):
        return None

    return [column["name"].lower() for column in inspector.get_columns(CUSTOMERS_TABLE)]


def _add_columns(db: Session, columns: list[str]) -> int:
    for column in columns:
        db.execute(text(f"ALTER TABLE {CUSTOMERS_TABLE} {MISSING_COLUMN_DDL[column]}"))
    db.commit()
    return len(columns)


# =========================================================
# ORDER IMPORT
# =========================================================
@router.post("", response_model=OrderImportResponse)
@limiter.limit("10/minute")
def upload_orders(
    request: Request,
    excel_file: UploadFile = File(..., alias="excelFile"),
    db: Session = Depends(get_db),
):
    path = save_upload(excel_file)
    logger.info(f"Importing orders from {path.name}")

    try:
        rows = _load_rows(path)
    except HTTPException:
        discard_upload(path)
        raise

    try:
        return import_orders(db, rows)
    except SQLAlchemyError:
        raise HTTPException(status_code=500, detail="Order import failed, nothing was saved")


# =========================================================
# CUSTOMER IMPORT
# =========================================================
@router.post("/customers", response_model=CustomerImportResponse)
@limiter.limit("10/minute")
def upload_customers(
    request: Request,
    excel_file: UploadFile = File(..., alias="excelFile"),
    db: Session = Depends(get_db),
):
    path = save_upload(excel_file, prefix="customers_")
    logger.info(f"Importing customers from {path.name}")

    try:
        rows = _load_rows(path)
        return import_customers(db, rows)
    except SQLAlchemyError:
        raise HTTPException(status_code=500, detail="Customer import failed, nothing was saved")
    finally:
        discard_upload(path)


# =========================================================
# CUSTOMERS TABLE STRUCTURE
# =========================================================
@router.get("/check-structure", response_model=TableStructureResponse)
def check_customers_table(
    db: Session = Depends(get_db),
):
    columns = _customer_columns(db)

    if columns is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error": "The customers table does not exist", "needs_setup": True},
        )

    if "id" not in columns or "name" not in columns:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "The customers table lacks the required columns (id, name)",
                "needs_setup": True,
                "current_columns": columns,
            },
        )

    columns_added = 0
    if "phone" not in columns:
        try:
            columns_added = _add_columns(db, ["phone"])
        except SQLAlchemyError as exc:
            db.rollback()
            logger.error(f"Could not add phone column: {exc}")
            raise HTTPException(status_code=400, detail="Could not add the phone column")
        columns.append("phone")

    return {
        "success": True,
        "message": "The customers table is ready for import",
        "columns": columns,
        "columns_added": columns_added,
    }


@router.post("/setup-table", response_model=TableStructureResponse)
def setup_customers_table(
    db: Session = Depends(get_db),
):
    columns = _customer_columns(db)

    if columns is None:
        Customer.__table__.create(bind=db.connection())
        db.commit()
        logger.info("Created customers table")
        return {
            "success": True,
            "message": "Customers table created",
            "columns": [column.name for column in Customer.__table__.columns],
        }

    if "id" not in columns:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="The customers table has no id column; it must be recreated",
        )

    missing = [column for column in MISSING_COLUMN_DDL if column not in columns]

    try:
        columns_added = _add_columns(db, missing)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error(f"Customers table setup failed: {exc}")
        raise HTTPException(status_code=500, detail="Could not configure the customers table")

    return {
        "success": True,
        "message": "Customers table configured",
        "columns": columns + missing,
        "columns_added": columns_added,
    }
