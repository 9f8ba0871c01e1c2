# =========================================================
# EXCEL IMPORTERS
#
# ORDERS:
# - Rows grouped by order number ("num")
# - First row of a group is the order header
# - Remaining rows are detail lines (trailing summary row dropped)
# - Each group is written inside its own SAVEPOINT
#
# CUSTOMERS:
# - Upsert by caller-assigned ID
# - Each row inside its own SAVEPOINT
#
# Both importers commit the whole file once at the end.
# =========================================================

import logging
from decimal import Decimal, InvalidOperation

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shopdesk.core.config import settings
from shopdesk.core.dates import convert_date, parse_iso_date
from shopdesk.core.pieces import calculate_pieces, to_int
from shopdesk.models.customers import Customer
from shopdesk.models.orders import Order
from shopdesk.models.order_details import OrderDetail

logger = logging.getLogger(__name__)


class ImportRowError(ValueError):
    pass


def to_decimal(value) -> Decimal:
    if value is None or value == "":
        return Decimal("0.00")
    try:
        return Decimal(str(value)).quantize(Decimal("0.01"))
    except InvalidOperation:
        raise ImportRowError(f"'{value}' is not a number")


def to_text(value) -> str | None:
    if value is None:
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    text = str(value).strip()
    return text or None


# =========================================================
# ORDERS
# =========================================================
def group_rows_by_order(rows: list[dict]) -> dict:
    groups = {}

    for row in rows:
        order_number = row.get("num")
        if order_number is None or order_number == "":
            continue
        groups.setdefault(order_number, []).append(row)

    return groups


def split_order_group(group: list[dict]):
    header = group[0]

    if len(group) > 2:
        details = group[1:-1]
    else:
        details = group[1:]

    return header, details


def _write_order_group(db: Session, order_number, header: dict, details: list[dict]):
    number = to_int(order_number, default=None)
    if number is None:
        raise ImportRowError(f"invalid order number '{order_number}'")

    customer_id = to_int(header.get("idcliente"), default=None)
    if customer_id is None:
        raise ImportRowError("missing customer id")

    order_date = parse_iso_date(convert_date(header.get("fecha")))
    if order_date is None:
        raise ImportRowError(f"unrecognised date '{header.get('fecha')}'")

    if db.get(Order, number) is not None:
        raise ImportRowError("order already exists")

    # Existing customers are left as they are
    if db.get(Customer, customer_id) is None:
        db.add(
            Customer(
                id=customer_id,
                name=to_text(header.get("clientebis")) or f"Customer {customer_id}",
            )
        )

    db.add(
        Order(
            number=number,
            ticket=to_int(header.get("numero"), default=None),
            total=to_decimal(header.get("total")),
            date=order_date,
            id=customer_id,
        )
    )

    for row in details:
        quantity = to_int(row.get("cantidad"))
        description = to_text(row.get("descripcio"))

        db.add(
            OrderDetail(
                number=number,
                process=to_text(row.get("proceso")),
                description=description,
                pieces=calculate_pieces(description, quantity),
                quantity=quantity,
                date=order_date,
                price=to_decimal(row.get("nimplinea")),
            )
        )

    db.flush()


def import_orders(db: Session, rows: list[dict]) -> dict:
    groups = group_rows_by_order(rows)
    total_orders = len(groups)

    if total_orders == 0:
        return {
            "message": "The file contains no orders to process.",
            "total": 0,
            "success": 0,
            "error_count": 0,
            "errors": [],
        }

    success = 0
    errors = []

    try:
        for order_number, group in groups.items():
            header, details = split_order_group(group)

            try:
                with db.begin_nested():
                    _write_order_group(db, order_number, header, details)
                success += 1

            except (ImportRowError, SQLAlchemyError) as exc:
                message = f"Order {order_number}: {exc}"
                logger.warning(f"Order import row failed | {message}")
                errors.append(message)

        db.commit()

    except Exception:
        db.rollback()
        logger.exception("Order import aborted, nothing was saved")
        raise

    message = f"File processed: {success} orders imported."
    if errors:
        message += f" {len(errors)} errors found."

    logger.info(f"Order import finished | total={total_orders} success={success} errors={len(errors)}")

    return {
        "message": message,
        "total": total_orders,
        "success": success,
        "error_count": len(errors),
        "errors": errors[: settings.ERROR_DETAILS_LIMIT],
    }


# =========================================================
# CUSTOMERS
# =========================================================
def _customer_fields(row: dict):
    name = to_text(row.get("Nombre"))
    phone = to_text(row.get("Teléfono")) or to_text(row.get("Telefono"))
    customer_id = to_int(row.get("ID"), default=None)
    return customer_id, name, phone


def import_customers(db: Session, rows: list[dict]) -> dict:
    updated = 0
    added = 0
    errors = 0
    error_details = []

    try:
        for row in rows:
            customer_id, name, phone = _customer_fields(row)

            if not name or customer_id is None:
                errors += 1
                error_details.append(
                    f"Row with ID {row.get('ID') or 'unknown'}: missing name or ID"
                )
                continue

            try:
                with db.begin_nested():
                    customer = db.get(Customer, customer_id)

                    if customer is not None:
                        customer.name = name
                        customer.phone = phone
                        db.flush()
                        updated += 1
                    else:
                        db.add(Customer(id=customer_id, name=name, phone=phone))
                        db.flush()
                        added += 1

            except SQLAlchemyError as exc:
                errors += 1
                error_details.append(f"Customer ID {customer_id}: {exc.__class__.__name__}")
                logger.warning(f"Customer import row failed | id={customer_id} | {exc}")

        db.commit()

    except Exception:
        db.rollback()
        logger.exception("Customer import rolled back")
        raise

    logger.info(f"Customer import finished | updated={updated} added={added} errors={errors}")

    return {
        "message": "File processed successfully",
        "total": len(rows),
        "updated": updated,
        "added": added,
        "errors": errors,
        "error_details": error_details[: settings.ERROR_DETAILS_LIMIT],
    }
