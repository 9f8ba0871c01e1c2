# shopdesk/routers/inventory.py

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from shopdesk.database import get_db
from shopdesk.models.customers import Customer
from shopdesk.models.inventory import InventoryEntry
from shopdesk.models.orders import Order
from shopdesk.schemas.inventory import (
    InventoryChangeResponse,
    InventoryCreate,
    InventoryCreatedResponse,
    InventoryDetailResponse,
    InventoryResponse,
    InventoryUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/inventario",
    tags=["Inventory"],
)


def _get_entry(db: Session, ticket: int) -> InventoryEntry:
    entry = (
        db.query(InventoryEntry)
        .filter(InventoryEntry.registro == ticket)
        .first()
    )

    if not entry:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Inventory entry not found",
        )

    return entry


@router.post("", response_model=InventoryCreatedResponse, status_code=201)
def add_inventory(
    inventory_data: InventoryCreate,
    db: Session = Depends(get_db),
):
    ticket = inventory_data.registro

    existing = (
        db.query(InventoryEntry)
        .filter(InventoryEntry.registro == ticket)
        .first()
    )
    if existing:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Ticket already registered",
        )

    # Copy the phone of the customer that owns the ticket, when known
    owner = (
        db.query(Customer.phone)
        .join(Order, Order.id == Customer.id)
        .filter(Order.ticket == ticket)
        .first()
    )
    phone = owner.phone if owner else None

    entry = InventoryEntry(registro=ticket, telefono=phone)

    try:
        db.add(entry)
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Ticket already registered",
        )

    db.refresh(entry)
    logger.info(f"Ticket {ticket} received | phone={'yes' if phone else 'no'}")

    return {
        "message": "Entry added",
        "id": entry.id,
        "telefono": entry.telefono,
    }


@router.get("", response_model=list[InventoryResponse])
def list_inventory(
    db: Session = Depends(get_db),
):
    return db.query(InventoryEntry).order_by(InventoryEntry.registro).all()


@router.get("/details", response_model=list[InventoryDetailResponse])
def list_inventory_details(
    db: Session = Depends(get_db),
):
    rows = (
        db.query(InventoryEntry.registro, Order.date, Customer.name, InventoryEntry.telefono)
        .outerjoin(Order, InventoryEntry.registro == Order.ticket)
        .outerjoin(Customer, Order.id == Customer.id)
        .order_by(InventoryEntry.registro)
        .all()
    )

    return [
        {
            "ticket": ticket,
            "date": order_date,
            "name": name or "Not available",
            "telefono": phone or "",
        }
        for ticket, order_date, name, phone in rows
    ]


@router.put("/details/{ticket}", response_model=InventoryChangeResponse)
def update_inventory(
    ticket: int,
    inventory_data: InventoryUpdate,
    db: Session = Depends(get_db),
):
    entry = _get_entry(db, ticket)

    entry.telefono = (inventory_data.telefono or "").strip() or None

    db.commit()

    return {"message": "Entry updated", "ticket": ticket}


@router.delete("/details/{ticket}", response_model=InventoryChangeResponse)
def delete_inventory(
    ticket: int,
    db: Session = Depends(get_db),
):
    entry = _get_entry(db, ticket)

    db.delete(entry)
    db.commit()

    logger.info(f"Ticket {ticket} removed from inventory")

    return {"message": "Entry deleted", "ticket": ticket}
