"""create_shop_tables

Revision ID: 4b1f0c2d9e7a
Revises:
Create Date: 2026-10-19 10:12:44.512903
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4b1f0c2d9e7a'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""

    # CUSTOMERS
    op.create_table(
        "customers",
        sa.Column("id", sa.Integer(), autoincrement=False, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("phone", sa.String(length=20), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_customers_name", "customers", ["name"], unique=False)

    # ORDERS
    op.create_table(
        "orders",
        sa.Column("number", sa.Integer(), autoincrement=False, nullable=False),
        sa.Column("ticket", sa.Integer(), nullable=True),
        sa.Column("total", sa.Numeric(10, 2), nullable=False),
        sa.Column("date", sa.Date(), nullable=True),
        sa.Column("id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["id"], ["customers.id"]),
        sa.PrimaryKeyConstraint("number"),
    )
    op.create_index("ix_orders_ticket", "orders", ["ticket"], unique=False)
    op.create_index("ix_orders_date", "orders", ["date"], unique=False)
    op.create_index("ix_orders_id", "orders", ["id"], unique=False)
    op.create_index("ix_orders_customer_date", "orders", ["id", "date"], unique=False)

    # ORDER DETAILS
    op.create_table(
        "order_details",
        sa.Column("detail_id", sa.Integer(), nullable=False),
        sa.Column("number", sa.Integer(), nullable=False),
        sa.Column("process", sa.String(length=255), nullable=True),
        sa.Column("description", sa.String(length=255), nullable=True),
        sa.Column("pieces", sa.Integer(), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("date", sa.Date(), nullable=True),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.ForeignKeyConstraint(["number"], ["orders.number"]),
        sa.PrimaryKeyConstraint("detail_id"),
    )
    op.create_index("ix_order_details_detail_id", "order_details", ["detail_id"], unique=False)
    op.create_index("ix_order_details_number", "order_details", ["number"], unique=False)
    op.create_index("ix_order_details_date", "order_details", ["date"], unique=False)

    # INVENTARIO
    op.create_table(
        "inventario",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("registro", sa.Integer(), nullable=False),
        sa.Column("telefono", sa.String(length=20), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_inventario_id", "inventario", ["id"], unique=False)
    op.create_index("ix_inventario_registro", "inventario", ["registro"], unique=True)

    # SALES
    op.create_table(
        "sales",
        sa.Column("sale_id", sa.Integer(), nullable=False),
        sa.Column("date", sa.DateTime(), nullable=False),
        sa.Column("total", sa.Numeric(10, 2), nullable=False),
        sa.Column("payment_method", sa.String(length=10), nullable=False),
        sa.Column("cash_received", sa.Numeric(10, 2), nullable=True),
        sa.Column("change_given", sa.Numeric(10, 2), nullable=True),
        sa.Column("customer_name", sa.String(length=255), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.CheckConstraint("payment_method IN ('cash', 'card')", name="ck_sales_payment_method"),
        sa.CheckConstraint("total >= 0", name="ck_sales_total_non_negative"),
        sa.PrimaryKeyConstraint("sale_id"),
    )
    op.create_index("ix_sales_sale_id", "sales", ["sale_id"], unique=False)
    op.create_index("ix_sales_date", "sales", ["date"], unique=False)
    op.create_index("ix_sales_customer_date", "sales", ["customer_name", "date"], unique=False)

    # SALE ITEMS
    op.create_table(
        "sale_items",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("sale_id", sa.Integer(), nullable=False),
        sa.Column("product_name", sa.String(length=255), nullable=False),
        sa.Column("product_category", sa.String(length=255), nullable=True),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("subtotal", sa.Numeric(10, 2), nullable=False),
        sa.CheckConstraint("quantity > 0", name="ck_sale_items_quantity_positive"),
        sa.CheckConstraint("price >= 0", name="ck_sale_items_price_non_negative"),
        sa.ForeignKeyConstraint(["sale_id"], ["sales.sale_id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_sale_items_id", "sale_items", ["id"], unique=False)
    op.create_index("ix_sale_items_sale_id", "sale_items", ["sale_id"], unique=False)


def downgrade() -> None:
    """Downgrade schema."""

    op.drop_index("ix_sale_items_sale_id", table_name="sale_items")
    op.drop_index("ix_sale_items_id", table_name="sale_items")
    op.drop_table("sale_items")

    op.drop_index("ix_sales_customer_date", table_name="sales")
    op.drop_index("ix_sales_date", table_name="sales")
    op.drop_index("ix_sales_sale_id", table_name="sales")
    op.drop_table("sales")

    op.drop_index("ix_inventario_registro", table_name="inventario")
    op.drop_index("ix_inventario_id", table_name="inventario")
    op.drop_table("inventario")

    op.drop_index("ix_order_details_date", table_name="order_details")
    op.drop_index("ix_order_details_number", table_name="order_details")
    op.drop_index("ix_order_details_detail_id", table_name="order_details")
    op.drop_table("order_details")

    op.drop_index("ix_orders_customer_date", table_name="orders")
    op.drop_index("ix_orders_id", table_name="orders")
    op.drop_index("ix_orders_date", table_name="orders")
    op.drop_index("ix_orders_ticket", table_name="orders")
    op.drop_table("orders")

    op.drop_index("ix_customers_name", table_name="customers")
    op.drop_table("customers")
