"""initial_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19 10:12:31.402117

"""

from typing import Sequence, Union

import sqlalchemy as sa
import sqlmodel
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ORDER_STATUSES = ("DRAFT", "PENDING", "PROCESSING", "COMPLETED", "CANCELLED", "ON_HOLD")
DELIVERY_METHODS = ("PICKUP", "COURIER", "POST")


def upgrade() -> None:
    op.create_table(
        "order_sequence",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("current_value", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "orders",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("order_number", sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column("status", sa.Enum(*ORDER_STATUSES, name="orderstatus"), nullable=False),
        sa.Column("customer_name", sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column("customer_first_name", sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column("customer_last_name", sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column("customer_phone", sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column("customer_email", sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column("delivery_method", sa.Enum(*DELIVERY_METHODS, name="deliverymethod"), nullable=False),
        sa.Column("total_amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_orders_order_number"), "orders", ["order_number"], unique=True)
    op.create_index(op.f("ix_orders_status"), "orders", ["status"], unique=False)
    op.create_index(op.f("ix_orders_customer_email"), "orders", ["customer_email"], unique=False)

    op.create_table(
        "order_items",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("order_id", sa.Integer(), nullable=False),
        sa.Column("type", sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column("name", sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.Column("subtotal", sa.Numeric(10, 2), nullable=False),
        sa.Column("options", sa.Text(), nullable=False),
        sa.Column("files", sa.Text(), nullable=False),
        sa.ForeignKeyConstraint(["order_id"], ["orders.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_order_items_order_id"), "order_items", ["order_id"], unique=False)

    op.create_table(
        "print_sizes",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column("base_price", sa.Numeric(10, 2), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "volume_discounts",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("print_size_id", sa.Integer(), nullable=False),
        sa.Column("min_quantity", sa.Integer(), nullable=False),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.ForeignKeyConstraint(["print_size_id"], ["print_sizes.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("print_size_id", "min_quantity", name="uq_volume_discount_size_quantity"),
    )
    op.create_index(op.f("ix_volume_discounts_print_size_id"), "volume_discounts", ["print_size_id"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_volume_discounts_print_size_id"), table_name="volume_discounts")
    op.drop_table("volume_discounts")
    op.drop_table("print_sizes")

    op.drop_index(op.f("ix_order_items_order_id"), table_name="order_items")
    op.drop_table("order_items")

    op.drop_index(op.f("ix_orders_customer_email"), table_name="orders")
    op.drop_index(op.f("ix_orders_status"), table_name="orders")
    op.drop_index(op.f("ix_orders_order_number"), table_name="orders")
    op.drop_table("orders")

    op.drop_table("order_sequence")

    # Enum types only exist as separate objects on PostgreSQL
    bind = op.get_bind()
    sa.Enum(name="deliverymethod").drop(bind, checkfirst=True)
    sa.Enum(name="orderstatus").drop(bind, checkfirst=True)
