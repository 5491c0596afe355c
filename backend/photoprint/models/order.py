"""Order and OrderItem database models."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import Column, DateTime, Enum, Numeric, Text
from sqlmodel import Field, Relationship, SQLModel

from photoprint.models.enums import DeliveryMethod, OrderStatus
from photoprint.utils.datetime_utils import utc_now


class Order(SQLModel, table=True):
    """Customer order (or a system-generated recovery order)."""

    __tablename__ = "orders"

    id: int | None = Field(default=None, primary_key=True)

    # Number shown to the customer, allocated from OrderSequence
    order_number: str = Field(unique=True, index=True)

    status: OrderStatus = Field(
        default=OrderStatus.DRAFT,
        sa_column=Column(
            Enum(OrderStatus, values_callable=lambda e: [x.value for x in e], name="orderstatus"),
            nullable=False,
            index=True,
        ),
    )

    customer_name: str | None = None
    customer_first_name: str | None = None
    customer_last_name: str | None = None
    customer_phone: str | None = None
    customer_email: str | None = Field(default=None, index=True)
    delivery_method: DeliveryMethod = Field(
        default=DeliveryMethod.PICKUP,
        sa_column=Column(
            Enum(DeliveryMethod, values_callable=lambda e: [x.value for x in e], name="deliverymethod"),
            nullable=False,
        ),
    )
    total_amount: Decimal = Field(default=Decimal("0"), sa_column=Column(Numeric(10, 2), nullable=False))
    notes: str | None = Field(default=None, sa_column=Column(Text, nullable=True))

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime(timezone=True), nullable=False))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime(timezone=True), nullable=False))

    # Relationships
    items: list["OrderItem"] = Relationship(
        back_populates="order",
        sa_relationship_kwargs={"order_by": "OrderItem.id"},
    )


class OrderItem(SQLModel, table=True):
    """One configured print job within an order.

    `files` is a JSON list of {"original": ..., "server": ...} references and
    is the authoritative record of which uploaded files are claimed.
    """

    __tablename__ = "order_items"

    id: int | None = Field(default=None, primary_key=True)
    order_id: int = Field(foreign_key="orders.id", index=True)
    type: str
    name: str
    quantity: int = 1
    price: Decimal = Field(default=Decimal("0"), sa_column=Column(Numeric(10, 2), nullable=False))
    subtotal: Decimal = Field(default=Decimal("0"), sa_column=Column(Numeric(10, 2), nullable=False))
    options: str = Field(default="{}", sa_column=Column(Text, nullable=False))
    files: str = Field(default="[]", sa_column=Column(Text, nullable=False))

    # Relationships
    order: Order = Relationship(back_populates="items")
