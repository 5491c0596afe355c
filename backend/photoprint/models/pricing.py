"""Print size and volume discount models."""

from decimal import Decimal

from sqlalchemy import Column, Numeric, UniqueConstraint
from sqlmodel import Field, Relationship, SQLModel


class PrintSize(SQLModel, table=True):
    """Print format offered in the storefront (e.g. 10x15)."""

    __tablename__ = "print_sizes"

    id: int | None = Field(default=None, primary_key=True)
    name: str
    base_price: Decimal = Field(sa_column=Column(Numeric(10, 2), nullable=False))

    discounts: list["VolumeDiscount"] = Relationship(back_populates="print_size")


class VolumeDiscount(SQLModel, table=True):
    """Unit price applied once the ordered quantity reaches min_quantity."""

    __tablename__ = "volume_discounts"
    __table_args__ = (UniqueConstraint("print_size_id", "min_quantity", name="uq_volume_discount_size_quantity"),)

    id: int | None = Field(default=None, primary_key=True)
    print_size_id: int = Field(foreign_key="print_sizes.id", index=True)
    min_quantity: int
    price: Decimal = Field(sa_column=Column(Numeric(10, 2), nullable=False))

    print_size: PrintSize = Relationship(back_populates="discounts")
