"""Order number sequence model."""

from sqlmodel import Field, SQLModel

# The counter lives in a single row with a fixed primary key
SEQUENCE_ROW_ID = 1


class OrderSequence(SQLModel, table=True):
    """Shared counter every order number is derived from.

    Only ever incremented with a single UPDATE ... RETURNING statement so
    that two allocators never observe the same value.
    """

    __tablename__ = "order_sequence"

    id: int = Field(default=SEQUENCE_ROW_ID, primary_key=True)
    current_value: int
