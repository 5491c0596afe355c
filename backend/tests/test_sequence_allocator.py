import pytest
from sqlalchemy.exc import OperationalError
from sqlmodel import select

from photoprint.models import SEQUENCE_ROW_ID, OrderSequence
from photoprint.services.sequence import SequenceAllocator, is_fallback_order_number

from conftest import NOW, FrozenClock

pytestmark = pytest.mark.anyio


class UnreachableSession:
    """Session whose database connection is gone."""

    def __init__(self) -> None:
        self.rolled_back = False

    async def execute(self, *args, **kwargs):
        raise OperationalError("UPDATE order_sequence", {}, ConnectionRefusedError("connection refused"))

    def add(self, instance) -> None:
        pass

    async def commit(self) -> None:
        raise OperationalError("COMMIT", {}, ConnectionRefusedError("connection refused"))

    async def rollback(self) -> None:
        self.rolled_back = True


async def test_first_allocation_creates_counter_with_start_value(session):
    allocator = SequenceAllocator(session, start_value=10001)

    assert await allocator.allocate() == "10001"

    counter = (await session.execute(select(OrderSequence))).scalars().one()
    assert counter.id == SEQUENCE_ROW_ID
    assert counter.current_value == 10001


async def test_allocations_are_unique_and_increasing(session):
    allocator = SequenceAllocator(session, start_value=10001)

    numbers = [await allocator.allocate() for _ in range(20)]

    assert len(set(numbers)) == 20
    assert [int(n) for n in numbers] == list(range(10001, 10021))


async def test_allocation_continues_from_existing_counter(session):
    session.add(OrderSequence(id=SEQUENCE_ROW_ID, current_value=10001))
    await session.commit()

    assert await SequenceAllocator(session, start_value=1).allocate() == "10002"


async def test_separate_allocators_share_the_counter(session_maker):
    async with session_maker() as first, session_maker() as second:
        a = await SequenceAllocator(first, start_value=500).allocate()
        b = await SequenceAllocator(second, start_value=500).allocate()
        c = await SequenceAllocator(first, start_value=500).allocate()

    assert (a, b, c) == ("500", "501", "502")


class RacingAllocator(SequenceAllocator):
    """Allocator that loses the race to create the counter row."""

    def __init__(self, session, rival_session_maker, **kwargs) -> None:
        super().__init__(session, **kwargs)
        self.rival_session_maker = rival_session_maker
        self.raced = False

    async def _increment(self) -> int | None:
        if self.raced:
            return await super()._increment()
        self.raced = True
        async with self.rival_session_maker() as rival:
            rival.add(OrderSequence(id=SEQUENCE_ROW_ID, current_value=self.start_value))
            await rival.commit()
        return None


async def test_concurrently_created_counter_is_incremented(session, session_maker):
    allocator = RacingAllocator(session, session_maker, start_value=10001)

    number = await allocator.allocate()

    assert allocator.raced
    assert number == "10002"
    assert not is_fallback_order_number(number)

    counter = (await session.execute(select(OrderSequence))).scalars().one()
    assert counter.current_value == 10002


async def test_unreachable_storage_falls_back_to_timestamp_number():
    session = UnreachableSession()
    allocator = SequenceAllocator(session, start_value=10001, clock=FrozenClock(NOW))  # type: ignore[arg-type]

    number = await allocator.allocate()

    assert number == f"REC-{int(NOW.timestamp() * 1000)}"
    assert is_fallback_order_number(number)
    assert session.rolled_back


def test_regular_numbers_are_not_fallback():
    assert not is_fallback_order_number("10001")
