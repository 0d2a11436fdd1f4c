from __future__ import annotations

import pytest
from sqlalchemy import create_engine, text
from sqlalchemy.exc import OperationalError
from sqlalchemy.pool import StaticPool

from volfee.application.dto.hook import AfterSwapInput
from volfee.application.hook import VolatilityFeeHook
from volfee.domain.entities.history import FeeRecord, TickObservation
from volfee.domain.entities.pool import PoolKey, SwapParams
from volfee.domain.services.fee_schedule import DYNAMIC_FEE_FLAG
from volfee.domain.services.pool_id import pool_id_for
from volfee.infrastructure.db.engine import create_schema
from volfee.infrastructure.db.repositories.fee_schedule_repository import SqlFeeScheduleRepository
from volfee.infrastructure.db.repositories.swap_history_repository import SqlSwapHistoryRepository
from volfee.infrastructure.db.repositories.tick_history_repository import SqlTickHistoryRepository
from volfee.infrastructure.memory.history_store import (
    InMemoryFeeScheduleRepository,
    InMemorySwapHistoryRepository,
    InMemoryTickHistoryRepository,
)
from volfee.infrastructure.memory.pool_state import InMemoryPoolStateReader


POOL_A = "0x" + "aa" * 32
POOL_B = "0x" + "bb" * 32
POOL_MANAGER = "0x000000000004444c5dc75cb358380d2e3de08a90"


def _sqlite_engine():
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        future=True,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    create_schema(engine)
    return engine


@pytest.fixture(params=["memory", "sql"])
def stores(request):
    if request.param == "memory":
        ticks, fees = InMemoryTickHistoryRepository(), InMemoryFeeScheduleRepository()
        return ticks, fees, InMemorySwapHistoryRepository(tick_history=ticks, fee_schedule=fees)
    engine = _sqlite_engine()
    return (
        SqlTickHistoryRepository(engine),
        SqlFeeScheduleRepository(engine),
        SqlSwapHistoryRepository(engine),
    )


def test_missing_entries_read_as_none(stores):
    ticks, fees, _ = stores

    assert ticks.get_tick(pool_id=POOL_A, block_number=1) is None
    assert fees.get_fee(pool_id=POOL_A, block_number=1) is None
    assert fees.get_latest_fee(pool_id=POOL_A, block_number=1) is None


def test_tick_write_for_same_block_overwrites(stores):
    ticks, _, _ = stores

    ticks.record_tick(pool_id=POOL_A, block_number=5, tick=100)
    ticks.record_tick(pool_id=POOL_A, block_number=5, tick=-250)

    assert ticks.get_tick(pool_id=POOL_A, block_number=5) == -250


def test_history_is_keyed_by_pool_and_block(stores):
    ticks, fees, _ = stores

    ticks.record_tick(pool_id=POOL_A, block_number=5, tick=100)
    ticks.record_tick(pool_id=POOL_B, block_number=5, tick=200)
    fees.record_fee(pool_id=POOL_A, block_number=5, fee=3000)

    assert ticks.get_tick(pool_id=POOL_B, block_number=5) == 200
    assert ticks.get_tick(pool_id=POOL_A, block_number=6) is None
    assert fees.get_fee(pool_id=POOL_B, block_number=5) is None


def test_list_ticks_is_ordered_and_filtered(stores):
    ticks, _, _ = stores
    for block, tick in [(7, 70), (3, 30), (5, 50)]:
        ticks.record_tick(pool_id=POOL_A, block_number=block, tick=tick)
    ticks.record_tick(pool_id=POOL_B, block_number=4, tick=40)

    assert ticks.list_ticks(pool_id=POOL_A) == [
        TickObservation(pool_id=POOL_A, block_number=3, tick=30),
        TickObservation(pool_id=POOL_A, block_number=5, tick=50),
        TickObservation(pool_id=POOL_A, block_number=7, tick=70),
    ]
    assert [row.block_number for row in ticks.list_ticks(pool_id=POOL_A, from_block=4, to_block=7)] == [5, 7]


def test_latest_fee_is_most_recent_at_or_before_block(stores):
    _, fees, _ = stores
    fees.record_fee(pool_id=POOL_A, block_number=100, fee=3000)
    fees.record_fee(pool_id=POOL_A, block_number=102, fee=3004)
    fees.record_fee(pool_id=POOL_A, block_number=102, fee=3008)

    assert fees.get_latest_fee(pool_id=POOL_A, block_number=101) == FeeRecord(
        pool_id=POOL_A, block_number=100, fee=3000
    )
    assert fees.get_latest_fee(pool_id=POOL_A, block_number=200) == FeeRecord(
        pool_id=POOL_A, block_number=102, fee=3008
    )
    assert fees.get_latest_fee(pool_id=POOL_A, block_number=99) is None


def test_latest_fee_ignores_other_pools(stores):
    _, fees, _ = stores
    fees.record_fee(pool_id=POOL_A, block_number=100, fee=3000)
    fees.record_fee(pool_id=POOL_B, block_number=101, fee=5000)
    fees.record_fee(pool_id=POOL_A, block_number=98, fee=2900)

    assert fees.get_latest_fee(pool_id=POOL_A, block_number=150) == FeeRecord(
        pool_id=POOL_A, block_number=100, fee=3000
    )
    assert fees.get_latest_fee(pool_id=POOL_A, block_number=99) == FeeRecord(
        pool_id=POOL_A, block_number=98, fee=2900
    )
    assert fees.get_latest_fee(pool_id=POOL_B, block_number=100) is None


def test_record_swap_writes_tick_and_fee_for_block(stores):
    ticks, fees, swaps = stores

    swaps.record_swap(pool_id=POOL_A, block_number=10, tick=-120, fee=3001)
    swaps.record_swap(pool_id=POOL_A, block_number=10, tick=-140, fee=3002)

    assert ticks.get_tick(pool_id=POOL_A, block_number=10) == -140
    assert fees.get_fee(pool_id=POOL_A, block_number=10) == 3002
    assert ticks.get_tick(pool_id=POOL_B, block_number=10) is None


def test_record_swap_keeps_no_tick_when_fee_write_fails():
    engine = _sqlite_engine()
    ticks = SqlTickHistoryRepository(engine)
    with engine.begin() as conn:
        conn.execute(text("DROP TABLE fee_schedule"))

    with pytest.raises(OperationalError):
        SqlSwapHistoryRepository(engine).record_swap(
            pool_id=POOL_A, block_number=100, tick=1000, fee=3000
        )

    assert ticks.get_tick(pool_id=POOL_A, block_number=100) is None


def test_after_swap_leaves_no_orphan_tick_when_fee_write_fails():
    engine = _sqlite_engine()
    ticks = SqlTickHistoryRepository(engine)
    state = InMemoryPoolStateReader()
    hook = VolatilityFeeHook(
        pool_manager_address=POOL_MANAGER,
        tick_history_port=ticks,
        fee_schedule_port=SqlFeeScheduleRepository(engine),
        swap_record_port=SqlSwapHistoryRepository(engine),
        pool_state_port=state,
    )
    key = PoolKey(
        currency0="0x0000000000000000000000000000000000000001",
        currency1="0x0000000000000000000000000000000000000002",
        fee=DYNAMIC_FEE_FLAG | 3000,
        tick_spacing=60,
        hooks="0x00000000000000000000000000000000000000c0",
    )
    pool_id = pool_id_for(key)
    state.set_current_tick(pool_id=pool_id, tick=1000)
    with engine.begin() as conn:
        conn.execute(text("DROP TABLE fee_schedule"))

    with pytest.raises(OperationalError):
        hook.after_swap(
            AfterSwapInput(
                sender=POOL_MANAGER,
                block_number=100,
                key=key,
                params=SwapParams(zero_for_one=True, amount_specified=-1000, max_slippage=100),
            )
        )

    assert ticks.get_tick(pool_id=pool_id, block_number=100) is None
