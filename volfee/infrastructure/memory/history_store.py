from __future__ import annotations

from bisect import bisect_right, insort

from volfee.application.ports.fee_schedule_port import FeeSchedulePort
from volfee.application.ports.swap_record_port import SwapRecordPort
from volfee.application.ports.tick_history_port import TickHistoryPort
from volfee.domain.entities.history import FeeRecord, TickObservation


class InMemoryTickHistoryRepository(TickHistoryPort):
    def __init__(self):
        self._ticks: dict[str, dict[int, int]] = {}

    def get_tick(self, *, pool_id: str, block_number: int) -> int | None:
        return self._ticks.get(pool_id, {}).get(block_number)

    def record_tick(self, *, pool_id: str, block_number: int, tick: int) -> None:
        self._ticks.setdefault(pool_id, {})[block_number] = tick

    def list_ticks(
        self,
        *,
        pool_id: str,
        from_block: int | None = None,
        to_block: int | None = None,
    ) -> list[TickObservation]:
        ticks = self._ticks.get(pool_id, {})
        return [
            TickObservation(pool_id=pool_id, block_number=block, tick=ticks[block])
            for block in sorted(ticks)
            if (from_block is None or block >= from_block)
            and (to_block is None or block <= to_block)
        ]


class InMemoryFeeScheduleRepository(FeeSchedulePort):
    def __init__(self):
        self._fees: dict[str, dict[int, int]] = {}
        # Sorted written heights per pool, for carry-forward lookups.
        self._blocks: dict[str, list[int]] = {}

    def get_fee(self, *, pool_id: str, block_number: int) -> int | None:
        return self._fees.get(pool_id, {}).get(block_number)

    def get_latest_fee(self, *, pool_id: str, block_number: int) -> FeeRecord | None:
        blocks = self._blocks.get(pool_id, [])
        index = bisect_right(blocks, block_number)
        if index == 0:
            return None
        latest = blocks[index - 1]
        return FeeRecord(pool_id=pool_id, block_number=latest, fee=self._fees[pool_id][latest])

    def record_fee(self, *, pool_id: str, block_number: int, fee: int) -> None:
        fees = self._fees.setdefault(pool_id, {})
        if block_number not in fees:
            insort(self._blocks.setdefault(pool_id, []), block_number)
        fees[block_number] = fee


class InMemorySwapHistoryRepository(SwapRecordPort):
    def __init__(
        self,
        *,
        tick_history: InMemoryTickHistoryRepository,
        fee_schedule: InMemoryFeeScheduleRepository,
    ):
        self._tick_history = tick_history
        self._fee_schedule = fee_schedule

    def record_swap(self, *, pool_id: str, block_number: int, tick: int, fee: int) -> None:
        self._tick_history.record_tick(pool_id=pool_id, block_number=block_number, tick=tick)
        self._fee_schedule.record_fee(pool_id=pool_id, block_number=block_number, fee=fee)
