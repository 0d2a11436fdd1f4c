from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from volfee.domain.entities.history import FeeRecord, TickObservation


def map_row_to_tick_observation(row: Mapping[str, Any]) -> TickObservation:
    return TickObservation(
        pool_id=str(row["pool_id"]),
        block_number=int(row["block_number"]),
        tick=int(row["tick"]),
    )


def map_row_to_fee_record(row: Mapping[str, Any]) -> FeeRecord:
    return FeeRecord(
        pool_id=str(row["pool_id"]),
        block_number=int(row["block_number"]),
        fee=int(row["fee"]),
    )
