from __future__ import annotations

import logging

from sqlalchemy import text

from volfee.application.ports.swap_record_port import SwapRecordPort
from volfee.infrastructure.db.repositories.fee_schedule_repository import UPSERT_FEE_SQL
from volfee.infrastructure.db.repositories.tick_history_repository import UPSERT_TICK_SQL


logger = logging.getLogger(__name__)


class SqlSwapHistoryRepository(SwapRecordPort):
    def __init__(self, engine):
        self._engine = engine

    def record_swap(self, *, pool_id: str, block_number: int, tick: int, fee: int) -> None:
        pool_id = pool_id.lower()
        with self._engine.begin() as conn:
            conn.execute(
                text(UPSERT_TICK_SQL),
                {"pool_id": pool_id, "block_number": block_number, "tick": tick},
            )
            conn.execute(
                text(UPSERT_FEE_SQL),
                {"pool_id": pool_id, "block_number": block_number, "fee": fee},
            )
        logger.debug(
            "swap_history_repo: record_swap pool=%s block=%s tick=%s fee=%s",
            pool_id,
            block_number,
            tick,
            fee,
        )
