from __future__ import annotations

import logging

from sqlalchemy import text

from volfee.application.ports.fee_schedule_port import FeeSchedulePort
from volfee.domain.entities.history import FeeRecord
from volfee.infrastructure.db.mappers.history_mapper import map_row_to_fee_record


logger = logging.getLogger(__name__)

UPSERT_FEE_SQL = """
    INSERT INTO fee_schedule (pool_id, block_number, fee)
    VALUES (:pool_id, :block_number, :fee)
    ON CONFLICT (pool_id, block_number) DO UPDATE
    SET fee = excluded.fee
"""


class SqlFeeScheduleRepository(FeeSchedulePort):
    def __init__(self, engine):
        self._engine = engine

    def get_fee(self, *, pool_id: str, block_number: int) -> int | None:
        sql = """
            SELECT fee
            FROM fee_schedule
            WHERE pool_id = :pool_id
              AND block_number = :block_number
            LIMIT 1
        """
        params = {"pool_id": pool_id.lower(), "block_number": block_number}
        with self._engine.connect() as conn:
            row = conn.execute(text(sql), params).mappings().first()
        if row is None:
            return None
        return int(row["fee"])

    def get_latest_fee(self, *, pool_id: str, block_number: int) -> FeeRecord | None:
        sql = """
            SELECT pool_id, block_number, fee
            FROM fee_schedule
            WHERE pool_id = :pool_id
              AND block_number <= :block_number
            ORDER BY block_number DESC
            LIMIT 1
        """
        params = {"pool_id": pool_id.lower(), "block_number": block_number}
        with self._engine.connect() as conn:
            row = conn.execute(text(sql), params).mappings().first()
        if row is None:
            return None
        return map_row_to_fee_record(row)

    def record_fee(self, *, pool_id: str, block_number: int, fee: int) -> None:
        params = {"pool_id": pool_id.lower(), "block_number": block_number, "fee": fee}
        with self._engine.begin() as conn:
            conn.execute(text(UPSERT_FEE_SQL), params)
        logger.debug(
            "fee_schedule_repo: record_fee pool=%s block=%s fee=%s",
            pool_id,
            block_number,
            fee,
        )
