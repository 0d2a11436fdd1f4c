from __future__ import annotations

import logging

from sqlalchemy import text

from volfee.application.ports.tick_history_port import TickHistoryPort
from volfee.domain.entities.history import TickObservation
from volfee.infrastructure.db.mappers.history_mapper import map_row_to_tick_observation


logger = logging.getLogger(__name__)

UPSERT_TICK_SQL = """
    INSERT INTO tick_observations (pool_id, block_number, tick)
    VALUES (:pool_id, :block_number, :tick)
    ON CONFLICT (pool_id, block_number) DO UPDATE
    SET tick = excluded.tick
"""


class SqlTickHistoryRepository(TickHistoryPort):
    def __init__(self, engine):
        self._engine = engine

    def get_tick(self, *, pool_id: str, block_number: int) -> int | None:
        sql = """
            SELECT tick
            FROM tick_observations
            WHERE pool_id = :pool_id
              AND block_number = :block_number
            LIMIT 1
        """
        params = {"pool_id": pool_id.lower(), "block_number": block_number}
        with self._engine.connect() as conn:
            row = conn.execute(text(sql), params).mappings().first()
        if row is None:
            return None
        return int(row["tick"])

    def record_tick(self, *, pool_id: str, block_number: int, tick: int) -> None:
        params = {"pool_id": pool_id.lower(), "block_number": block_number, "tick": tick}
        with self._engine.begin() as conn:
            conn.execute(text(UPSERT_TICK_SQL), params)
        logger.debug(
            "tick_history_repo: record_tick pool=%s block=%s tick=%s",
            pool_id,
            block_number,
            tick,
        )

    def list_ticks(
        self,
        *,
        pool_id: str,
        from_block: int | None = None,
        to_block: int | None = None,
    ) -> list[TickObservation]:
        filters = ["pool_id = :pool_id"]
        params: dict[str, object] = {"pool_id": pool_id.lower()}
        if from_block is not None:
            filters.append("block_number >= :from_block")
            params["from_block"] = from_block
        if to_block is not None:
            filters.append("block_number <= :to_block")
            params["to_block"] = to_block

        sql = f"""
            SELECT pool_id, block_number, tick
            FROM tick_observations
            WHERE {" AND ".join(filters)}
            ORDER BY block_number ASC
        """
        with self._engine.connect() as conn:
            rows = conn.execute(text(sql), params).mappings().all()
        return [map_row_to_tick_observation(row) for row in rows]
