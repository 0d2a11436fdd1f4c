from __future__ import annotations

from volfee.application.dto.fee import ListTickHistoryInput, ListTickHistoryOutput
from volfee.application.ports.tick_history_port import TickHistoryPort
from volfee.domain.exceptions import HistoryQueryInputError


class ListTickHistoryUseCase:
    def __init__(self, *, tick_history_port: TickHistoryPort):
        self._tick_history_port = tick_history_port

    def execute(self, command: ListTickHistoryInput) -> ListTickHistoryOutput:
        if (
            command.from_block is not None
            and command.to_block is not None
            and command.from_block > command.to_block
        ):
            raise HistoryQueryInputError("from_block must not be greater than to_block.")

        observations = self._tick_history_port.list_ticks(
            pool_id=command.pool_id.lower(),
            from_block=command.from_block,
            to_block=command.to_block,
        )
        return ListTickHistoryOutput(pool_id=command.pool_id.lower(), observations=observations)
