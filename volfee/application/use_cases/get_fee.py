from __future__ import annotations

from volfee.application.dto.fee import GetFeeInput, GetFeeOutput
from volfee.application.ports.fee_schedule_port import FeeSchedulePort
from volfee.domain.services.pool_id import pool_id_for


class GetFeeUseCase:
    """Fee that applies to a pool at a block height.

    Returns 0 when nothing was computed for the height. With ``carry_forward``
    the most recent fee written at or before the height is returned instead.
    """

    def __init__(self, *, fee_schedule_port: FeeSchedulePort, carry_forward: bool = False):
        self._fee_schedule_port = fee_schedule_port
        self._carry_forward = carry_forward

    def execute(self, command: GetFeeInput) -> GetFeeOutput:
        pool_id = pool_id_for(command.key)

        if self._carry_forward:
            record = self._fee_schedule_port.get_latest_fee(
                pool_id=pool_id,
                block_number=command.block_number,
            )
            return GetFeeOutput(
                pool_id=pool_id,
                block_number=command.block_number,
                fee=record.fee if record is not None else 0,
                source_block_number=record.block_number if record is not None else None,
            )

        fee = self._fee_schedule_port.get_fee(pool_id=pool_id, block_number=command.block_number)
        return GetFeeOutput(
            pool_id=pool_id,
            block_number=command.block_number,
            fee=fee if fee is not None else 0,
            source_block_number=command.block_number if fee is not None else None,
        )
