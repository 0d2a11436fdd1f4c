from __future__ import annotations

import logging

from volfee.application.dto.hook import InitializePoolInput, InitializePoolOutput
from volfee.application.use_cases.hook_common import require_pool_manager
from volfee.domain.exceptions import InvalidFeeConfigurationError
from volfee.domain.services.fee_schedule import base_fee, is_dynamic_fee
from volfee.domain.services.pool_id import pool_id_for


logger = logging.getLogger(__name__)


class InitializePoolUseCase:
    def __init__(self, *, pool_manager_address: str):
        self._pool_manager_address = pool_manager_address

    def execute(self, command: InitializePoolInput) -> InitializePoolOutput:
        require_pool_manager(
            sender=command.sender,
            pool_manager_address=self._pool_manager_address,
        )

        fee = command.key.fee
        if not is_dynamic_fee(fee):
            logger.info("initialize_pool: rejected_static_fee fee=%s", fee)
            raise InvalidFeeConfigurationError("Pool must use a dynamic fee.")
        if base_fee(fee) == 0:
            logger.info("initialize_pool: rejected_zero_base_fee fee=%s", fee)
            raise InvalidFeeConfigurationError("Dynamic fee pool must carry a nonzero base fee.")

        pool_id = pool_id_for(command.key)
        logger.info("initialize_pool: accepted pool=%s base_fee=%s", pool_id, base_fee(fee))
        return InitializePoolOutput(pool_id=pool_id, base_fee=base_fee(fee))
