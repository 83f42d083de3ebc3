"""HistoryHandler: routes one extrinsic to the failed-transfer or summary path."""

import logging

from chainhistory.parser.calls.shapes import is_evm_transaction
from chainhistory.parser.history.base import HistoryStore
from chainhistory.parser.history.extrinsic import build_evm_extrinsic_entry, build_extrinsic_entry
from chainhistory.parser.history.failed import FailedTransferParser, materialize
from chainhistory.parser.utils.fees import FeeCalculator
from chainhistory.parser.utils.types import DecodedExtrinsic, HistoryEntry

logger = logging.getLogger(__name__)


class HistoryHandler:
    """Signed: failed transfers if any were attempted, otherwise an extrinsic summary.
    Unsigned: only successful EVM transactions are recorded.
    """

    def __init__(
        self,
        failed_parser: FailedTransferParser,
        fee_calculator: FeeCalculator,
        store: HistoryStore,
    ) -> None:
        self._failed_parser = failed_parser
        self._fee_calculator = fee_calculator
        self._store = store

    async def handle(self, extrinsic: DecodedExtrinsic) -> list[HistoryEntry]:
        if extrinsic.is_signed:
            units = self._failed_parser.find_failed_transfers(extrinsic)
            if units:
                return await materialize(units, extrinsic, self._store)
            entry = build_extrinsic_entry(extrinsic, self._fee_calculator)
        elif is_evm_transaction(extrinsic.method) and extrinsic.success:
            entry = build_evm_extrinsic_entry(extrinsic, self._fee_calculator)
        else:
            return []

        await self._store.save(entry)
        return [entry]
