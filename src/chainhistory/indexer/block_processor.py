"""BlockProcessor: runs the history handler over one block's extrinsics."""

from __future__ import annotations

import json
import logging
import traceback

from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from chainhistory.db.repos.history_repo import HistoryRepo
from chainhistory.db.repos.parse_error_repo import ParseErrorRepo
from chainhistory.domain.enums import ParseErrorType
from chainhistory.exceptions import (
    CallTreeTooDeep,
    HistoryError,
    MalformedCallArguments,
    MalformedEventData,
    MissingExecutedEvent,
)
from chainhistory.parser.calls.normalizer import CallNormalizer
from chainhistory.parser.history.failed import FailedTransferParser
from chainhistory.parser.history.handler import HistoryHandler
from chainhistory.parser.utils.fees import FeeCalculator, FeeResolver
from chainhistory.parser.utils.multilocation import MultilocationResolver
from chainhistory.parser.utils.types import DecodedExtrinsic

logger = logging.getLogger(__name__)

_ERROR_TYPES: dict[type[HistoryError], ParseErrorType] = {
    MalformedCallArguments: ParseErrorType.MALFORMED_CALL_ARGUMENTS,
    CallTreeTooDeep: ParseErrorType.CALL_TREE_TOO_DEEP,
    MalformedEventData: ParseErrorType.MALFORMED_EVENT_DATA,
}


class BlockResult(BaseModel):
    processed: int = 0
    entries: int = 0
    errors: int = 0
    skipped: int = 0


class BlockProcessor:
    """Extrinsic → HistoryHandler → HistoryRepo, one extrinsic at a time.

    A HistoryError only abandons its own extrinsic; persistence errors propagate.
    """

    def __init__(
        self,
        session: AsyncSession,
        resolver: MultilocationResolver,
        fee_calculator: FeeCalculator,
        native_asset_id: str = "native",
        max_call_depth: int = 16,
    ) -> None:
        self._session = session
        self._errors = ParseErrorRepo(session)
        failed_parser = FailedTransferParser(
            normalizer=CallNormalizer(resolver, max_depth=max_call_depth),
            fee_calculator=fee_calculator,
            fee_resolver=FeeResolver(fee_calculator, resolver, native_asset_id),
        )
        self._handler = HistoryHandler(failed_parser, fee_calculator, HistoryRepo(session))

    async def process_block(self, extrinsics: list[DecodedExtrinsic]) -> BlockResult:
        result = BlockResult()
        for extrinsic in sorted(extrinsics, key=lambda x: x.idx):
            result.processed += 1
            try:
                entries = await self._handler.handle(extrinsic)
            except MissingExecutedEvent as e:
                logger.warning("Skipping %s: %s", extrinsic.extrinsic_id, e)
                result.skipped += 1
                continue
            except HistoryError as e:
                logger.exception("Failed to recover history for extrinsic %s", extrinsic.extrinsic_id)
                await self._record_error(extrinsic, e)
                result.errors += 1
                continue
            result.entries += len(entries)

        if extrinsics:
            logger.info(
                "Block %d: %d extrinsics, %d history entries, %d errors, %d skipped",
                extrinsics[0].block_number, result.processed, result.entries, result.errors, result.skipped,
            )
        return result

    async def _record_error(self, extrinsic: DecodedExtrinsic, error: HistoryError) -> None:
        error_type = _ERROR_TYPES.get(type(error), ParseErrorType.EXTRINSIC_PARSE_ERROR)
        diagnostics = {
            "extrinsic_id": extrinsic.extrinsic_id,
            "hash": extrinsic.hash,
            "module": extrinsic.method.module,
            "call": extrinsic.method.function,
            "signer": extrinsic.signer,
        }
        await self._errors.create(
            extrinsic_id=extrinsic.extrinsic_id,
            block_number=extrinsic.block_number,
            error_type=error_type.value,
            message=str(error),
            stack_trace=traceback.format_exc(),
            diagnostic_data=json.dumps(diagnostics),
        )
