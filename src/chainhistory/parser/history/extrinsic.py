"""Extrinsic summaries: the -extrinsic history entry for everything that isn't a failed transfer."""

from typing import Any

from eth_utils import to_checksum_address

from chainhistory.domain.enums import HistorySuffix
from chainhistory.exceptions import MalformedEventData, MissingExecutedEvent
from chainhistory.parser.history.base import create_history_entry
from chainhistory.parser.utils.context import ExtrinsicContext
from chainhistory.parser.utils.fees import FeeCalculator
from chainhistory.parser.utils.types import DecodedExtrinsic, ExtrinsicSummary, HistoryEntry


def build_extrinsic_entry(extrinsic: DecodedExtrinsic, fee_calculator: FeeCalculator) -> HistoryEntry:
    """Summary entry for a signed extrinsic, attributed to its signer."""
    entry = create_history_entry(extrinsic, extrinsic.signer or "", HistorySuffix.EXTRINSIC)
    entry.extrinsic = ExtrinsicSummary(
        hash=extrinsic.hash,
        module=extrinsic.method.module,
        call=extrinsic.method.function,
        success=extrinsic.success,
        fee=fee_calculator.calculate(extrinsic),
    )
    return entry


def _exit_succeeded(exit_reason: Any) -> bool:
    # ExitReason decodes as {"Succeed": "Returned"} / {"Revert": ...}
    if isinstance(exit_reason, dict):
        return any(str(k).lower() == "succeed" for k in exit_reason)
    if isinstance(exit_reason, str):
        return exit_reason.lower() == "succeed"
    return False


def build_evm_extrinsic_entry(extrinsic: DecodedExtrinsic, fee_calculator: FeeCalculator) -> HistoryEntry:
    """Summary entry for an unsigned ethereum.transact, attributed to the EVM sender.

    Sender, hash and outcome come from ethereum.Executed(from, to, transaction_hash, exit_reason).
    """
    executed = ExtrinsicContext(extrinsic).find_event("ethereum", "Executed")
    if executed is None or len(executed.data) < 4:
        raise MissingExecutedEvent(extrinsic.extrinsic_id)

    try:
        address_from = to_checksum_address(str(executed.data[0]))
    except (TypeError, ValueError) as e:
        raise MalformedEventData("ethereum.Executed", f"sender is not an H160 address: {executed.data[0]!r}") from e
    tx_hash = str(executed.data[2])

    entry = create_history_entry(extrinsic, address_from, HistorySuffix.EXTRINSIC, hash=tx_hash)
    entry.extrinsic = ExtrinsicSummary(
        hash=tx_hash,
        module=extrinsic.method.module,
        call=extrinsic.method.function,
        success=_exit_succeeded(executed.data[3]),
        fee=fee_calculator.calculate(extrinsic, address_from),
    )
    return entry
