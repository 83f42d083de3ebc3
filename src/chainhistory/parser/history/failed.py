"""Failed transfers: recover attempted transfers/swaps from a failed extrinsic's call tree.

A successful transfer emits a Transfer event and is recorded by the event
handlers. A failed one leaves only its call arguments, so the call tree is
normalized here instead.
"""

import logging
from typing import Any

from chainhistory.domain.enums import HistorySuffix
from chainhistory.parser.calls.normalizer import CallNormalizer
from chainhistory.parser.history.base import HistoryStore, create_history_entry
from chainhistory.parser.utils.fees import FeeCalculator, FeeResolver
from chainhistory.parser.utils.types import (
    AssetTransfer,
    DecodedExtrinsic,
    HistoryEntry,
    NativeTransfer,
    NormalizedUnit,
    Swap,
)

logger = logging.getLogger(__name__)


class FailedTransferParser:
    """Failed signed extrinsic → NormalizedUnits → -from/-to history entries."""

    def __init__(
        self,
        normalizer: CallNormalizer,
        fee_calculator: FeeCalculator,
        fee_resolver: FeeResolver,
    ) -> None:
        self._normalizer = normalizer
        self._fee_calculator = fee_calculator
        self._fee_resolver = fee_resolver

    def find_failed_transfers(self, extrinsic: DecodedExtrinsic) -> list[NormalizedUnit]:
        """Normalized units for a failed signed extrinsic; [] when it succeeded or moved nothing."""
        if extrinsic.success or extrinsic.signer is None:
            return []

        sender = extrinsic.signer
        # Fee is charged once per extrinsic, however many calls the batch holds.
        # Transfers have no fee-asset field and always report the native fee.
        native_fee = self._fee_calculator.calculate(extrinsic)
        swap_fee = self._fee_resolver.resolve(extrinsic)

        def on_transfer(is_transfer_all: bool, destination: str, amount: int, asset_id: str | None) -> list[NormalizedUnit]:
            fields = {
                "from_address": sender,
                "to_address": destination,
                "amount": str(amount),
                "fee": native_fee,
            }
            transfer = AssetTransfer(asset_id=asset_id, **fields) if asset_id else NativeTransfer(**fields)
            return [NormalizedUnit(is_transfer_all=is_transfer_all, transfer=transfer)]

        def on_swap(path: list[Any], amount_in: int, amount_out: int, receiver: str) -> list[NormalizedUnit]:
            endpoints = self._normalizer.resolve_endpoints(path)
            if endpoints is None:
                return []
            asset_id_in, asset_id_out = endpoints
            swap = Swap(
                sender=sender,
                receiver=receiver,
                asset_id_in=asset_id_in,
                amount_in=str(amount_in),
                asset_id_out=asset_id_out,
                amount_out=str(amount_out),
                asset_id_fee=swap_fee.asset_id,
                fee=swap_fee.amount,
            )
            return [NormalizedUnit(is_transfer_all=False, transfer=swap)]

        return self._normalizer.normalize(extrinsic.method, on_transfer, on_swap)


def needs_receiver_entry(unit: NormalizedUnit) -> bool:
    """Everything except a plain transfer-all to oneself gets a -to entry."""
    if unit.is_transfer_all and not unit.is_swap:
        return unit.sender != unit.receiver
    return True


async def materialize(
    units: list[NormalizedUnit],
    extrinsic: DecodedExtrinsic,
    store: HistoryStore,
) -> list[HistoryEntry]:
    """Build and save the -from (and usually -to) entries for each unit, in unit order.

    The -to entry is saved before its -from entry.
    """
    entries: list[HistoryEntry] = []
    for unit in units:
        element_from = create_history_entry(extrinsic, unit.sender, HistorySuffix.FROM)
        element_from.attach(unit.transfer)

        if needs_receiver_entry(unit):
            element_to = create_history_entry(extrinsic, unit.receiver, HistorySuffix.TO)
            element_to.attach(unit.transfer)
            await store.save(element_to)
            entries.append(element_to)

        await store.save(element_from)
        entries.append(element_from)

    logger.debug("Saved %d failed-transfer entries for %s", len(entries), extrinsic.extrinsic_id)
    return entries
