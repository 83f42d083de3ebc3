"""Fee calculation and fee-asset resolution."""

from __future__ import annotations

import logging
from typing import NamedTuple, Protocol

from chainhistory.parser.calls.shapes import is_evm_transaction
from chainhistory.parser.utils.amounts import to_int
from chainhistory.parser.utils.context import ExtrinsicContext
from chainhistory.parser.utils.multilocation import NATIVE_ASSET_ID, MultilocationResolver
from chainhistory.parser.utils.names import same_account
from chainhistory.parser.utils.types import DecodedEvent, DecodedExtrinsic

logger = logging.getLogger(__name__)


class FeeCalculator(Protocol):
    def calculate(self, extrinsic: DecodedExtrinsic, payer: str | None = None) -> str:
        """Native fee paid by payer (signer when None), as a decimal string."""


class ResolvedFee(NamedTuple):
    amount: str
    asset_id: str


def _amount(event: DecodedEvent, position: int) -> int:
    try:
        return to_int(event.data[position])
    except (IndexError, TypeError, ValueError):
        return 0


def _who(event: DecodedEvent) -> str | None:
    return str(event.data[0]) if event.data else None


class EventFeeCalculator:
    """Native fee from the extrinsic's own events.

    Order of preference:
      1. transactionPayment.TransactionFeePaid(who, actual_fee, tip) → actual_fee
      2. Σ balances.Withdraw(who, amount) by the payer, minus an EVM refund Deposit
      3. Σ balances.Deposit + treasury.Deposit (runtimes without fee events)
    """

    def calculate(self, extrinsic: DecodedExtrinsic, payer: str | None = None) -> str:
        context = ExtrinsicContext(extrinsic)
        payer = payer if payer is not None else extrinsic.signer

        for event in context.filter_events("transactionPayment", "TransactionFeePaid"):
            if payer is None or same_account(_who(event), payer):
                return str(_amount(event, 1))

        withdraw_fee = self._withdraw_fee(context, payer)
        if withdraw_fee:
            return str(withdraw_fee)

        deposits = context.filter_events("balances", "Deposit") + context.filter_events("treasury", "Deposit")
        return str(sum(_amount(e, 1 if e.matches("balances", "Deposit") else 0) for e in deposits))

    @staticmethod
    def _withdraw_fee(context: ExtrinsicContext, payer: str | None) -> int:
        if payer is None:
            return 0
        withdrawals = [e for e in context.filter_events("balances", "Withdraw") if same_account(_who(e), payer)]
        total = sum(_amount(e, 1) for e in withdrawals)
        if not total or not is_evm_transaction(context.extrinsic.method):
            return total

        # Frontier withdraws the gas limit up front and refunds the unused part
        for event in context.remaining_events_after(withdrawals[-1]):
            if event.matches("balances", "Deposit") and same_account(_who(event), payer):
                return total - _amount(event, 1)
        return total


class FeeResolver:
    """Fee amount + fee asset for an extrinsic, honouring assetTxPayment.AssetTxFeePaid overrides."""

    def __init__(
        self,
        calculator: FeeCalculator,
        resolver: MultilocationResolver,
        native_asset_id: str = NATIVE_ASSET_ID,
    ) -> None:
        self._calculator = calculator
        self._resolver = resolver
        self._native_asset_id = native_asset_id

    def resolve(self, extrinsic: DecodedExtrinsic) -> ResolvedFee:
        fee = ResolvedFee(self._calculator.calculate(extrinsic), self._native_asset_id)

        paid = ExtrinsicContext(extrinsic).find_block_event("assetTxPayment", "AssetTxFeePaid")
        if paid is None or len(paid.data) < 4:
            return fee

        _who, actual_fee, _tip, location = paid.data[:4]
        if not self._resolver.has_interior(location):
            return fee
        asset_id = self._resolver.resolve(location)
        if asset_id is None:
            return fee

        try:
            amount = to_int(actual_fee)
        except (TypeError, ValueError):
            logger.warning("Unreadable AssetTxFeePaid fee %r for %s", actual_fee, extrinsic.extrinsic_id)
            return fee

        logger.debug("Fee for %s paid in asset %s", extrinsic.extrinsic_id, asset_id)
        return ResolvedFee(str(amount), asset_id)
