"""CallNormalizer: walks a call tree and turns transfer/swap leaves into NormalizedUnits."""

import logging
from typing import Any, Callable

from chainhistory.domain.enums import CallShape
from chainhistory.exceptions import CallTreeTooDeep
from chainhistory.parser.calls.arguments import (
    SWAP_EXTRACTORS,
    TRANSFER_EXTRACTORS,
    call_from_proxy,
    calls_from_batch,
)
from chainhistory.parser.calls.shapes import classify
from chainhistory.parser.utils.multilocation import MultilocationResolver
from chainhistory.parser.utils.types import DecodedCall, NormalizedUnit

logger = logging.getLogger(__name__)

# (is_transfer_all, destination, amount, asset_id) → units
TransferCallback = Callable[[bool, str, int, "str | None"], list[NormalizedUnit]]
# (path, amount_in, amount_out, receiver) → units
SwapCallback = Callable[[list[Any], int, int, str], list[NormalizedUnit]]

DEFAULT_MAX_DEPTH = 16


class CallNormalizer:
    """Depth-first normalization of batch/proxy call trees.

    Unrecognized calls are dropped. Swaps whose path endpoints don't resolve
    to asset ids are dropped too.
    """

    def __init__(self, resolver: MultilocationResolver, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        self._resolver = resolver
        self._max_depth = max_depth

    def normalize(
        self,
        call: DecodedCall,
        transfer_callback: TransferCallback,
        swap_callback: SwapCallback,
    ) -> list[NormalizedUnit]:
        return self._normalize(call, transfer_callback, swap_callback, depth=0)

    def _normalize(
        self,
        call: DecodedCall,
        transfer_callback: TransferCallback,
        swap_callback: SwapCallback,
        depth: int,
    ) -> list[NormalizedUnit]:
        if depth > self._max_depth:
            raise CallTreeTooDeep(self._max_depth)

        shape = classify(call)

        if shape.is_transfer:
            destination, amount, asset_id = TRANSFER_EXTRACTORS[shape](call)
            return transfer_callback(shape.is_transfer_all, destination, amount, asset_id)

        if shape.is_swap:
            path, amount_in, amount_out, receiver = SWAP_EXTRACTORS[shape](call)
            if self.resolve_endpoints(path) is None:
                logger.debug("Dropping %s.%s: unresolved swap path", call.module, call.function)
                return []
            return swap_callback(path, amount_in, amount_out, receiver)

        if shape is CallShape.BATCH:
            units: list[NormalizedUnit] = []
            for inner in calls_from_batch(call):
                units.extend(self._normalize(inner, transfer_callback, swap_callback, depth + 1))
            return units

        if shape is CallShape.PROXY:
            return self._normalize(call_from_proxy(call), transfer_callback, swap_callback, depth + 1)

        return []

    def resolve_endpoints(self, path: list[Any]) -> tuple[str, str] | None:
        """(asset_id_in, asset_id_out) for a swap path, or None if either end is unknown."""
        asset_in = self._resolver.resolve(path[0], is_swap_endpoint=True)
        asset_out = self._resolver.resolve(path[-1], is_swap_endpoint=True)
        if asset_in is None or asset_out is None:
            return None
        return asset_in, asset_out
