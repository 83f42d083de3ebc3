import pytest

from chainhistory.domain.enums import CallShape
from chainhistory.parser.calls.shapes import (
    CALL_SHAPES,
    classify,
    is_batch,
    is_native_transfer,
    is_proxy,
    is_swap_exact_in,
)
from chainhistory.parser.utils.types import DecodedCall


def _call(module: str, function: str) -> DecodedCall:
    return DecodedCall(module=module, function=function, args=[])


class TestClassify:
    @pytest.mark.parametrize(
        ("module", "function", "shape"),
        [
            ("balances", "transferKeepAlive", CallShape.NATIVE_TRANSFER),
            ("balances", "transferAll", CallShape.NATIVE_TRANSFER_ALL),
            ("assets", "transfer", CallShape.ASSET_TRANSFER),
            ("tokens", "transfer", CallShape.ORML_TRANSFER),
            ("tokens", "transferAll", CallShape.ORML_TRANSFER_ALL),
            ("eqBalances", "transfer", CallShape.EQUILIBRIUM_TRANSFER),
            ("assetConversion", "swapTokensForExactTokens", CallShape.SWAP_EXACT_OUT),
            ("utility", "forceBatch", CallShape.BATCH),
            ("proxy", "proxyAnnounced", CallShape.PROXY),
            ("ethereum", "transact", CallShape.EVM_TRANSACTION),
        ],
    )
    def test_known_calls(self, module, function, shape):
        assert classify(_call(module, function)) is shape

    def test_unknown_call_is_other(self):
        assert classify(_call("democracy", "vote")) is CallShape.OTHER
        assert classify(_call("balances", "forceTransfer")) is CallShape.OTHER

    def test_snake_case_names_are_normalized(self):
        assert classify(_call("balances", "transfer_keep_alive")) is CallShape.NATIVE_TRANSFER
        assert classify(_call("eq_balances", "transfer")) is CallShape.EQUILIBRIUM_TRANSFER
        assert classify(_call("Utility", "batch_all")) is CallShape.BATCH

    def test_leaf_shapes_are_not_wrappers(self):
        for shape in set(CALL_SHAPES.values()):
            flags = [shape.is_transfer, shape.is_swap, shape.is_wrapper]
            assert sum(flags) <= 1, shape


class TestPredicates:
    def test_predicates_are_exclusive(self):
        call = _call("balances", "transfer")
        assert is_native_transfer(call) is True
        assert is_batch(call) is False
        assert is_proxy(call) is False
        assert is_swap_exact_in(call) is False
