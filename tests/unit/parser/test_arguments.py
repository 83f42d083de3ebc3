import pytest

from chainhistory.exceptions import MalformedCallArguments
from chainhistory.parser.calls.arguments import (
    call_from_proxy,
    calls_from_batch,
    currency_id_hex,
    extract_asset_transfer,
    extract_equilibrium_transfer,
    extract_native_transfer,
    extract_native_transfer_all,
    extract_orml_transfer,
    extract_orml_transfer_all,
    extract_swap_exact_in,
    extract_swap_exact_out,
)
from chainhistory.parser.utils.types import DecodedCall

BOB = "5FHneW46xGXgs5mUiveU4sbTyGBzmstUspZC92UhjJM694ty"
LOCATION_A = {"parents": 0, "interior": "Here"}
LOCATION_B = {"parents": 0, "interior": {"X2": [{"PalletInstance": 50}, {"GeneralIndex": 1984}]}}


def _call(module: str, function: str, *args) -> DecodedCall:
    return DecodedCall(module=module, function=function, args=list(args))


class TestTransferExtractors:
    def test_native_transfer(self):
        dest, amount, asset_id = extract_native_transfer(_call("balances", "transfer", BOB, "1000"))
        assert (dest, amount, asset_id) == (BOB, 1000, None)

    def test_native_transfer_multiaddress(self):
        args = extract_native_transfer(_call("balances", "transfer", {"Id": BOB}, 5))
        assert args.destination == BOB

    def test_asset_transfer_reorders(self):
        args = extract_asset_transfer(_call("assets", "transfer", 1984, BOB, 250))
        assert args == (BOB, 250, "1984")

    def test_equilibrium_transfer_reorders(self):
        args = extract_equilibrium_transfer(_call("eqBalances", "transfer", 6452323, BOB, "77"))
        assert args == (BOB, 77, "6452323")

    def test_orml_transfer_hexes_currency(self):
        args = extract_orml_transfer(_call("tokens", "transfer", BOB, "0x0081", 10))
        assert args == (BOB, 10, "0x0081")

    def test_transfer_all_amount_is_zero(self):
        args = extract_native_transfer_all(_call("balances", "transferAll", BOB, False))
        assert args == (BOB, 0, None)

    def test_orml_transfer_all(self):
        args = extract_orml_transfer_all(_call("tokens", "transferAll", BOB, 7, True))
        assert args == (BOB, 0, "0x7")


class TestSwapExtractors:
    def test_exact_in_keeps_order(self):
        call = _call("assetConversion", "swapExactTokensForTokens", [LOCATION_A, LOCATION_B], 100, 90, BOB, False)
        path, amount_in, amount_out, receiver = extract_swap_exact_in(call)
        assert path == [LOCATION_A, LOCATION_B]
        assert (amount_in, amount_out, receiver) == (100, 90, BOB)

    def test_exact_out_reports_requested_bounds(self):
        # (path, amount_out, amount_in_max, send_to, keep_alive)
        call = _call("assetConversion", "swapTokensForExactTokens", [LOCATION_A, LOCATION_B], 50, 60, BOB, False)
        _, amount_in, amount_out, _ = extract_swap_exact_out(call)
        assert amount_in == 60
        assert amount_out == 50


class TestMalformedArguments:
    def test_wrong_arity(self):
        with pytest.raises(MalformedCallArguments):
            extract_native_transfer(_call("balances", "transfer", BOB))

    def test_trailing_argument_is_rejected(self):
        with pytest.raises(MalformedCallArguments):
            extract_asset_transfer(_call("assets", "transfer", 1, BOB, 2, 3))

    def test_non_numeric_amount(self):
        with pytest.raises(MalformedCallArguments):
            extract_native_transfer(_call("balances", "transfer", BOB, "lots"))

    def test_bool_amount(self):
        with pytest.raises(MalformedCallArguments):
            extract_native_transfer(_call("balances", "transfer", BOB, True))

    def test_missing_destination(self):
        with pytest.raises(MalformedCallArguments):
            extract_native_transfer(_call("balances", "transfer", None, 1))

    def test_empty_swap_path(self):
        with pytest.raises(MalformedCallArguments):
            extract_swap_exact_in(_call("assetConversion", "swapExactTokensForTokens", [], 1, 1, BOB, False))

    def test_error_names_the_shape(self):
        with pytest.raises(MalformedCallArguments) as exc:
            extract_orml_transfer(_call("tokens", "transfer", BOB, 1))
        assert exc.value.shape == "ORML_TRANSFER"


class TestWrappers:
    def test_batch_inner_calls(self):
        inner = _call("balances", "transfer", BOB, 1)
        batch = _call("utility", "batch", [inner, {"module": "system", "function": "remark", "args": ["0x"]}])
        calls = calls_from_batch(batch)
        assert calls[0] is inner
        assert calls[1].module == "system"

    def test_batch_without_call_list(self):
        with pytest.raises(MalformedCallArguments):
            calls_from_batch(_call("utility", "batch", "nope"))

    def test_proxy_takes_last_argument(self):
        inner = _call("balances", "transfer", BOB, 1)
        proxy = _call("proxy", "proxy", BOB, None, inner)
        assert call_from_proxy(proxy) is inner

    def test_proxy_without_call(self):
        with pytest.raises(MalformedCallArguments):
            call_from_proxy(_call("proxy", "proxy", BOB, None, 42))


def test_currency_id_hex_structured():
    assert currency_id_hex({"Token": "KSM"}) == "0x" + b'{"Token":"KSM"}'.hex()
    assert currency_id_hex("0xABCD") == "0xabcd"
