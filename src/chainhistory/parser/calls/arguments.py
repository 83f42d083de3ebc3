"""Positional argument extraction for recognized call shapes.

Argument order and count are fixed by the runtime's call encoding. Anything
that doesn't fit the schema raises MalformedCallArguments.
"""

import json
from typing import Any, Callable, NamedTuple

from chainhistory.domain.enums import CallShape
from chainhistory.exceptions import MalformedCallArguments
from chainhistory.parser.utils.amounts import to_int
from chainhistory.parser.utils.types import DecodedCall


class TransferArgs(NamedTuple):
    destination: str
    amount: int
    asset_id: str | None = None


class SwapArgs(NamedTuple):
    path: list[Any]
    amount_in: int
    amount_out: int
    receiver: str


# Expected argument names per shape, in encoding order
ARGUMENT_SCHEMAS: dict[CallShape, tuple[str, ...]] = {
    CallShape.NATIVE_TRANSFER: ("dest", "value"),
    CallShape.ASSET_TRANSFER: ("id", "target", "amount"),
    CallShape.ORML_TRANSFER: ("dest", "currency_id", "amount"),
    CallShape.EQUILIBRIUM_TRANSFER: ("asset", "to", "value"),
    CallShape.NATIVE_TRANSFER_ALL: ("dest", "keep_alive"),
    CallShape.ORML_TRANSFER_ALL: ("dest", "currency_id", "keep_alive"),
    CallShape.SWAP_EXACT_IN: ("path", "amount_in", "amount_out_min", "send_to", "keep_alive"),
    CallShape.SWAP_EXACT_OUT: ("path", "amount_out", "amount_in_max", "send_to", "keep_alive"),
}


def _checked_args(call: DecodedCall, shape: CallShape) -> list[Any]:
    expected = ARGUMENT_SCHEMAS[shape]
    if len(call.args) != len(expected):
        raise MalformedCallArguments(
            shape.value,
            f"expected {len(expected)} args ({', '.join(expected)}), got {len(call.args)}",
        )
    return list(call.args)


def _address(shape: CallShape, name: str, value: Any) -> str:
    # MultiAddress decodes as {"Id": "..."}; plain AccountId as a string
    if isinstance(value, dict) and len(value) == 1:
        value = next(iter(value.values()))
    if not isinstance(value, str) or not value:
        raise MalformedCallArguments(shape.value, f"{name} is not an address: {value!r}")
    return value


def _amount(shape: CallShape, name: str, value: Any) -> int:
    try:
        return to_int(value)
    except (TypeError, ValueError) as e:
        raise MalformedCallArguments(shape.value, f"{name} is not an amount: {value!r}") from e


def _asset_id(shape: CallShape, name: str, value: Any) -> str:
    if value is None or isinstance(value, bool):
        raise MalformedCallArguments(shape.value, f"{name} is not an asset id: {value!r}")
    return str(value)


def currency_id_hex(value: Any) -> str:
    """Flat hex identifier for an ORML currency id.

    Hex strings pass through (lowercased), integers are hex-encoded and
    structured ids ({"Token": "KSM"}) are hex-encoded from their canonical JSON.

    Only pre-encoded hex strings match the SCALE encoding used by the
    Transfer-event recorder. hex(n) is big-endian and unpadded, while SCALE is
    little-endian with a width fixed by the runtime's CurrencyId type, which
    isn't known here. Decoders that want ids matching that recorder must pass
    the SCALE hex through.
    """
    if isinstance(value, str) and value.lower().startswith("0x"):
        return value.lower()
    if isinstance(value, int) and not isinstance(value, bool):
        return hex(value)
    canonical = json.dumps(value, sort_keys=True, separators=(",", ":"))
    return "0x" + canonical.encode().hex()


def _currency_id(shape: CallShape, name: str, value: Any) -> str:
    if value is None or isinstance(value, (bool, float)):
        raise MalformedCallArguments(shape.value, f"{name} is not a currency id: {value!r}")
    return currency_id_hex(value)


def _path(shape: CallShape, value: Any) -> list[Any]:
    if not isinstance(value, list) or not value:
        raise MalformedCallArguments(shape.value, f"path is not a non-empty list: {value!r}")
    return value


# --- Per-shape extractors ---


def extract_native_transfer(call: DecodedCall) -> TransferArgs:
    shape = CallShape.NATIVE_TRANSFER
    dest, value = _checked_args(call, shape)
    return TransferArgs(_address(shape, "dest", dest), _amount(shape, "value", value))


def extract_asset_transfer(call: DecodedCall) -> TransferArgs:
    shape = CallShape.ASSET_TRANSFER
    asset_id, target, amount = _checked_args(call, shape)
    return TransferArgs(
        _address(shape, "target", target),
        _amount(shape, "amount", amount),
        _asset_id(shape, "id", asset_id),
    )


def extract_orml_transfer(call: DecodedCall) -> TransferArgs:
    shape = CallShape.ORML_TRANSFER
    dest, currency_id, amount = _checked_args(call, shape)
    return TransferArgs(
        _address(shape, "dest", dest),
        _amount(shape, "amount", amount),
        _currency_id(shape, "currency_id", currency_id),
    )


def extract_equilibrium_transfer(call: DecodedCall) -> TransferArgs:
    shape = CallShape.EQUILIBRIUM_TRANSFER
    asset, to, value = _checked_args(call, shape)
    return TransferArgs(
        _address(shape, "to", to),
        _amount(shape, "value", value),
        _asset_id(shape, "asset", asset),
    )


def extract_native_transfer_all(call: DecodedCall) -> TransferArgs:
    shape = CallShape.NATIVE_TRANSFER_ALL
    dest, _keep_alive = _checked_args(call, shape)
    return TransferArgs(_address(shape, "dest", dest), 0)


def extract_orml_transfer_all(call: DecodedCall) -> TransferArgs:
    shape = CallShape.ORML_TRANSFER_ALL
    dest, currency_id, _keep_alive = _checked_args(call, shape)
    return TransferArgs(
        _address(shape, "dest", dest),
        0,
        _currency_id(shape, "currency_id", currency_id),
    )


def extract_swap_exact_in(call: DecodedCall) -> SwapArgs:
    shape = CallShape.SWAP_EXACT_IN
    path, amount_in, amount_out_min, send_to, _keep_alive = _checked_args(call, shape)
    return SwapArgs(
        _path(shape, path),
        _amount(shape, "amount_in", amount_in),
        _amount(shape, "amount_out_min", amount_out_min),
        _address(shape, "send_to", send_to),
    )


def extract_swap_exact_out(call: DecodedCall) -> SwapArgs:
    shape = CallShape.SWAP_EXACT_OUT
    path, amount_out, amount_in_max, send_to, _keep_alive = _checked_args(call, shape)
    return SwapArgs(
        _path(shape, path),
        _amount(shape, "amount_in_max", amount_in_max),
        _amount(shape, "amount_out", amount_out),
        _address(shape, "send_to", send_to),
    )


TRANSFER_EXTRACTORS: dict[CallShape, Callable[[DecodedCall], TransferArgs]] = {
    CallShape.NATIVE_TRANSFER: extract_native_transfer,
    CallShape.ASSET_TRANSFER: extract_asset_transfer,
    CallShape.ORML_TRANSFER: extract_orml_transfer,
    CallShape.EQUILIBRIUM_TRANSFER: extract_equilibrium_transfer,
    CallShape.NATIVE_TRANSFER_ALL: extract_native_transfer_all,
    CallShape.ORML_TRANSFER_ALL: extract_orml_transfer_all,
}

SWAP_EXTRACTORS: dict[CallShape, Callable[[DecodedCall], SwapArgs]] = {
    CallShape.SWAP_EXACT_IN: extract_swap_exact_in,
    CallShape.SWAP_EXACT_OUT: extract_swap_exact_out,
}


# --- Wrapper unpacking ---


def _as_call(shape: CallShape, value: Any) -> DecodedCall:
    if isinstance(value, DecodedCall):
        return value
    if isinstance(value, dict):
        try:
            return DecodedCall.model_validate(value)
        except ValueError as e:
            raise MalformedCallArguments(shape.value, f"inner call can't be decoded: {value!r}") from e
    raise MalformedCallArguments(shape.value, f"inner call is not a call: {value!r}")


def calls_from_batch(call: DecodedCall) -> list[DecodedCall]:
    shape = CallShape.BATCH
    if len(call.args) != 1 or not isinstance(call.args[0], list):
        raise MalformedCallArguments(shape.value, "expected a single list of calls")
    return [_as_call(shape, inner) for inner in call.args[0]]


def call_from_proxy(call: DecodedCall) -> DecodedCall:
    """The proxied call is always the last argument (proxy: real, force_proxy_type, call)."""
    shape = CallShape.PROXY
    if not call.args:
        raise MalformedCallArguments(shape.value, "no inner call")
    return _as_call(shape, call.args[-1])
