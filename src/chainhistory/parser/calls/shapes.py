"""Call-shape classification: (module, function) → CallShape."""

from chainhistory.domain.enums import CallShape
from chainhistory.parser.utils.names import camel_case
from chainhistory.parser.utils.types import DecodedCall

CALL_SHAPES: dict[tuple[str, str], CallShape] = {
    # Native balances
    ("balances", "transfer"): CallShape.NATIVE_TRANSFER,
    ("balances", "transferKeepAlive"): CallShape.NATIVE_TRANSFER,
    ("balances", "transferAllowDeath"): CallShape.NATIVE_TRANSFER,
    ("balances", "transferAll"): CallShape.NATIVE_TRANSFER_ALL,
    # Statemine-style assets
    ("assets", "transfer"): CallShape.ASSET_TRANSFER,
    ("assets", "transferKeepAlive"): CallShape.ASSET_TRANSFER,
    # ORML currencies/tokens
    ("currencies", "transfer"): CallShape.ORML_TRANSFER,
    ("tokens", "transfer"): CallShape.ORML_TRANSFER,
    ("tokens", "transferKeepAlive"): CallShape.ORML_TRANSFER,
    ("tokens", "transferAll"): CallShape.ORML_TRANSFER_ALL,
    # Equilibrium
    ("eqBalances", "transfer"): CallShape.EQUILIBRIUM_TRANSFER,
    # Asset conversion
    ("assetConversion", "swapExactTokensForTokens"): CallShape.SWAP_EXACT_IN,
    ("assetConversion", "swapTokensForExactTokens"): CallShape.SWAP_EXACT_OUT,
    # Wrappers
    ("utility", "batch"): CallShape.BATCH,
    ("utility", "batchAll"): CallShape.BATCH,
    ("utility", "forceBatch"): CallShape.BATCH,
    ("proxy", "proxy"): CallShape.PROXY,
    ("proxy", "proxyAnnounced"): CallShape.PROXY,
    # Frontier
    ("ethereum", "transact"): CallShape.EVM_TRANSACTION,
}


def classify(call: DecodedCall) -> CallShape:
    return CALL_SHAPES.get((camel_case(call.module), camel_case(call.function)), CallShape.OTHER)


def is_native_transfer(call: DecodedCall) -> bool:
    return classify(call) is CallShape.NATIVE_TRANSFER


def is_asset_transfer(call: DecodedCall) -> bool:
    return classify(call) is CallShape.ASSET_TRANSFER


def is_orml_transfer(call: DecodedCall) -> bool:
    return classify(call) is CallShape.ORML_TRANSFER


def is_equilibrium_transfer(call: DecodedCall) -> bool:
    return classify(call) is CallShape.EQUILIBRIUM_TRANSFER


def is_native_transfer_all(call: DecodedCall) -> bool:
    return classify(call) is CallShape.NATIVE_TRANSFER_ALL


def is_orml_transfer_all(call: DecodedCall) -> bool:
    return classify(call) is CallShape.ORML_TRANSFER_ALL


def is_swap_exact_in(call: DecodedCall) -> bool:
    return classify(call) is CallShape.SWAP_EXACT_IN


def is_swap_exact_out(call: DecodedCall) -> bool:
    return classify(call) is CallShape.SWAP_EXACT_OUT


def is_batch(call: DecodedCall) -> bool:
    return classify(call) is CallShape.BATCH


def is_proxy(call: DecodedCall) -> bool:
    return classify(call) is CallShape.PROXY


def is_evm_transaction(call: DecodedCall) -> bool:
    return classify(call) is CallShape.EVM_TRANSACTION
