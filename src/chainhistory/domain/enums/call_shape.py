from enum import Enum


class CallShape(str, Enum):
    """Closed set of call shapes the history parser recognizes."""

    NATIVE_TRANSFER = "NATIVE_TRANSFER"
    ASSET_TRANSFER = "ASSET_TRANSFER"
    ORML_TRANSFER = "ORML_TRANSFER"
    EQUILIBRIUM_TRANSFER = "EQUILIBRIUM_TRANSFER"
    NATIVE_TRANSFER_ALL = "NATIVE_TRANSFER_ALL"
    ORML_TRANSFER_ALL = "ORML_TRANSFER_ALL"
    SWAP_EXACT_IN = "SWAP_EXACT_IN"
    SWAP_EXACT_OUT = "SWAP_EXACT_OUT"
    BATCH = "BATCH"
    PROXY = "PROXY"
    EVM_TRANSACTION = "EVM_TRANSACTION"
    OTHER = "OTHER"

    @property
    def is_transfer(self) -> bool:
        return self in _TRANSFER_SHAPES

    @property
    def is_transfer_all(self) -> bool:
        return self in (CallShape.NATIVE_TRANSFER_ALL, CallShape.ORML_TRANSFER_ALL)

    @property
    def is_swap(self) -> bool:
        return self in (CallShape.SWAP_EXACT_IN, CallShape.SWAP_EXACT_OUT)

    @property
    def is_wrapper(self) -> bool:
        return self in (CallShape.BATCH, CallShape.PROXY)


_TRANSFER_SHAPES = frozenset({
    CallShape.NATIVE_TRANSFER,
    CallShape.ASSET_TRANSFER,
    CallShape.ORML_TRANSFER,
    CallShape.EQUILIBRIUM_TRANSFER,
    CallShape.NATIVE_TRANSFER_ALL,
    CallShape.ORML_TRANSFER_ALL,
})
