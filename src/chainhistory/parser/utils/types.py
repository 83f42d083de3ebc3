"""Core data types for the history parser."""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from chainhistory.parser.utils.names import camel_case, pascal_case


class DecodedCall(BaseModel):
    """A decoded runtime call. Batch/proxy calls carry nested DecodedCall values in args."""

    model_config = ConfigDict(frozen=True)

    module: str  # pallet section, e.g. "balances"
    function: str  # call name, e.g. "transferKeepAlive"
    args: list[Any] = []


class DecodedEvent(BaseModel):
    """A decoded runtime event. extrinsic_idx is the ApplyExtrinsic phase, None for block-level phases."""

    model_config = ConfigDict(frozen=True)

    module: str
    name: str
    data: list[Any] = []
    extrinsic_idx: int | None = None

    def matches(self, module: str, name: str) -> bool:
        return camel_case(self.module) == camel_case(module) and pascal_case(self.name) == pascal_case(name)


class DecodedExtrinsic(BaseModel):
    """An extrinsic as handed over by the block decoder."""

    model_config = ConfigDict(frozen=True)

    block_number: int
    idx: int  # index within block
    hash: str
    timestamp: int  # block timestamp, unix seconds
    method: DecodedCall
    success: bool
    signer: str | None = None
    events: list[DecodedEvent] = []  # events emitted by this extrinsic
    block_events: list[DecodedEvent] = []  # every event in the enclosing block

    @property
    def is_signed(self) -> bool:
        return self.signer is not None

    @property
    def extrinsic_id(self) -> str:
        return f"{self.block_number}-{self.idx}"


# --- Canonical transfer union ---


class NativeTransfer(BaseModel):
    """Attempted native-token transfer. event_idx=None: no success event backs this record."""

    model_config = ConfigDict(populate_by_name=True)

    kind: Literal["transfer"] = "transfer"
    from_address: str = Field(alias="from")
    to_address: str = Field(alias="to")
    amount: str
    fee: str
    success: bool = False
    event_idx: int | None = None


class AssetTransfer(NativeTransfer):
    kind: Literal["asset_transfer"] = "asset_transfer"  # type: ignore[assignment]
    asset_id: str


class Swap(BaseModel):
    """Attempted swap. Amounts are the requested bounds from the call, never executed amounts."""

    kind: Literal["swap"] = "swap"
    sender: str
    receiver: str
    asset_id_in: str
    amount_in: str
    asset_id_out: str
    amount_out: str
    asset_id_fee: str
    fee: str
    success: bool = False
    event_idx: int | None = None


CanonicalTransfer = Annotated[Union[NativeTransfer, AssetTransfer, Swap], Field(discriminator="kind")]


class NormalizedUnit(BaseModel):
    """One canonical record recovered from the call tree. is_transfer_all → amount is a zero placeholder."""

    is_transfer_all: bool
    transfer: CanonicalTransfer

    @property
    def is_swap(self) -> bool:
        return isinstance(self.transfer, Swap)

    @property
    def sender(self) -> str:
        if isinstance(self.transfer, Swap):
            return self.transfer.sender
        return self.transfer.from_address

    @property
    def receiver(self) -> str:
        if isinstance(self.transfer, Swap):
            return self.transfer.receiver
        return self.transfer.to_address


# --- History output ---


class ExtrinsicSummary(BaseModel):
    hash: str
    module: str
    call: str
    success: bool
    fee: str


class HistoryEntry(BaseModel):
    """One history element. Exactly one payload field is set."""

    id: str
    block_number: int
    timestamp: int
    address: str
    extrinsic_hash: str
    extrinsic_idx: int
    transfer: NativeTransfer | None = None
    asset_transfer: AssetTransfer | None = None
    swap: Swap | None = None
    extrinsic: ExtrinsicSummary | None = None

    def attach(self, transfer: NativeTransfer | AssetTransfer | Swap) -> None:
        """Put the transfer in the payload slot matching its variant."""
        if isinstance(transfer, Swap):
            self.swap = transfer
        elif isinstance(transfer, AssetTransfer):
            self.asset_transfer = transfer
        else:
            self.transfer = transfer
