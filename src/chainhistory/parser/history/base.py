"""Shared pieces of the history builders."""

from typing import Protocol

from chainhistory.domain.enums import HistorySuffix
from chainhistory.parser.utils.types import DecodedExtrinsic, HistoryEntry


class HistoryStore(Protocol):
    """Persistence collaborator. save() must be idempotent per entry id."""

    async def save(self, entry: HistoryEntry) -> None: ...


def create_history_entry(
    extrinsic: DecodedExtrinsic,
    address: str,
    suffix: HistorySuffix,
    hash: str | None = None,
) -> HistoryEntry:
    """Bare history entry for an extrinsic; the caller attaches the payload."""
    return HistoryEntry(
        id=f"{extrinsic.extrinsic_id}{suffix.value}",
        block_number=extrinsic.block_number,
        timestamp=extrinsic.timestamp,
        address=address,
        extrinsic_hash=hash or extrinsic.hash,
        extrinsic_idx=extrinsic.idx,
    )
