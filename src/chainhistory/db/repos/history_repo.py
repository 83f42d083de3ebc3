from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from chainhistory.db.models.history_element import HistoryElement
from chainhistory.parser.utils.types import HistoryEntry

_PAYLOADS = ("transfer", "asset_transfer", "swap", "extrinsic")


def to_row(entry: HistoryEntry) -> HistoryElement:
    payloads = {
        name: payload.model_dump(by_alias=True) if (payload := getattr(entry, name)) is not None else None
        for name in _PAYLOADS
    }
    return HistoryElement(
        id=entry.id,
        block_number=entry.block_number,
        timestamp=entry.timestamp,
        address=entry.address,
        extrinsic_hash=entry.extrinsic_hash,
        extrinsic_idx=entry.extrinsic_idx,
        **payloads,
    )


def to_entry(row: HistoryElement) -> HistoryEntry:
    return HistoryEntry.model_validate({
        "id": row.id,
        "block_number": row.block_number,
        "timestamp": row.timestamp,
        "address": row.address,
        "extrinsic_hash": row.extrinsic_hash,
        "extrinsic_idx": row.extrinsic_idx,
        **{name: getattr(row, name) for name in _PAYLOADS},
    })


class HistoryRepo:
    """HistoryStore backed by SQLAlchemy. save() upserts by id."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def save(self, entry: HistoryEntry) -> None:
        await self._session.merge(to_row(entry))
        await self._session.flush()

    async def get(self, entry_id: str) -> Optional[HistoryEntry]:
        row = await self._session.get(HistoryElement, entry_id)
        return to_entry(row) if row is not None else None

    async def list_for_address(
        self,
        address: str,
        limit: int = 50,
        offset: int = 0,
    ) -> list[HistoryEntry]:
        result = await self._session.execute(
            select(HistoryElement)
            .where(HistoryElement.address == address)
            .order_by(HistoryElement.block_number.desc(), HistoryElement.extrinsic_idx.desc(), HistoryElement.id)
            .limit(limit)
            .offset(offset)
        )
        return [to_entry(row) for row in result.scalars().all()]

    async def list_for_extrinsic(self, block_number: int, extrinsic_idx: int) -> list[HistoryEntry]:
        result = await self._session.execute(
            select(HistoryElement)
            .where(
                HistoryElement.block_number == block_number,
                HistoryElement.extrinsic_idx == extrinsic_idx,
            )
            .order_by(HistoryElement.id)
        )
        return [to_entry(row) for row in result.scalars().all()]
