from typing import Any, Optional

from sqlalchemy import JSON, BigInteger, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from chainhistory.db.session import Base, TimestampMixin


class HistoryElement(TimestampMixin, Base):
    """Account history element. Append-only; id is {block}-{extrinsic_idx}{suffix}."""

    __tablename__ = "history_elements"
    __table_args__ = (
        Index("ix_history_address_block", "address", "block_number"),
    )

    id: Mapped[str] = mapped_column(String(100), primary_key=True)
    block_number: Mapped[int] = mapped_column(BigInteger)
    timestamp: Mapped[int] = mapped_column(BigInteger)
    address: Mapped[str] = mapped_column(String(100))
    extrinsic_hash: Mapped[str] = mapped_column(String(100), index=True)
    extrinsic_idx: Mapped[int] = mapped_column(Integer)
    # Exactly one payload column is set
    transfer: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON, default=None)
    asset_transfer: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON, default=None)
    swap: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON, default=None)
    extrinsic: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON, default=None)
