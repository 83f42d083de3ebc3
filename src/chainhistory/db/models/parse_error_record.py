from typing import Optional

from sqlalchemy import BigInteger, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from chainhistory.db.session import Base, TimestampMixin, UUIDPrimaryKey


class ParseErrorRecord(UUIDPrimaryKey, TimestampMixin, Base):
    """Extrinsics whose history couldn't be recovered, for operator follow-up."""

    __tablename__ = "parse_error_records"

    extrinsic_id: Mapped[str] = mapped_column(String(50), index=True)
    block_number: Mapped[int] = mapped_column(BigInteger)
    error_type: Mapped[str] = mapped_column(String(50))
    message: Mapped[Optional[str]] = mapped_column(Text, default=None)
    stack_trace: Mapped[Optional[str]] = mapped_column(Text, default=None)
    resolved: Mapped[bool] = mapped_column(default=False)
    diagnostic_data: Mapped[Optional[str]] = mapped_column(Text, default=None)  # JSON diagnostic payload
