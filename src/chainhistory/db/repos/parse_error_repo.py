from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from chainhistory.db.models.parse_error_record import ParseErrorRecord


class ParseErrorRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(
        self,
        extrinsic_id: str,
        block_number: int,
        error_type: str,
        message: str,
        stack_trace: Optional[str] = None,
        diagnostic_data: Optional[str] = None,
    ) -> ParseErrorRecord:
        record = ParseErrorRecord(
            extrinsic_id=extrinsic_id,
            block_number=block_number,
            error_type=error_type,
            message=message,
            stack_trace=stack_trace,
            diagnostic_data=diagnostic_data,
        )
        self._session.add(record)
        await self._session.flush()
        return record

    async def list_errors(
        self,
        error_type: Optional[str] = None,
        resolved: Optional[bool] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> tuple[list[ParseErrorRecord], int]:
        base = select(ParseErrorRecord)
        count_q = select(func.count()).select_from(ParseErrorRecord)

        if error_type:
            base = base.where(ParseErrorRecord.error_type == error_type)
            count_q = count_q.where(ParseErrorRecord.error_type == error_type)
        if resolved is not None:
            base = base.where(ParseErrorRecord.resolved == resolved)
            count_q = count_q.where(ParseErrorRecord.resolved == resolved)

        total_result = await self._session.execute(count_q)
        total = total_result.scalar_one()

        result = await self._session.execute(
            base.order_by(ParseErrorRecord.block_number.desc(), ParseErrorRecord.extrinsic_id)
            .limit(limit)
            .offset(offset)
        )
        return list(result.scalars().all()), total

    async def get_summary(self) -> dict[str, int]:
        result = await self._session.execute(
            select(ParseErrorRecord.error_type, func.count())
            .where(ParseErrorRecord.resolved == False)  # noqa: E712
            .group_by(ParseErrorRecord.error_type)
        )
        return dict(result.all())
