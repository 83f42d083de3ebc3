from chainhistory.domain.enums.call_shape import CallShape
from chainhistory.domain.enums.history import HistorySuffix
from chainhistory.domain.enums.parse_error import ParseErrorType

__all__ = [
    "CallShape",
    "HistorySuffix",
    "ParseErrorType",
]
