from chainhistory.db.models.history_element import HistoryElement
from chainhistory.db.models.parse_error_record import ParseErrorRecord

__all__ = [
    "HistoryElement",
    "ParseErrorRecord",
]
