from chainhistory.db.repos.history_repo import HistoryRepo
from chainhistory.db.repos.parse_error_repo import ParseErrorRepo

__all__ = ["HistoryRepo", "ParseErrorRepo"]
