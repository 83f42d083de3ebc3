from enum import Enum


class ParseErrorType(str, Enum):
    """Categorized history parse errors."""

    MALFORMED_CALL_ARGUMENTS = "MalformedCallArguments"
    CALL_TREE_TOO_DEEP = "CallTreeTooDeep"
    MALFORMED_EVENT_DATA = "MalformedEventData"
    EXTRINSIC_PARSE_ERROR = "ExtrinsicParseError"
