from enum import Enum


class HistorySuffix(str, Enum):
    """Suffix appended to the extrinsic id to form a history element id."""

    FROM = "-from"
    TO = "-to"
    EXTRINSIC = "-extrinsic"
