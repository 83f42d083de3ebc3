"""Exceptions raised while recovering history from extrinsics."""


class HistoryError(Exception):
    """Base for faults local to a single extrinsic."""


class MalformedCallArguments(HistoryError):
    """Call arguments don't match the arity/types expected for the matched call shape.

    Points at a runtime metadata mismatch, so the extrinsic is abandoned instead of guessed at.
    """

    def __init__(self, shape: str, message: str) -> None:
        super().__init__(f"{shape}: {message}")
        self.shape = shape


class CallTreeTooDeep(HistoryError):
    def __init__(self, max_depth: int) -> None:
        super().__init__(f"Call tree nesting exceeds {max_depth} levels")
        self.max_depth = max_depth


class MissingExecutedEvent(HistoryError):
    """Successful EVM transaction without an ethereum.Executed event."""

    def __init__(self, extrinsic_id: str) -> None:
        super().__init__(f"No Executed event for EVM extrinsic {extrinsic_id}")
        self.extrinsic_id = extrinsic_id


class MalformedEventData(HistoryError):
    """Event payload can't be decoded into the values the history entry needs."""

    def __init__(self, event: str, message: str) -> None:
        super().__init__(f"{event}: {message}")
        self.event = event
