"""ExtrinsicContext: read-only working set for parsing one extrinsic."""

from chainhistory.parser.utils.types import DecodedEvent, DecodedExtrinsic


class ExtrinsicContext:
    """Event lookups scoped to one extrinsic, plus its correlated block-level events."""

    def __init__(self, extrinsic: DecodedExtrinsic) -> None:
        self.extrinsic = extrinsic
        self._events: list[DecodedEvent] = list(extrinsic.events)
        # Block events are matched through their ApplyExtrinsic phase
        self._block_events: list[DecodedEvent] = [
            e for e in extrinsic.block_events if e.extrinsic_idx == extrinsic.idx
        ]

    def find_event(self, module: str, name: str) -> DecodedEvent | None:
        """First event of this extrinsic with the given identity."""
        for e in self._events:
            if e.matches(module, name):
                return e
        return None

    def filter_events(self, module: str, name: str) -> list[DecodedEvent]:
        return [e for e in self._events if e.matches(module, name)]

    def find_block_event(self, module: str, name: str) -> DecodedEvent | None:
        """First block-level event with the given identity correlated to this extrinsic."""
        for e in self._block_events:
            if e.matches(module, name):
                return e
        return None

    def event_index(self, event: DecodedEvent) -> int:
        return self._events.index(event)

    def remaining_events_after(self, event: DecodedEvent) -> list[DecodedEvent]:
        """Events emitted after the given one, in order."""
        return self._events[self.event_index(event) + 1:]
