"""
Latest-wins request sequencing for one kind of async operation.

Each request takes a monotonically increasing ticket. When a response
arrives, only the holder of the newest ticket may apply it; older responses
are stale and must be dropped.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Ticket:
    kind: str
    number: int


class RequestSequencer:
    """Tracks issued/settled requests for one operation kind (e.g. "data")."""

    def __init__(self, kind: str) -> None:
        self.kind = kind
        self._issued = 0
        self._outstanding: set[int] = set()

    def begin(self) -> Ticket:
        self._issued += 1
        self._outstanding.add(self._issued)
        return Ticket(self.kind, self._issued)

    def is_current(self, ticket: Ticket) -> bool:
        """True if no newer request of this kind was issued after ``ticket``."""
        return ticket.number == self._issued

    def finish(self, ticket: Ticket) -> None:
        self._outstanding.discard(ticket.number)

    @property
    def in_flight(self) -> bool:
        """True while the newest request has not settled yet."""
        return self._issued in self._outstanding

    @property
    def outstanding(self) -> int:
        return len(self._outstanding)
