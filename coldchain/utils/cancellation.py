"""Cooperative cancellation for long engine computations.

A token is checked between units of work (one Dijkstra expansion, one
sequencer step). Cancelling never interrupts a unit half-way, so a
cancelled computation leaves no partial state behind.
"""

import threading
import time
from typing import Optional


class CancellationToken:
    """
    Cancellation flag shared between a caller and a running computation.

    Set manually with ``cancel()`` (e.g. from a dashboard thread) or
    automatically once an optional deadline passes.

    Example:
        token = CancellationToken.with_timeout(5.0)
        result = engine.all_shortest_paths(..., cancel_token=token)
        if result.kind == "cancelled":
            ...
    """

    def __init__(self, deadline: Optional[float] = None):
        """
        Initialize token.

        Args:
            deadline: ``time.monotonic()`` value after which the token
                counts as cancelled (None for no deadline)
        """
        self._event = threading.Event()
        self._deadline = deadline

    @classmethod
    def with_timeout(cls, seconds: float) -> "CancellationToken":
        """
        Create a token that cancels itself after a time limit.

        Args:
            seconds: Maximum computation time

        Raises:
            ValueError: If seconds is negative
        """
        if seconds < 0:
            raise ValueError(f"Timeout must be non-negative, got {seconds}")
        return cls(deadline=time.monotonic() + seconds)

    def cancel(self) -> None:
        """Request cancellation."""
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        """True once cancelled or past the deadline."""
        if self._event.is_set():
            return True
        if self._deadline is not None and time.monotonic() >= self._deadline:
            self._event.set()
            return True
        return False

    def __repr__(self) -> str:
        return f"CancellationToken(cancelled={self.is_cancelled})"


class ComputationCancelled(Exception):
    """Raised inside a computation when its token fires; never leaves the engine."""

    def __init__(self, completed_units: int = 0):
        super().__init__(f"Cancelled after {completed_units} units of work")
        self.completed_units = completed_units


def check_cancelled(token: Optional[CancellationToken], completed_units: int = 0) -> None:
    """
    Raise ComputationCancelled if the token has fired.

    Args:
        token: Token to check (None never cancels)
        completed_units: Work finished so far, reported in the failure
    """
    if token is not None and token.is_cancelled:
        raise ComputationCancelled(completed_units)
