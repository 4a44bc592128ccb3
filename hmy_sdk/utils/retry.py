"""
Bounded polling with a fixed interval and an optional deadline.

The confirmation wait after a broadcast is best-effort: the node is asked
again and again until it has an answer or the wait budget is spent. Errors
raised by the probe are never retried here; only a "not yet" (None) answer
leads to another attempt.

Example
-------
from hmy_sdk.utils.retry import Deadline, poll_until

receipt = poll_until(
    lambda: rpc.get_transaction_receipt(tx_hash),
    budget=30,
    interval=2.0,
    deadline=Deadline(20),
)

`sleep` and `clock` are injectable so tests can drive a simulated clock.
"""

from __future__ import annotations

import time
from typing import Callable, Optional, TypeVar

from ..errors import DeadlineExceeded

__all__ = ["Deadline", "poll_until"]

T = TypeVar("T")


class Deadline:
    """
    Absolute point in time after which no new remote call should start.

    Built on a monotonic clock; `clock` can be swapped for a fake in tests.
    """

    __slots__ = ("_at", "_clock")

    def __init__(self, seconds: float, *, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._at = clock() + float(seconds)

    def remaining(self) -> float:
        return max(0.0, self._at - self._clock())

    def expired(self) -> bool:
        return self._clock() >= self._at

    def check(self, what: str = "remote call") -> None:
        """Raise DeadlineExceeded if the deadline already passed."""
        if self.expired():
            raise DeadlineExceeded(f"deadline exceeded before {what}")

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"Deadline(remaining={self.remaining():.3f}s)"


def poll_until(
    probe: Callable[[], Optional[T]],
    *,
    budget: float,
    interval: float,
    sleep: Callable[[float], None] = time.sleep,
    deadline: Optional[Deadline] = None,
    on_wait: Optional[Callable[[int, float], None]] = None,
) -> Optional[T]:
    """
    Call `probe` until it returns a non-None value or `budget` seconds of
    sleeping have been spent.

    - budget <= 0 skips polling entirely and returns None.
    - Each "not yet" answer costs one sleep of `interval` seconds (the last
      nap is shortened so the total never exceeds the budget).
    - An expired `deadline` ends the wait early, returning None.
    - Exceptions raised by `probe` propagate untouched.
    - `on_wait(attempt, nap)` is invoked before each sleep.
    """
    if interval <= 0:
        raise ValueError("interval must be positive")
    if budget <= 0:
        return None

    remaining = float(budget)
    attempt = 0
    while True:
        if deadline is not None and deadline.expired():
            return None
        attempt += 1
        result = probe()
        if result is not None:
            return result
        if remaining <= 0:
            return None

        nap = min(float(interval), remaining)
        if deadline is not None:
            nap = min(nap, deadline.remaining())
        if on_wait is not None:
            on_wait(attempt, nap)
        sleep(nap)
        remaining -= nap
