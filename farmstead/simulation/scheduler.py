"""Schedulers — run a callback after a delay without blocking.

The day-end delay is the only suspension point in the game.  The engine
hands its dawn callback to a scheduler: tests and headless runs use the
immediate one, the windowed client advances a deferred one every frame.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol


@dataclass
class ScheduledCall:
    """A pending callback.

    Attributes:
        due: Scheduler time at which the callback fires.
        callback: Function to invoke.
        cancelled: Set by ``cancel``; a cancelled call never fires.
        done: Set once the callback has run.
    """

    due: float
    callback: Callable[[], None]
    cancelled: bool = False
    done: bool = False

    def cancel(self) -> None:
        """Prevent the callback from running if it has not yet."""
        self.cancelled = True


class Scheduler(Protocol):
    """Anything that can run a callback later."""

    def schedule(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        """Arrange for ``callback`` to run after ``delay`` seconds."""


class ImmediateScheduler:
    """Runs every callback synchronously, ignoring the delay."""

    def schedule(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        """Invoke ``callback`` right away."""
        call = ScheduledCall(due=0.0, callback=callback)
        callback()
        call.done = True
        return call


@dataclass
class DeferredScheduler:
    """Holds callbacks until ``advance`` moves its clock past them.

    Attributes:
        now: Seconds elapsed on this scheduler's clock.
        pending: Calls not yet fired or cancelled, in scheduling order.
    """

    now: float = 0.0
    pending: list[ScheduledCall] = field(default_factory=list)

    def schedule(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        """Queue ``callback`` to fire ``delay`` seconds from now."""
        call = ScheduledCall(due=self.now + delay, callback=callback)
        self.pending.append(call)
        return call

    def advance(self, dt: float) -> int:
        """Move the clock forward and fire everything now due.

        Args:
            dt: Seconds to advance.

        Returns:
            Number of callbacks fired.
        """
        self.now += dt
        due: list[ScheduledCall] = []
        waiting: list[ScheduledCall] = []
        for call in self.pending:
            if call.cancelled:
                continue
            (due if call.due <= self.now else waiting).append(call)
        self.pending = waiting
        for call in due:
            call.callback()
            call.done = True
        return len(due)
