"""Bounded admission control for concurrent renders."""

import threading
from dataclasses import dataclass
from enum import Enum

from .constants import MAX_ACTIVE_RENDERS, MAX_WAITING_RENDERS


class Admission(Enum):
    GRANTED = "granted"
    REJECTED = "rejected"


@dataclass(frozen=True)
class QueueStatus:
    active: int
    waiting: int
    max_active: int
    max_waiting: int


class RenderSlots:
    """
    Semaphore with a bounded wait queue.

    Up to ``max_active`` renders run at once. Further callers wait in line
    until ``max_waiting`` are queued; anyone arriving after that is rejected
    immediately instead of piling up.
    """

    def __init__(
        self,
        max_active: int = MAX_ACTIVE_RENDERS,
        max_waiting: int = MAX_WAITING_RENDERS,
    ) -> None:
        if max_active < 1:
            raise ValueError("max_active must be at least 1")
        if max_waiting < 0:
            raise ValueError("max_waiting must not be negative")
        self.max_active = max_active
        self.max_waiting = max_waiting
        self._condition = threading.Condition()
        self._active = 0
        self._waiting = 0

    def acquire(self, timeout: float | None = None) -> Admission:
        """
        Take a render slot, waiting in line if all slots are busy.

        Args:
            timeout: Seconds to wait in line before giving up (None waits forever)

        Returns:
            GRANTED when a slot is held, REJECTED when the queue was full or
            the timeout expired
        """
        with self._condition:
            if self._active < self.max_active:
                self._active += 1
                return Admission.GRANTED
            if self._waiting >= self.max_waiting:
                return Admission.REJECTED

            self._waiting += 1
            try:
                available = self._condition.wait_for(
                    lambda: self._active < self.max_active, timeout
                )
            finally:
                self._waiting -= 1
            if not available:
                return Admission.REJECTED
            self._active += 1
            return Admission.GRANTED

    def release(self) -> None:
        """Return a slot and wake the next waiting caller."""
        with self._condition:
            if self._active == 0:
                raise RuntimeError("release() called without a granted slot")
            self._active -= 1
            self._condition.notify()

    def status(self) -> QueueStatus:
        with self._condition:
            return QueueStatus(
                active=self._active,
                waiting=self._waiting,
                max_active=self.max_active,
                max_waiting=self.max_waiting,
            )
