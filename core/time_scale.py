"""
core/time_scale.py — Shared time-slowdown token for Flower Button.

Holding a flower button slows the whole bomb down. Several flower buttons
can sit on the same bomb, and only one of them may own the slowed time
scale at once. The token is a single slot:

    acquire(owner)  lock-guarded check-and-set. False if anyone holds it.
    release(owner)  idempotent. No-op unless `owner` is the holder.

One token is created per bomb and injected into every session on it, so
tests can give each session its own token and exercise them separately.
"""

from __future__ import annotations
import logging
import threading
from typing import Callable

from settings import SLOWED_TIME_SCALE, NORMAL_TIME_SCALE

logger = logging.getLogger(__name__)


class TimeScaleToken:
    """Mutually exclusive right to slow the host's time.

    Attributes:
        _apply:  Callback receiving the new host time scale, or None.
        _holder: The current owner, or None when free.
    """

    def __init__(self, apply: Callable[[float], None] | None = None) -> None:
        self._apply  = apply
        self._lock   = threading.Lock()
        self._holder: object | None = None

    @property
    def held(self) -> bool:
        return self._holder is not None

    def held_by(self, owner: object) -> bool:
        return self._holder is owner

    def acquire(self, owner: object) -> bool:
        """Try to take the token and slow time.

        Returns:
            True on success, False if another owner already holds it.
        """
        with self._lock:
            if self._holder is not None:
                return False
            self._holder = owner

        logger.debug("Time scale token acquired by %r", owner)
        if self._apply is not None:
            self._apply(SLOWED_TIME_SCALE)
        return True

    def release(self, owner: object) -> None:
        """Give the token back and restore normal time.

        Releasing a token that is free, or held by someone else, does nothing.
        """
        with self._lock:
            if self._holder is not owner:
                return
            self._holder = None

        logger.debug("Time scale token released by %r", owner)
        if self._apply is not None:
            self._apply(NORMAL_TIME_SCALE)
