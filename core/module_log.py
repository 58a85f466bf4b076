"""
core/module_log.py — Per-instance tagged logging for Flower Button modules.

Every line a module logs starts with "[Flower Button #n]", n counting
instances of the same display name from 1. A log analyser (or a human with
grep) can then follow one module through a bomb with several of them.

Usage:
    log = ModuleLogger("Flower Button")
    log.info("Button released.")        # [Flower Button #1] Button released.
"""

from __future__ import annotations
import logging
import threading

_counter_lock = threading.Lock()
_instance_counts: dict[str, int] = {}

LINE = "═" * 15


def count_next(name: str) -> int:
    """Advance the instance counter for `name` and return the new count."""
    with _counter_lock:
        _instance_counts[name] = _instance_counts.get(name, 0) + 1
        return _instance_counts[name]


def count_current(name: str) -> int:
    with _counter_lock:
        return _instance_counts.get(name, 0)


def count_reset(name: str) -> None:
    with _counter_lock:
        _instance_counts.pop(name, None)


class ModuleLogger(logging.LoggerAdapter):
    """LoggerAdapter that prefixes records with the module's instance tag.

    Args:
        display_name: Name shown in the tag and used for counting.
        index:        Explicit instance number. Counted automatically when
                      omitted; pass `False` for a tag without a number.
        logger:       Underlying logger. Defaults to this module's logger.
    """

    def __init__(
        self,
        display_name: str,
        index: int | bool | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        if index is False:
            tag = f"[{display_name}]"
        else:
            if index is None:
                index = count_next(display_name)
            tag = f"[{display_name} #{index}]"
        super().__init__(logger or logging.getLogger(__name__), {"module_tag": tag})
        self.tag = tag

    def process(self, msg, kwargs):
        return f"{self.tag} {msg}", kwargs

    def line(self) -> None:
        self.info(LINE)
