"""Viewport visibility registry for lazily rendered broadcast cards."""

from __future__ import annotations

import logging
from collections.abc import Hashable
from typing import Callable, Iterable

logger = logging.getLogger(__name__)

VisibilityCallback = Callable[[bool], None]


class VisibilityRegistry:
    """Maps element keys to callbacks fired when their visibility changes.

    Owned by the component that renders the elements; leaving the ``with``
    block drops every registration.
    """

    def __init__(self) -> None:
        self._callbacks: dict[Hashable, VisibilityCallback] = {}

    def observe(self, key: Hashable, callback: VisibilityCallback) -> None:
        self._callbacks[key] = callback

    def unobserve(self, key: Hashable) -> None:
        self._callbacks.pop(key, None)

    def notify(self, key: Hashable, visible: bool) -> bool:
        """Fire the callback for *key*. Returns False for unknown keys."""
        callback = self._callbacks.get(key)
        if callback is None:
            logger.debug("Visibility change for unobserved key %r ignored", key)
            return False
        callback(visible)
        return True

    def notify_many(self, entries: Iterable[tuple[Hashable, bool]]) -> int:
        """Dispatch a batch of ``(key, visible)`` changes; returns how many fired."""
        return sum(1 for key, visible in entries if self.notify(key, visible))

    def clear(self) -> None:
        self._callbacks.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._callbacks

    def __len__(self) -> int:
        return len(self._callbacks)

    def __enter__(self) -> "VisibilityRegistry":
        return self

    def __exit__(self, *exc_info) -> None:
        self.clear()
