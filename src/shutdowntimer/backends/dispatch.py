"""Change notification dispatch shared by the backends."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Callable, Final

from shutdowntimer.keys import SettingValue

logger: Final = logging.getLogger(__name__)

ChangeHandler = Callable[[SettingValue], None]


class ChangeNotifier:
    """Per-key table of change handlers.

    Handlers run synchronously on the thread that emits the change, in
    the order they were connected. There is no way to disconnect a
    handler; it lives as long as the notifier.
    """

    def __init__(self) -> None:
        self._handlers: defaultdict[str, list[ChangeHandler]] = defaultdict(list)

    def connect(self, key: str, handler: ChangeHandler) -> None:
        """Register ``handler`` for changes of ``key``."""
        self._handlers[key].append(handler)

    def emit(self, key: str, value: SettingValue) -> None:
        """Call every handler bound to ``key`` with the new value.

        A failing handler is logged and does not stop the others.
        """
        for handler in list(self._handlers.get(key, ())):
            try:
                handler(value)
            except Exception:
                logger.exception("Change handler for '%s' raised", key)
