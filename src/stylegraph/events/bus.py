"""In-process notifications for a running import."""

from __future__ import annotations

from typing import Any, Callable

Listener = Callable[[Any], None]


class EventBus:
    """Delivers import notifications (start, font reports, completion, failure).

    The convert command prints font reports and the outcome; tests call
    :meth:`record` to capture the whole sequence. Listeners run inline on the
    importer's task, so a slow listener stalls the import.
    """

    def __init__(self) -> None:
        self._by_type: dict[type, list[Listener]] = {}
        self._catch_all: list[Listener] = []

    def subscribe(self, event_type: type, callback: Listener) -> None:
        self._by_type.setdefault(event_type, []).append(callback)

    def on_all(self, callback: Listener) -> None:
        self._catch_all.append(callback)

    def record(self) -> list[Any]:
        """Return a list that fills with every notification emitted from now on."""
        history: list[Any] = []
        self.on_all(history.append)
        return history

    def emit(self, event: Any) -> None:
        # Catch-all listeners see a notification before typed ones.
        for callback in self._catch_all:
            callback(event)
        for callback in self._by_type.get(type(event), []):
            callback(event)
