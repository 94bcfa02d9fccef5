# -*- coding: utf-8 -*-
"""
Observer support shared by the resource models.

Each model declares the events it raises; subscribers register callbacks
per event. Callback errors are logged and never reach the mutating caller.
"""

from typing import Callable, Dict, Iterable, List

from resxsync_logger import get_logger

logger = get_logger("models.observable")


class Observable:
    """Per-instance event subscriptions (no global bus)."""

    def __init__(self, events: Iterable[str]):
        self._observers: Dict[str, List[Callable]] = {event: [] for event in events}

    def subscribe(self, event: str, callback: Callable):
        """
        Subscribe to an event.

        Args:
            event: Event name declared by the model
            callback: Function to call when the event occurs
        """
        if event in self._observers:
            self._observers[event].append(callback)
        else:
            logger.warning(f"Unknown event type: {event}")

    def unsubscribe(self, event: str, callback: Callable):
        """Unsubscribe from an event."""
        if event in self._observers and callback in self._observers[event]:
            self._observers[event].remove(callback)

    def _notify(self, event: str, *args):
        """Notify all subscribers of an event."""
        for callback in list(self._observers.get(event, [])):
            try:
                callback(*args)
            except Exception as e:
                logger.error(f"Error in observer callback for '{event}': {e}")
