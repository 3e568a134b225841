# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Registry of notification channels.
Populated once at startup, read by every dispatch.
"""

import threading
from typing import Dict, List, Optional

from app.core.exceptions import NotFound
from app.core.logging import get_logger
from app.models.domain import EntityKind
from app.services.notifiers import Notifier

logger = get_logger(__name__)


class NotifierRegistry:
    """Ordered, thread-safe catalog of notifiers."""

    def __init__(self, notifiers: Optional[List[Notifier]] = None) -> None:
        self._lock = threading.RLock()
        self._notifiers: List[Notifier] = []
        self._by_id: Dict[str, Notifier] = {}
        for notifier in notifiers or []:
            self.register(notifier)

    def register(self, notifier: Notifier) -> Notifier:
        with self._lock:
            if notifier.id in self._by_id:
                raise ValueError(f"Notifier '{notifier.id}' is already registered")
            self._notifiers.append(notifier)
            self._by_id[notifier.id] = notifier
        logger.info("Notifier registered id=%s topic=%s", notifier.id, notifier.topic or "*")
        return notifier

    def entries(self) -> List[Notifier]:
        """Snapshot in registration order; safe to iterate without the lock."""
        with self._lock:
            return list(self._notifiers)

    def find(self, notifier_id: str) -> Notifier:
        with self._lock:
            notifier = self._by_id.get(notifier_id)
        if notifier is None:
            raise NotFound(EntityKind.NOTIFIER.value, notifier_id)
        return notifier

    def __len__(self) -> int:
        with self._lock:
            return len(self._notifiers)
