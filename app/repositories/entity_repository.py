# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: in-memory stores for the entities events refer to
(incidents, users, escalations).
"""

import threading
from typing import Any, Dict, Optional

from app.models.domain import EntityKind


class EntityRepository:
    """Keyed in-memory store, one per entity kind."""

    def __init__(self, kind: EntityKind) -> None:
        self.kind = kind
        self._lock = threading.Lock()
        self._items: Dict[str, Any] = {}

    # ── Read ──

    def find(self, entity_id: str) -> Optional[Any]:
        with self._lock:
            return self._items.get(entity_id)

    def count(self) -> int:
        with self._lock:
            return len(self._items)

    # ── Write ──

    def add(self, entity: Any) -> Any:
        with self._lock:
            self._items[entity.id] = entity
        return entity

