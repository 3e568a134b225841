# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: lazy resolution of the entity references carried by event payloads.
The resolver owns no storage; each entity kind is backed by an injected
``find(id)`` callable.
"""

from typing import Any, Callable, Dict, Mapping, Optional

from app.core.exceptions import NotFound
from app.models.domain import REFERENCE_KINDS, EntityKind, IncidentEvent

Finder = Callable[[str], Optional[Any]]


class ReferenceResolver:
    def __init__(self, finders: Mapping[EntityKind, Finder]) -> None:
        self._finders: Dict[EntityKind, Finder] = dict(finders)

    def resolve(self, kind: EntityKind, entity_id: str) -> Any:
        """Return the live entity, or raise NotFound."""
        finder = self._finders.get(kind)
        if finder is None:
            raise ValueError(f"No finder registered for entity kind '{kind.value}'")
        try:
            entity = finder(entity_id)
        except KeyError:
            entity = None
        if entity is None:
            raise NotFound(kind.value, entity_id)
        return entity

    def incident(self, incident_id: str):
        return self.resolve(EntityKind.INCIDENT, incident_id)

    def resolve_all(self, event: IncidentEvent) -> Dict[str, Any]:
        """Resolve every reference key of ``event``; absent keys map to None."""
        return {key: event.resolve_reference(key, self) for key in REFERENCE_KINDS}
