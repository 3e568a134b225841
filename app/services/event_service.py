# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Business logic for the incident event log.

``create`` is the single entry point for new events: validate, append,
then dispatch. A notifier that records its own ``notified`` event re-enters
``create``; that nested dispatch stops immediately, which ends the recursion.
"""
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from app.core.exceptions import NotFound, ValidationError
from app.core.logging import get_logger
from app.metrics import EVENTS_CREATED, EVENTS_IN_LOG, EVENTS_REJECTED
from app.models.domain import VALID_KINDS, EventKind, EventPayload, IncidentEvent
from app.repositories.event_repository import EventRepository
from app.services.dispatch_engine import DispatchEngine
from app.services.reference_resolver import ReferenceResolver

logger = get_logger(__name__)

PayloadInput = Union[EventPayload, Dict[str, Any], None]


class EventService:
    def __init__(self, repo: EventRepository, resolver: ReferenceResolver,
                 dispatcher: DispatchEngine):
        self._repo = repo
        self._resolver = resolver
        self._dispatcher = dispatcher

    def create(self, incident_id: str, kind: Union[EventKind, str],
               payload: PayloadInput = None) -> IncidentEvent:
        event = self._build(incident_id, kind, payload)
        self._repo.append(event)
        EVENTS_CREATED.labels(kind=event.kind.value).inc()
        EVENTS_IN_LOG.inc()
        logger.info("Event appended id=%s incident=%s kind=%s",
                    event.id, event.incident_id, event.kind.value)

        # failures propagate; the appended event is kept
        self._dispatcher.dispatch(event)
        return event

    def get_event(self, event_id: str) -> Optional[IncidentEvent]:
        return self._repo.find(event_id)

    def list_events(self, incident_id: str,
                    kind: Optional[str] = None) -> List[IncidentEvent]:
        self._resolver.incident(incident_id)
        return self._repo.list_for_incident(incident_id, kind)

    def references(self, event_id: str) -> Dict[str, Any]:
        event = self._repo.find(event_id)
        if event is None:
            raise NotFound("incident_event", event_id)
        return self._resolver.resolve_all(event)

    def _build(self, incident_id: str, kind: Union[EventKind, str],
               payload: PayloadInput) -> IncidentEvent:
        if not incident_id or not str(incident_id).strip():
            self._reject("incident_id is required")
        if kind is None or kind == "":
            self._reject("kind is required")
        try:
            kind = EventKind(kind)
        except ValueError:
            self._reject(f"kind must be one of {VALID_KINDS}, got '{kind}'")
        try:
            if not isinstance(payload, EventPayload):
                payload = EventPayload.from_info(payload)
        except PydanticValidationError as exc:
            self._reject(f"invalid payload: {exc.errors()[0]['msg']}")
        try:
            self._resolver.incident(incident_id)
        except NotFound:
            self._reject(f"incident {incident_id} does not exist")
        return IncidentEvent(incident_id=incident_id, kind=kind, payload=payload)

    def _reject(self, reason: str):
        EVENTS_REJECTED.inc()
        logger.warning("Event rejected: %s", reason)
        raise ValidationError(reason)
