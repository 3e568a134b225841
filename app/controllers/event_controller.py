# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Controller: incident events — append, timeline, lookup, references, notifiers."""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from app.core.dependencies import get_event_service, get_notifier_registry
from app.core.exceptions import NotFound, NotifierError, ValidationError
from app.models.domain import VALID_KINDS
from app.schemas import EventCreate, EventOut, EventReferences, NotifierOut, Timeline
from app.services.event_service import EventService
from app.services.notifier_registry import NotifierRegistry

router = APIRouter(prefix="/api/v1", tags=["Events"])


def _dump(entity):
    if entity is None:
        return None
    if hasattr(entity, "describe"):
        return entity.describe()
    return entity.model_dump(mode="json")


@router.post("/incidents/{incident_id}/events", status_code=201, response_model=EventOut)
def create_event(incident_id: str, body: EventCreate,
                 service: EventService = Depends(get_event_service)):
    try:
        event = service.create(incident_id, body.kind, body.payload)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    except NotifierError as exc:
        raise HTTPException(status_code=502, detail=str(exc))
    return EventOut.from_event(event)


@router.get("/incidents/{incident_id}/events", response_model=Timeline)
def list_events(incident_id: str,
                kind: Optional[str] = Query(default=None),
                service: EventService = Depends(get_event_service)):
    if kind is not None and kind not in VALID_KINDS:
        raise HTTPException(status_code=400, detail=f"kind must be one of {VALID_KINDS}")
    try:
        events = service.list_events(incident_id, kind)
    except NotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    return Timeline(
        incident_id=incident_id, total=len(events),
        events=[EventOut.from_event(e) for e in events],
    )


@router.get("/events/{event_id}", response_model=EventOut)
def get_event(event_id: str, service: EventService = Depends(get_event_service)):
    event = service.get_event(event_id)
    if event is None:
        raise HTTPException(status_code=404, detail="Event not found")
    return EventOut.from_event(event)


@router.get("/events/{event_id}/references", response_model=EventReferences)
def get_event_references(event_id: str,
                         service: EventService = Depends(get_event_service)):
    try:
        refs = service.references(event_id)
    except NotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    return EventReferences(event_id=event_id, **{k: _dump(v) for k, v in refs.items()})


@router.get("/notifiers", response_model=list[NotifierOut])
def list_notifiers(registry: NotifierRegistry = Depends(get_notifier_registry)):
    return [NotifierOut(**n.describe()) for n in registry.entries()]
