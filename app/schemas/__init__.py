# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Pydantic request/response schemas."""
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, field_validator

from app.models.domain import VALID_KINDS, IncidentEvent


class EventCreate(BaseModel):
    kind: str
    payload: Optional[Dict[str, Any]] = None

    @field_validator("kind")
    @classmethod
    def normalise_kind(cls, v: str) -> str:
        v = v.lower().strip()
        if v not in VALID_KINDS:
            raise ValueError(f"kind must be one of {VALID_KINDS}")
        return v


class EventOut(BaseModel):
    id: str
    incident_id: str
    kind: str
    payload: Dict[str, Any] = {}
    created_at: str

    @classmethod
    def from_event(cls, event: IncidentEvent) -> "EventOut":
        return cls(
            id=event.id, incident_id=event.incident_id, kind=event.kind.value,
            payload=event.payload.to_info(), created_at=event.created_at.isoformat(),
        )


class Timeline(BaseModel):
    incident_id: str
    total: int
    events: List[EventOut]


class EventReferences(BaseModel):
    event_id: str
    escalated_to: Optional[Dict[str, Any]] = None
    escalation: Optional[Dict[str, Any]] = None
    notifier: Optional[Dict[str, Any]] = None
    event: Optional[Dict[str, Any]] = None


class NotifierOut(BaseModel):
    id: str
    channel: str
    topic: Optional[str] = None


class ErrorResponse(BaseModel):
    error: str
    detail: Optional[str] = None
    request_id: Optional[str] = None
