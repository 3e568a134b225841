# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Domain models — pure data structures, NO FastAPI dependency.

An IncidentEvent is one entry of an incident's append-only history. Its
payload carries typed references to other entities which are resolved
lazily, on demand, through a ReferenceResolver.
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

if TYPE_CHECKING:
    from app.services.reference_resolver import ReferenceResolver


class EventKind(str, Enum):
    OPENED = "opened"
    ACKNOWLEDGED = "acknowledged"
    RESOLVED = "resolved"
    ESCALATED = "escalated"
    COMMENTED = "commented"
    NOTIFIED = "notified"


class EntityKind(str, Enum):
    INCIDENT = "incident"
    USER = "user"
    ESCALATION = "escalation"
    NOTIFIER = "notifier"
    EVENT = "incident_event"


VALID_KINDS = tuple(k.value for k in EventKind)


# ── Collaborator entities ─────────────────────────────────────────────────

class Incident(BaseModel):
    id: str = Field(..., min_length=1)
    title: str = ""
    topic: Optional[str] = None


class User(BaseModel):
    id: str = Field(..., min_length=1)
    name: str
    email: str = ""


class Escalation(BaseModel):
    id: str = Field(..., min_length=1)
    incident_id: str
    user_id: Optional[str] = None
    reason: Optional[str] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


# ── Event payload ─────────────────────────────────────────────────────────

class Reference(BaseModel):
    """Pointer to another entity, stored as ``{"id": ...}``."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, v: Any) -> Any:
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


# payload key -> the entity kind it must resolve to
REFERENCE_KINDS: Dict[str, EntityKind] = {
    "escalated_to": EntityKind.USER,
    "escalation": EntityKind.ESCALATION,
    "notifier": EntityKind.NOTIFIER,
    "event": EntityKind.EVENT,
}


class EventPayload(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    escalated_to: Optional[Reference] = None
    escalation: Optional[Reference] = None
    notifier: Optional[Reference] = None
    event: Optional[Reference] = None
    message: Optional[str] = Field(default=None, max_length=5000)

    @classmethod
    def from_info(cls, info: Optional[Dict[str, Any]]) -> "EventPayload":
        return cls.model_validate(info or {})

    def to_info(self) -> Dict[str, Any]:
        """JSON-shaped mapping; absent references are omitted, never null."""
        return self.model_dump(exclude_none=True)

    def references(self) -> Dict[str, str]:
        return {
            key: getattr(self, key).id
            for key in REFERENCE_KINDS
            if getattr(self, key) is not None
        }


# ── Incident event ────────────────────────────────────────────────────────

class IncidentEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    incident_id: str = Field(..., min_length=1)
    kind: EventKind
    payload: EventPayload = Field(default_factory=EventPayload)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def is_notified(self) -> bool:
        return self.kind is EventKind.NOTIFIED

    def escalated_to(self, resolver: "ReferenceResolver") -> Optional[User]:
        return self.resolve_reference("escalated_to", resolver)

    def escalation(self, resolver: "ReferenceResolver") -> Optional[Escalation]:
        return self.resolve_reference("escalation", resolver)

    def notifier(self, resolver: "ReferenceResolver"):
        return self.resolve_reference("notifier", resolver)

    def event(self, resolver: "ReferenceResolver") -> Optional["IncidentEvent"]:
        return self.resolve_reference("event", resolver)

    def resolve_reference(self, key: str, resolver: "ReferenceResolver") -> Any:
        ref = getattr(self.payload, key)
        if ref is None:
            return None
        return resolver.resolve(REFERENCE_KINDS[key], ref.id)
