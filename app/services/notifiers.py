# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Notification channels.

Every notifier delivers an event to its channel and then records a
``notified`` event pointing back at itself, which is how the log keeps
track of who was told.
"""

from typing import Any, Callable, Dict, List, Optional, Protocol

import httpx

from app.core.config import settings
from app.core.logging import get_logger
from app.models.domain import EventKind, IncidentEvent

logger = get_logger(__name__)

# signature of EventService.create
Recorder = Callable[..., Any]


class Notifier(Protocol):
    """Anything with an id, an optional topic and ``notify(event)``.

    ``topic is None`` receives every incident; any other value, including
    the empty string, must equal the incident topic.
    """

    id: str
    topic: Optional[str]

    def notify(self, event: IncidentEvent) -> None:
        ...


class BaseNotifier:
    channel = "base"

    def __init__(self, notifier_id: str, topic: Optional[str] = None,
                 record: Optional[Recorder] = None) -> None:
        self.id = notifier_id
        self.topic = topic or None
        self._record = record

    def notify(self, event: IncidentEvent) -> None:
        self.deliver(event)
        if self._record is not None:
            self._record(
                event.incident_id,
                EventKind.NOTIFIED,
                {"notifier": {"id": self.id}, "event": {"id": event.id}},
            )

    def deliver(self, event: IncidentEvent) -> None:
        raise NotImplementedError

    def describe(self) -> Dict[str, Any]:
        return {"id": self.id, "channel": self.channel, "topic": self.topic}

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.id} topic={self.topic or '*'}>"


class LogNotifier(BaseNotifier):
    """Console delivery through the structured logger."""

    channel = "log"

    def deliver(self, event: IncidentEvent) -> None:
        logger.info(
            "[NOTIFY %s] incident=%s event=%s kind=%s message=%s",
            self.id, event.incident_id, event.id, event.kind.value,
            event.payload.message or "",
        )


class WebhookNotifier(BaseNotifier):
    channel = "webhook"

    def __init__(self, notifier_id: str, url: str, topic: Optional[str] = None,
                 record: Optional[Recorder] = None, timeout: float = 5.0) -> None:
        super().__init__(notifier_id, topic, record)
        self.url = url
        self.timeout = timeout

    def deliver(self, event: IncidentEvent) -> None:
        with httpx.Client(timeout=self.timeout) as client:
            resp = client.post(self.url, json={
                "notifier": self.id,
                "event_id": event.id,
                "incident_id": event.incident_id,
                "kind": event.kind.value,
                "payload": event.payload.to_info(),
                "created_at": event.created_at.isoformat(),
            })
        if resp.status_code >= 300:
            raise RuntimeError(f"Webhook {self.url} returned {resp.status_code}")
        logger.info("Webhook delivered to %s for event %s (status=%s)",
                    self.url, event.id, resp.status_code)


CHANNELS = {
    "log": LogNotifier,
    "webhook": WebhookNotifier,
}


def build_notifiers(config: str, record: Optional[Recorder] = None) -> List[BaseNotifier]:
    """Build notifiers from ``channel[:topic]`` entries, e.g. ``"log:*,webhook:db"``."""
    notifiers: List[BaseNotifier] = []
    for entry in (part.strip() for part in config.split(",")):
        if not entry:
            continue
        channel, _, topic = entry.partition(":")
        channel = channel.strip().lower()
        topic = topic.strip()
        if topic == "*":
            topic = ""
        if channel not in CHANNELS:
            raise ValueError(f"Unknown notifier channel '{channel}'. Allowed: {sorted(CHANNELS)}")
        notifier_id = f"{channel}-{topic or 'all'}"
        if channel == "webhook":
            if not settings.WEBHOOK_URL:
                raise ValueError("WEBHOOK_URL must be set to use the webhook notifier")
            notifiers.append(WebhookNotifier(notifier_id, settings.WEBHOOK_URL, topic, record,
                                             timeout=settings.WEBHOOK_TIMEOUT))
        else:
            notifiers.append(CHANNELS[channel](notifier_id, topic, record))
    return notifiers
