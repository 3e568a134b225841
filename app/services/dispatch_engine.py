# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: fan a newly appended event out to the registered notifiers.

Notifiers run synchronously, one after the other, in registration order.
The first failure stops the fan-out and is raised as NotifierError.
"""

from typing import List

from app.core.exceptions import NotifierError
from app.core.logging import get_logger
from app.metrics import DISPATCH_DURATION, NOTIFIER_CALLS
from app.models.domain import IncidentEvent
from app.services.notifier_registry import NotifierRegistry
from app.services.reference_resolver import ReferenceResolver

logger = get_logger(__name__)


class DispatchEngine:
    def __init__(self, registry: NotifierRegistry, resolver: ReferenceResolver) -> None:
        self._registry = registry
        self._resolver = resolver

    def dispatch(self, event: IncidentEvent) -> List[str]:
        """Invoke every matching notifier; return the ids of those invoked."""
        # a notified event records a dispatch that already happened
        if event.is_notified():
            return []

        incident = self._resolver.incident(event.incident_id)
        invoked: List[str] = []
        with DISPATCH_DURATION.time():
            for notifier in self._registry.entries():
                if notifier.topic is not None and notifier.topic != incident.topic:
                    logger.debug("Notifier %s skipped: topic=%s incident_topic=%s",
                                 notifier.id, notifier.topic, incident.topic)
                    continue
                try:
                    notifier.notify(event)
                except NotifierError:
                    NOTIFIER_CALLS.labels(notifier=notifier.id, status="failed").inc()
                    raise
                except Exception as exc:
                    NOTIFIER_CALLS.labels(notifier=notifier.id, status="failed").inc()
                    logger.error("Notifier %s failed for event %s: %s",
                                 notifier.id, event.id, exc)
                    raise NotifierError(notifier.id, event.id, str(exc)) from exc
                NOTIFIER_CALLS.labels(notifier=notifier.id, status="sent").inc()
                invoked.append(notifier.id)

        logger.info("Event dispatched id=%s incident=%s kind=%s notifiers=%d",
                    event.id, event.incident_id, event.kind.value, len(invoked))
        return invoked
