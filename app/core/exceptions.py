# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Error taxonomy for event creation, reference resolution and dispatch."""
from typing import Optional


class ValidationError(ValueError):
    """Event creation rejected; nothing was appended to the log."""


class NotFound(KeyError):
    """A referenced entity does not exist."""

    def __init__(self, kind: str, entity_id: str):
        super().__init__(f"{kind} {entity_id} not found")
        self.kind = kind
        self.entity_id = entity_id

    def __str__(self) -> str:
        return self.args[0]


class NotifierError(RuntimeError):
    """A notifier failed while an event was being dispatched.

    The triggering event stays in the log; notifiers registered after the
    failing one were not invoked.
    """

    def __init__(self, notifier_id: str, event_id: str, reason: Optional[str] = None):
        message = f"Notifier {notifier_id} failed for event {event_id}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.notifier_id = notifier_id
        self.event_id = event_id
