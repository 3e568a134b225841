# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Repository package — re-exports the event log and entity stores."""
from app.repositories.entity_repository import EntityRepository
from app.repositories.event_repository import EventRepository

__all__ = ["EntityRepository", "EventRepository"]
