# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Dependency wiring — build repositories, registry and services once,
then hand them to FastAPI through the ``get_*`` functions.
"""

from typing import Optional

from app.core.config import settings
from app.core.database import build_engine
from app.core.logging import get_logger
from app.models.domain import EntityKind, Incident, User
from app.repositories import EntityRepository, EventRepository
from app.services.dispatch_engine import DispatchEngine
from app.services.event_service import EventService
from app.services.notifier_registry import NotifierRegistry
from app.services.notifiers import build_notifiers
from app.services.reference_resolver import ReferenceResolver

logger = get_logger(__name__)


class Container:
    """Everything one running service instance needs, wired together."""

    def __init__(self, database_url: str, notifier_config: str = "") -> None:
        self.engine = build_engine(database_url)
        self.events = EventRepository(self.engine)
        self.events.ensure_schema()
        self.incidents = EntityRepository(EntityKind.INCIDENT)
        self.users = EntityRepository(EntityKind.USER)
        self.escalations = EntityRepository(EntityKind.ESCALATION)
        self.registry = NotifierRegistry()
        self.resolver = ReferenceResolver({
            EntityKind.INCIDENT: self.incidents.find,
            EntityKind.USER: self.users.find,
            EntityKind.ESCALATION: self.escalations.find,
            EntityKind.NOTIFIER: self.registry.find,
            EntityKind.EVENT: self.events.find,
        })
        self.dispatcher = DispatchEngine(self.registry, self.resolver)
        self.service = EventService(self.events, self.resolver, self.dispatcher)
        # notifiers record their "notified" events through the service
        for notifier in build_notifiers(notifier_config, record=self.service.create):
            self.registry.register(notifier)

    def seed_demo_data(self) -> None:
        self.incidents.add(Incident(id="inc-db-latency", title="Primary DB latency", topic="db"))
        self.incidents.add(Incident(id="inc-web-5xx", title="Frontend 5xx spike", topic="web"))
        self.users.add(User(id="alice", name="Alice Martin", email="alice@company.com"))
        self.users.add(User(id="bob", name="Bob Dupont", email="bob@company.com"))
        logger.info("Seeded %d incidents and %d users",
                    self.incidents.count(), self.users.count())

    def dispose(self) -> None:
        self.events.dispose()


def build_container(database_url: Optional[str] = None,
                    notifier_config: Optional[str] = None,
                    seed: bool = False) -> Container:
    container = Container(
        database_url or settings.DATABASE_URL,
        settings.NOTIFIERS if notifier_config is None else notifier_config,
    )
    if seed:
        container.seed_demo_data()
    return container


_container = build_container(seed=settings.SEED_DEMO_DATA)


def get_container() -> Container:
    return _container


def get_event_service() -> EventService:
    return _container.service


def get_notifier_registry() -> NotifierRegistry:
    return _container.registry


def get_event_repo() -> EventRepository:
    return _container.events
