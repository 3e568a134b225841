# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Data-access layer for the append-only incident event log."""
import json
import threading
from contextlib import contextmanager, nullcontext
from datetime import datetime
from typing import List, Optional

from sqlalchemy import Column, Integer, MetaData, String, Table, Text, text
from sqlalchemy.engine import Engine

from app.core.logging import get_logger
from app.models.domain import EventKind, EventPayload, IncidentEvent

logger = get_logger(__name__)

metadata = MetaData()

incident_events = Table(
    "incident_events",
    metadata,
    Column("seq", Integer, primary_key=True, autoincrement=True),
    Column("id", String(36), nullable=False, unique=True),
    Column("incident_id", String(255), nullable=False, index=True),
    Column("kind", String(32), nullable=False),
    Column("info", Text, nullable=False),
    Column("created_at", String(64), nullable=False),
)

EVENT_COLS = "id, incident_id, kind, info, created_at"


def _row_to_event(row) -> IncidentEvent:
    return IncidentEvent(
        id=str(row[0]),
        incident_id=row[1],
        kind=row[2],
        payload=EventPayload.from_info(json.loads(row[3] or "{}")),
        created_at=datetime.fromisoformat(row[4]),
    )


class EventRepository:
    """Events are only ever inserted; there is no update or delete path."""

    def __init__(self, engine: Engine):
        self._engine = engine
        # SQLite shares a single DBAPI connection across threads (see
        # build_engine), so every use of it is serialized here
        self._serial = threading.RLock() if engine.dialect.name == "sqlite" else nullcontext()

    def ensure_schema(self) -> None:
        with self._serial:
            metadata.create_all(self._engine)

    @contextmanager
    def _connection(self, write: bool = False):
        with self._serial:
            with (self._engine.begin() if write else self._engine.connect()) as conn:
                yield conn

    # ── Write ──────────────────────────────────────────────────────────

    def append(self, event: IncidentEvent) -> IncidentEvent:
        with self._connection(write=True) as conn:
            conn.execute(
                text("""
                    INSERT INTO incident_events (id, incident_id, kind, info, created_at)
                    VALUES (:id, :iid, :kind, :info, :ts)
                """),
                {"id": event.id, "iid": event.incident_id, "kind": event.kind.value,
                 "info": json.dumps(event.payload.to_info()),
                 "ts": event.created_at.isoformat()},
            )
        return event

    # ── Read ───────────────────────────────────────────────────────────

    def find(self, event_id: str) -> Optional[IncidentEvent]:
        with self._connection() as conn:
            row = conn.execute(
                text(f"SELECT {EVENT_COLS} FROM incident_events WHERE id = :id"),
                {"id": event_id},
            ).fetchone()
        return _row_to_event(row) if row else None

    def list_for_incident(self, incident_id: str,
                          kind: Optional[EventKind] = None) -> List[IncidentEvent]:
        conditions = ["incident_id = :iid"]
        params = {"iid": incident_id}
        if kind:
            conditions.append("kind = :kind")
            params["kind"] = EventKind(kind).value
        with self._connection() as conn:
            rows = conn.execute(
                text(f"SELECT {EVENT_COLS} FROM incident_events "
                     f"WHERE {' AND '.join(conditions)} ORDER BY seq"),
                params,
            ).fetchall()
        return [_row_to_event(r) for r in rows]

    def count(self) -> int:
        with self._connection() as conn:
            return conn.execute(text("SELECT COUNT(*) FROM incident_events")).scalar() or 0

    def verify_connection(self) -> int:
        return self.count()

    def dispose(self):
        self._engine.dispose()
