# type: ignore
# pyright: reportGeneralTypeIssues=false
"""
Incident Event Service
======================
Records the lifecycle of an incident as an append-only log of typed events
(opened, acknowledged, resolved, escalated, commented, notified) and fans
every new event out to the registered notification channels.

    POST /api/v1/incidents/{id}/events ─► append ─► dispatch ─► notifiers
                                                        │
                        notifier records "notified" ◄───┘  (never re-dispatched)
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.controllers import event_controller, system_controller
from app.core.config import settings
from app.core.dependencies import get_container
from app.core.logging import get_logger
from app.metrics import EVENTS_IN_LOG
from app.middleware import MetricsMiddleware, RequestIDMiddleware
from app.schemas import ErrorResponse

logger = get_logger("main")


@asynccontextmanager
async def lifespan(application: FastAPI):
    container = get_container()
    EVENTS_IN_LOG.set(container.events.count())
    logger.info("Incident event service starting — %d notifiers registered, %d events in log",
                len(container.registry), container.events.count())
    yield
    logger.info("Incident event service shutting down")
    container.dispose()


app = FastAPI(
    title="Incident Event Service",
    description="Append-only incident event log with topic-filtered notifier dispatch.",
    version=settings.SERVICE_VERSION,
    lifespan=lifespan,
    responses={
        422: {"model": ErrorResponse, "description": "Validation error"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(MetricsMiddleware)
app.add_middleware(RequestIDMiddleware)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    req_id = getattr(request.state, "request_id", None)
    logger.exception("Unhandled exception", extra={"request_id": req_id})
    return JSONResponse(
        status_code=500,
        content={"error": "internal_server_error", "detail": str(exc), "request_id": req_id},
    )


app.include_router(system_controller.router)
app.include_router(event_controller.router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.SERVICE_PORT, log_level="info")
