# record_portal/main.py

import logging
import random
from typing import Optional

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from record_portal.api.middleware import (
    AgentSessionMiddleware,
    AuditTriggerMiddleware,
    CorrelationIdMiddleware,
)
from record_portal.api.routers import assistant, auth, capture, health, records, workspace
from record_portal.application.exceptions import ApplicationError, ModalStateError, SyncFailureError
from record_portal.application.guidance_service import GuidanceService
from record_portal.application.record_service import RecordService
from record_portal.application.record_store import RecordStore
from record_portal.application.workspace import WorkspaceRegistry
from record_portal.config.logging import configure_logging
from record_portal.config.settings import AppSettings, get_settings
from record_portal.domain.exceptions import (
    DomainError,
    DomainValidationError,
    DuplicateRecordError,
    RecordNotFoundError,
)
from record_portal.domain.models.record import AgentIdentity
from record_portal.governance.exceptions import GovernanceError, NoChangesError
from record_portal.infrastructure.assistant.guidance_client import GuidanceClient, SimulatedGuidanceClient
from record_portal.infrastructure.capture.photo_capture import PhotoCaptureService
from record_portal.infrastructure.seed.synthetic_records import generate_mock_records
from record_portal.infrastructure.sync.simulated_sync import SimulatedSync
from record_portal.observability.metrics import MetricsCollector
from record_portal.scalability.circuit_breaker import CircuitBreaker
from record_portal.security.auth import SessionRegistry, SimulatedAuthenticator
from record_portal.security.exceptions import SecurityError

logger = logging.getLogger(__name__)


def _build_state(app: FastAPI, settings: AppSettings, guidance_client: GuidanceClient) -> None:
    """Wire the in-memory store and simulated collaborators onto app.state."""
    seed = settings.random_seed
    store = RecordStore(
        generate_mock_records(settings.seed_record_count, rng=random.Random(seed))
    )
    metrics = MetricsCollector()
    sync = SimulatedSync(
        delay_seconds=settings.sync_delay_seconds,
        success_rate=settings.sync_success_rate,
        rng=random.Random(None if seed is None else seed + 1),
    )
    record_service = RecordService(store=store, sync=sync, metrics=metrics)
    sessions = SessionRegistry()

    app.state.settings = settings
    app.state.metrics = metrics
    app.state.record_store = store
    app.state.record_service = record_service
    app.state.sessions = sessions
    app.state.workspaces = WorkspaceRegistry(record_service)
    app.state.authenticator = SimulatedAuthenticator(
        username=settings.login_username,
        password=settings.login_password,
        agent=AgentIdentity(agent_id=settings.agent_id, agent_name=settings.agent_name),
        sessions=sessions,
        delay_seconds=settings.login_delay_seconds,
    )
    app.state.guidance_service = GuidanceService(
        client=guidance_client,
        breaker=CircuitBreaker(
            failure_threshold=settings.guidance_failure_threshold,
            recovery_timeout_seconds=settings.guidance_recovery_seconds,
            name="guidance",
            metrics_callback=metrics,
        ),
        metrics=metrics,
    )
    app.state.capture_service = PhotoCaptureService()
    logger.info("record_store_seeded", extra={"record_count": len(store.records())})


def _register_exception_handlers(app: FastAPI) -> None:
    # Starlette resolves handlers along the exception MRO: most specific wins.
    @app.exception_handler(DomainValidationError)
    async def domain_validation_error_handler(request, exc: DomainValidationError):
        return JSONResponse(status_code=422, content={"detail": exc.message, "fields": list(exc.fields)})

    @app.exception_handler(RecordNotFoundError)
    async def record_not_found_handler(request, exc: RecordNotFoundError):
        return JSONResponse(status_code=404, content={"detail": exc.message})

    @app.exception_handler(DuplicateRecordError)
    async def duplicate_record_handler(request, exc: DuplicateRecordError):
        return JSONResponse(status_code=409, content={"detail": exc.message})

    @app.exception_handler(DomainError)
    async def domain_error_handler(request, exc: DomainError):
        return JSONResponse(status_code=400, content={"detail": exc.message})

    @app.exception_handler(NoChangesError)
    async def no_changes_handler(request, exc: NoChangesError):
        return JSONResponse(status_code=422, content={"detail": exc.message})

    @app.exception_handler(GovernanceError)
    async def governance_error_handler(request, exc: GovernanceError):
        return JSONResponse(status_code=400, content={"detail": exc.message})

    @app.exception_handler(SyncFailureError)
    async def sync_failure_handler(request, exc: SyncFailureError):
        return JSONResponse(status_code=503, content={"detail": exc.message, "retry": True})

    @app.exception_handler(ModalStateError)
    async def modal_state_handler(request, exc: ModalStateError):
        return JSONResponse(status_code=409, content={"detail": exc.message})

    @app.exception_handler(ApplicationError)
    async def application_error_handler(request, exc: ApplicationError):
        return JSONResponse(status_code=500, content={"detail": exc.message})

    @app.exception_handler(SecurityError)
    async def security_error_handler(request, exc: SecurityError):
        return JSONResponse(status_code=401, content={"detail": exc.message})

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request, exc: Exception):
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
        )


def create_app(
    settings: Optional[AppSettings] = None,
    guidance_client: Optional[GuidanceClient] = None,
) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        version=settings.version,
        debug=settings.debug,
    )
    _build_state(app, settings, guidance_client or SimulatedGuidanceClient())

    # Middleware order: last added runs first (outermost). Request flow: CorrelationId -> AgentSession -> AuditTrigger.
    app.add_middleware(AuditTriggerMiddleware)
    app.add_middleware(AgentSessionMiddleware)
    app.add_middleware(CorrelationIdMiddleware)

    _register_exception_handlers(app)

    # Routers: /health, /metrics, /auth, /records, /workspace, /assistant, /capture
    app.include_router(health.router)
    app.include_router(auth.router, prefix="/auth")
    app.include_router(records.router, prefix="/records")
    app.include_router(workspace.router, prefix="/workspace")
    app.include_router(assistant.router, prefix="/assistant")
    app.include_router(capture.router, prefix="/capture")
    return app


app = create_app()
