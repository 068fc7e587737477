"""API middleware: correlation ID, agent session, request audit."""

import json
import logging
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from record_portal.core.context import agent_id_ctx, correlation_id_ctx
from record_portal.security.exceptions import SessionRequiredError

logger = logging.getLogger(__name__)

SESSION_HEADER = "X-Session-Token"
CORRELATION_HEADER = "X-Correlation-ID"

# Reachable before login.
PUBLIC_PATHS = frozenset({"/health", "/metrics", "/auth/login", "/docs", "/openapi.json"})


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Generate or preserve correlation ID; attach to request.state, response header, and logging context."""

    async def dispatch(self, request: Request, call_next) -> Response:
        correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())
        request.state.correlation_id = correlation_id
        correlation_id_ctx.set(correlation_id)

        response = await call_next(request)
        response.headers[CORRELATION_HEADER] = correlation_id
        return response


class AgentSessionMiddleware(BaseHTTPMiddleware):
    """Resolve X-Session-Token to the logged-in agent; 401 if missing or unknown on protected paths."""

    async def dispatch(self, request: Request, call_next) -> Response:
        request.state.session = None
        if request.url.path in PUBLIC_PATHS:
            return await call_next(request)
        try:
            session = request.app.state.sessions.resolve(request.headers.get(SESSION_HEADER))
        except SessionRequiredError as e:
            return JSONResponse(status_code=401, content={"detail": e.message})
        request.state.session = session
        agent_id_ctx.set(session.agent.agent_id)
        return await call_next(request)


class AuditTriggerMiddleware(BaseHTTPMiddleware):
    """After response: log structured audit event (correlation_id, agent_id, path, method, status_code)."""

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        session = getattr(request.state, "session", None)
        audit_event = {
            "event": "request_audit",
            "correlation_id": getattr(request.state, "correlation_id", None),
            "agent_id": session.agent.agent_id if session is not None else None,
            "path": request.url.path,
            "method": request.method,
            "status_code": response.status_code,
        }
        logger.info(json.dumps(audit_event))
        return response
