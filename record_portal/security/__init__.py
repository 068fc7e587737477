"""Security: simulated login and agent sessions. No FastAPI."""

from record_portal.security.auth import AgentSession, SessionRegistry, SimulatedAuthenticator
from record_portal.security.exceptions import (
    AuthenticationError,
    SecurityError,
    SessionRequiredError,
)

__all__ = [
    "AgentSession",
    "AuthenticationError",
    "SecurityError",
    "SessionRegistry",
    "SessionRequiredError",
    "SimulatedAuthenticator",
]
