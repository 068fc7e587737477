"""Simulated login and in-memory agent sessions. Placeholder only, not a security boundary. No FastAPI."""

import asyncio
import logging
import secrets
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from record_portal.domain.models.record import AgentIdentity
from record_portal.security.exceptions import AuthenticationError, SessionRequiredError

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid credentials. Please contact your administrator."


@dataclass(frozen=True)
class AgentSession:
    token: str
    agent: AgentIdentity
    created_at: datetime


class SessionRegistry:
    """Token -> session map for the lifetime of the process."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._sessions: dict[str, AgentSession] = {}

    def open(self, agent: AgentIdentity) -> AgentSession:
        session = AgentSession(
            token=secrets.token_urlsafe(24),
            agent=agent,
            created_at=datetime.now(timezone.utc),
        )
        with self._lock:
            self._sessions[session.token] = session
        return session

    def resolve(self, token: Optional[str]) -> AgentSession:
        """Return the session for token. Raises SessionRequiredError if missing or unknown."""
        if not token or not token.strip():
            raise SessionRequiredError("X-Session-Token header is required")
        with self._lock:
            session = self._sessions.get(token.strip())
        if session is None:
            raise SessionRequiredError("Session is invalid or has ended")
        return session

    def close(self, token: str) -> bool:
        with self._lock:
            return self._sessions.pop(token, None) is not None


class SimulatedAuthenticator:
    """
    Fixed stand-in for real authentication: after delay_seconds, accepts exactly one
    credential pair and opens a session for the configured agent.
    """

    def __init__(
        self,
        *,
        username: str,
        password: str,
        agent: AgentIdentity,
        sessions: SessionRegistry,
        delay_seconds: float = 1.2,
    ) -> None:
        self._username = username
        self._password = password
        self._agent = agent
        self._sessions = sessions
        self._delay = delay_seconds

    async def login(self, username: str, password: str) -> AgentSession:
        """Verbatim comparison after the simulated network delay. Raises AuthenticationError."""
        await asyncio.sleep(self._delay)
        if username != self._username or password != self._password:
            logger.info("login_rejected")
            raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)
        session = self._sessions.open(self._agent)
        logger.info("login_succeeded", extra={"agent_id": self._agent.agent_id})
        return session
