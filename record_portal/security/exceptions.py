"""Security-layer exceptions. Typed, no HTTP."""


class SecurityError(Exception):
    """Base for all security-layer errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class AuthenticationError(SecurityError):
    """Raised when the username/password pair is not the configured one."""


class SessionRequiredError(SecurityError):
    """Raised when a request carries no session token or an unknown one."""
