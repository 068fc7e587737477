"""Governance-layer exceptions. Typed, no HTTP."""


class GovernanceError(Exception):
    """Base for all governance-layer errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NoChangesError(GovernanceError):
    """Raised when an edit changes no field and carries no notes; nothing to audit."""
