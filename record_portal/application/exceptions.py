"""Application-layer exceptions. Do not reuse domain exceptions."""


class ApplicationError(Exception):
    """Base for all application-layer errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class SyncFailureError(ApplicationError):
    """Raised when the simulated sync rejects an edit. Nothing was applied; the agent may resubmit."""


class ModalStateError(ApplicationError):
    """Raised when a workspace action does not fit the open modal (e.g. two modals at once)."""
