class ReportEngineError(Exception):
    """Base class for report engine failures."""


class AuthenticationError(ReportEngineError):
    """Upstream rejected our credentials (401/403)."""


class ValidationError(ReportEngineError):
    """Upstream rejected the query itself (400)."""

    def __init__(self, detail: str = ""):
        super().__init__(detail or "Invalid request")
        self.detail = detail


class TransientServiceError(ReportEngineError):
    """Rate limiting, upstream 5xx or a network failure. Safe to retry."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class DataUnavailable(ReportEngineError):
    """Optional input (sprint, leave, holidays) could not be obtained."""


class ReportGenerationError(ReportEngineError):
    """
    The single error surfaced to callers when report generation fails.

    The message names the failing operation and, for rejected queries, the
    upstream detail. The typed cause is kept on ``__cause__``.
    """

    def __init__(self, operation: str, detail: str | None = None):
        message = f"Failed to {operation}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.operation = operation
        self.detail = detail
