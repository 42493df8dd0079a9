class DashboardError(Exception):
    """Base class for every failure surfaced to the dashboard user."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.message = message
        self.status = status

    def __str__(self) -> str:
        return self.message


class AuthError(DashboardError):
    """Bad credentials, or a token the server no longer accepts."""


class NetworkError(DashboardError):
    """Timeout, refused connection or other transport failure."""


class ValidationError(DashboardError):
    """Input rejected client-side before any request is sent."""


class ApiError(DashboardError):
    """Business error reported by the server."""
