from typing import Optional


class FMCError(Exception):
    """Base exception for FMC REST operations."""

    def __init__(self, message: str, status_code: Optional[int] = None, status_text: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.status_text = status_text


class AuthError(FMCError):
    """Raised when token generation or refresh fails."""
    pass


class UnauthorizedError(FMCError):
    """Raised when FMC answers 401 on an authenticated call (expired or invalid token)."""
    pass


class RequestError(FMCError):
    """Raised when FMC returns any other unexpected status."""
    pass


class FMCConnectionError(RequestError):
    """Raised when the request never produced an acceptable HTTP response."""
    pass
