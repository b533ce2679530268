from typing import Optional


class ValidationError(ValueError):
    """Raised when a repository URL does not match the accepted pattern."""
    pass


class FetchError(RuntimeError):
    """Raised when any upstream request of a fetch cycle fails."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
