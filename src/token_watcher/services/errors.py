"""Errors that escape the usage services to their callers."""


class TokenWatcherError(Exception):
    """Base class for errors surfaced to the user."""


class CredentialsError(TokenWatcherError):
    """Credentials file is missing, unreadable or holds no token."""

    def __init__(self, message: str, path: str = ""):
        super().__init__(message)
        self.path = path


class UsageApiError(TokenWatcherError):
    """A usage endpoint answered with a non-success status."""

    def __init__(self, status_code: int, reason: str = "", service: str = ""):
        label = f"{service} usage API" if service else "Usage API"
        super().__init__(f"{label} error: {status_code} {reason}".rstrip())
        self.status_code = status_code
        self.reason = reason
        self.service = service
