from __future__ import annotations


class BlogError(Exception):
    """Base for every failure reported to the client as ``{"error": message}``."""

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationFailed(BlogError):
    status_code = 403


class DuplicateEmail(BlogError):
    status_code = 409

    def __init__(self, message: str = "Email already exists") -> None:
        super().__init__(message)


class NotFound(BlogError):
    status_code = 404


class InvalidCredentials(BlogError):
    status_code = 403

    def __init__(self, message: str = "Incorrect password") -> None:
        super().__init__(message)


class WrongProvider(BlogError):
    status_code = 403


class MissingToken(BlogError):
    status_code = 401

    def __init__(self, message: str = "No access token") -> None:
        super().__init__(message)


class InvalidToken(BlogError):
    status_code = 403

    def __init__(self, message: str = "Access token is invalid") -> None:
        super().__init__(message)


class Forbidden(BlogError):
    status_code = 403


class DraftAccess(BlogError):
    status_code = 403

    def __init__(self, message: str = "You cannot access draft blogs") -> None:
        super().__init__(message)


class ProviderError(BlogError):
    status_code = 500


class StoreUnavailable(BlogError):
    status_code = 500

    def __init__(self, message: str = "Redis not initialized") -> None:
        super().__init__(message)
