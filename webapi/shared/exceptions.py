"""Error taxonomy for the users API.

Every error carries the HTTP status it maps to; the handlers registered in
``webapi.main`` turn them into responses.
"""

from typing import Dict, List, Optional


class WebApiError(Exception):
    """Base exception for all users API errors."""

    status_code: int = 500

    def __init__(self, message: str, details: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class MalformedRequestError(WebApiError):
    """Absent or unparsable body, or an unusable id."""

    status_code = 400


class NotFoundError(WebApiError):
    status_code = 404


class UserNotFoundError(NotFoundError):
    def __init__(self, user_id):
        super().__init__("User not found", {"user_id": str(user_id)})
        self.user_id = user_id


class PageNotFoundError(NotFoundError):
    def __init__(self, page_number: int, total_pages: int):
        super().__init__(
            "Page out of range",
            {"page_number": str(page_number), "total_pages": str(total_pages)},
        )


class ValidationFailedError(WebApiError):
    """One or more field rules failed; ``errors`` maps field to messages."""

    status_code = 422

    def __init__(self, errors: Dict[str, List[str]]):
        super().__init__("Validation failed", {k: "; ".join(v) for k, v in errors.items()})
        self.errors = errors


class NotAcceptableError(WebApiError):
    status_code = 406

    def __init__(self, accept: str):
        super().__init__("No acceptable representation", {"accept": accept})
