"""Custom exception hierarchy for the novel library."""

from typing import Optional


class NovelShelfError(Exception):
    """Base exception for all library errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


# ---- External Service Errors ----

class ServiceError(NovelShelfError):
    """Base exception for scraper/translation service failures."""


class ServiceResponseError(ServiceError):
    """Service answered with a non-success status or an unusable body."""

    def __init__(self, message: str, status_code: Optional[int] = None, url: str = ""):
        details = {}
        if status_code is not None:
            details["status_code"] = status_code
        if url:
            details["url"] = url
        super().__init__(message, details)
        self.status_code = status_code


class ServiceTransportError(ServiceError):
    """Service could not be reached (connection error, timeout)."""


# ---- Lookup Errors ----

class NotFoundError(NovelShelfError):
    """Requested record does not exist."""


class NovelNotFoundError(NotFoundError):
    """No novel stored under the given identifier."""

    def __init__(self, novel_id: int):
        super().__init__(f"Novel {novel_id} not found", {"novel_id": novel_id})
        self.novel_id = novel_id


class ChapterNotFoundError(NotFoundError):
    """No chapter with the given chapter number in the novel."""

    def __init__(self, chapter_number: str, message: str = ""):
        msg = message or f"Chapter {chapter_number} not found"
        super().__init__(msg, {"chapter_number": chapter_number})
        self.chapter_number = chapter_number


# ---- Database Errors ----

class DatabaseError(NovelShelfError):
    """Database operation failed."""


class NotModifiedError(DatabaseError):
    """A write matched no record."""


# ---- Validation Errors ----

class ValidationError(NovelShelfError):
    """Input validation failed."""


class InvalidChapterNumberError(ValidationError):
    """Chapter number is not a positive integer label."""

    def __init__(self, chapter_number: str):
        super().__init__(
            f"Invalid chapter number: {chapter_number!r}",
            {"chapter_number": chapter_number},
        )
        self.chapter_number = chapter_number


class MissingSourceUrlError(ValidationError):
    """Novel has no recorded source URL, so it cannot be synced."""

    def __init__(self, novel_id: int):
        super().__init__(
            f"Novel {novel_id} has no source URL", {"novel_id": novel_id}
        )


class InvalidConfigError(ValidationError):
    """Configuration value is invalid."""
