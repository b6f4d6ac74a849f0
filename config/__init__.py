"""Configuration package: settings, logging, and exceptions."""

from config.exceptions import (
    NovelShelfError,
    ServiceError,
    ServiceResponseError,
    ServiceTransportError,
    NotFoundError,
    NovelNotFoundError,
    ChapterNotFoundError,
    DatabaseError,
    NotModifiedError,
    ValidationError,
    InvalidChapterNumberError,
    MissingSourceUrlError,
    InvalidConfigError,
)
from config.logging_config import setup_logging
from config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
    "setup_logging",
    "NovelShelfError",
    "ServiceError",
    "ServiceResponseError",
    "ServiceTransportError",
    "NotFoundError",
    "NovelNotFoundError",
    "ChapterNotFoundError",
    "DatabaseError",
    "NotModifiedError",
    "ValidationError",
    "InvalidChapterNumberError",
    "MissingSourceUrlError",
    "InvalidConfigError",
]
