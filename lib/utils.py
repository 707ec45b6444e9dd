# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application:
# - UUID parsing for id-or-slug lookups
# - Slug generation for apps and categories
# - Base error class with actionable messages
# =============================================================================

import re
import time
from typing import Any
from uuid import UUID


# =============================================================================
# UUID Utilities
# =============================================================================

def parse_uuid(value: str) -> UUID | None:
    """Return the UUID for `value`, or None if it isn't one."""
    try:
        return UUID(value)
    except (ValueError, TypeError, AttributeError):
        return None


# =============================================================================
# Slug Utilities
# =============================================================================

# ASCII word characters only, so non-latin letters are dropped rather than
# leaking into URLs.
_WHITESPACE_RE = re.compile(r"\s+")
_NON_SLUG_RE = re.compile(r"[^\w\-]+", re.ASCII)
_MULTI_HYPHEN_RE = re.compile(r"-{2,}")


def slugify(text: Any) -> str:
    """
    Turn a display name into a URL-safe identifier.

    Steps:
    1. Lowercase and trim
    2. Replace whitespace runs with a hyphen
    3. Drop anything that isn't a letter, digit, underscore or hyphen
    4. Collapse repeated hyphens and strip them from both ends

    The result is stable: slugifying a slug returns it unchanged.
    Input made only of whitespace/punctuation yields an empty string.

    Example:
        slugify("  My Cool App! ")  # "my-cool-app"
    """
    slug = str(text).lower().strip()
    slug = _WHITESPACE_RE.sub("-", slug)
    slug = _NON_SLUG_RE.sub("", slug)
    slug = _MULTI_HYPHEN_RE.sub("-", slug)
    return slug.strip("-")


def unique_slug(slug: str, now_ms: int | None = None) -> str:
    """
    Disambiguate a slug that is already taken.

    Appends the current time in milliseconds, which is monotonically
    increasing so no retry loop is needed.
    """
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"{slug}-{now_ms}"


# =============================================================================
# Base Error Class
# =============================================================================

class ApplicationError(Exception):
    """
    Base error class for application-specific errors.

    Provides actionable error messages following the principle:
    "Errors should tell HOW to fix, not just WHAT failed."

    Attributes:
        code: Error code for categorization
        message: Human-readable error message
        suggestion: Actionable suggestion for fixing the error
        details: Additional context for debugging
    """

    def __init__(
        self,
        message: str,
        code: str = "APPLICATION_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f"\n  Suggestion: {self.suggestion}"
        return result

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for API responses."""
        result: dict[str, Any] = {
            "error": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result
