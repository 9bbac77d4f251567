"""Exception hierarchy raised while building an infobook.

Configuration mistakes surface as :class:`~infobook_html.config.InfobookConfigError`
before any parsing starts. Everything that goes wrong while reading content
derives from :class:`InfobookError`, so the CLI can report it uniformly.
"""

from __future__ import annotations


class InfobookError(Exception):
    """Base class for content errors that abort an infobook build."""


class ParseError(InfobookError):
    """Raised when an infobook XML document cannot be converted."""


class AppendixRegistrationError(InfobookError):
    """Raised when two appendix handlers claim the same type."""


class RecipeNotFoundError(InfobookError):
    """Raised when a recipe appendix references a missing recipe."""


class ResourceLookupError(InfobookError):
    """Raised when a translation, icon or other resource cannot be found."""


class DuplicateResourceError(InfobookError):
    """Raised when a write-once resource is registered twice."""


class InjectionError(InfobookError):
    """Raised when a sub-book targets a section that does not exist."""


__all__ = [
    "AppendixRegistrationError",
    "DuplicateResourceError",
    "InfobookError",
    "InjectionError",
    "ParseError",
    "RecipeNotFoundError",
    "ResourceLookupError",
]
