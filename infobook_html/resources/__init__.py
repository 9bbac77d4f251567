"""Game resources (translations, icons, advancements) used by the book."""

from .handler import DEFAULT_TRANSLATIONS, Advancement, ResourceHandler
from .loader import ResourceLoader, parse_lang_file

__all__ = [
    "DEFAULT_TRANSLATIONS",
    "Advancement",
    "ResourceHandler",
    "ResourceLoader",
    "parse_lang_file",
]
