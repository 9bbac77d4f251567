"""Turn a parsed infobook into static HTML files."""

from .context import Breadcrumb, PageRef, SectionIndex, SerializeContext
from .file_writer import FileWriter
from .formatting import format_string
from .html_serializer import HtmlInfoBookSerializer

__all__ = [
    "Breadcrumb",
    "FileWriter",
    "HtmlInfoBookSerializer",
    "PageRef",
    "SectionIndex",
    "SerializeContext",
    "format_string",
]
