"""Infobook data model.

The book initializer lives in :mod:`infobook_html.infobook.initializer`; it
depends on the parser, which in turn depends on these models.
"""

from .models import Fluid, InfoBook, Item, Section

__all__ = ["Fluid", "InfoBook", "Item", "Section"]
