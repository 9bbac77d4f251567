"""Generate static HTML sites from Minecraft mod infobooks.

This package exposes the CLI entry points used by the ``infobook`` console
script to turn a mod's XML infobook, plus the icons, registries and resource
packs harvested from the game, into a multi-language website.

Exports
-------
- ``app``: Cyclopts application with the ``generate`` command.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from infobook_html import main
>>> main(["generate", "infobook.yaml", "public"])  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
