"""Shared Jinja environment for page and appendix templates."""

from __future__ import annotations

import functools
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, Template

TEMPLATES_DIR = Path(__file__).parent / "templates"


def build_environment(templates_dir: Path | None = None) -> Environment:
    """Return an autoescaping environment rooted at ``templates_dir``."""
    return Environment(
        loader=FileSystemLoader(str(templates_dir or TEMPLATES_DIR)),
        autoescape=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )


@functools.cache
def _default_environment() -> Environment:
    return build_environment()


def get_template(name: str) -> Template:
    """Return a template from the package templates directory."""
    return _default_environment().get_template(name)


__all__ = ["TEMPLATES_DIR", "build_environment", "get_template"]
