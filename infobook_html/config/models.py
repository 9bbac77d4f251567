"""Typed dataclasses describing an infobook build configuration."""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path


class InfobookConfigError(ValueError):
    """Raised when the infobook configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class ThemeConfig:
    """Colours exposed to page templates as CSS custom properties."""

    colors: dict[str, str] = dc.field(default_factory=dict)


@dc.dataclass(slots=True)
class InjectionConfig:
    """An external infobook document appended below a target section."""

    file: Path
    mod_id: str


@dc.dataclass(slots=True)
class AdConfig:
    """Ad network identifiers rendered at the top of every leaf page."""

    client: str
    slot: str


@dc.dataclass(slots=True)
class InfobookConfig:
    """Complete configuration for one infobook build.

    Attributes
    ----------
    mod_id : str
        Identifier of the mod that owns the book.
    base_dir : Path
        Directory containing the book's XML documents.
    sections_file : str
        Path of the root document, relative to ``base_dir``.
    title : str
        Site title shown in every page header.
    base_url : str
        Public URL prefix of the output, always ending in ``/``.
    theme : ThemeConfig
        Colours passed to templates.
    plugins : list[str]
        ``module:attribute`` import paths of plugins to load.
    injections : dict[str, list[InjectionConfig]]
        External documents keyed by the section they are appended to.
    recipe_overrides : dict[str, dict[str, Any]]
        Per recipe type, registry entries that replace harvested ones.
    google_adsense : AdConfig | None
        Ad unit identifiers, or None to render no ads.
    keybindings : dict[str, str]
        Keybinding labels added to the harvested ones; ids must not repeat.
    resources : list[Path]
        Resource-pack roots whose child directories are mod namespaces.
    registries_dir : Path
        Directory of harvested registry JSON files.
    icons_dir : Path
        Directory of exported item and fluid icons.
    assets_dirs : list[Path]
        Extra static directories copied into the output ``assets``.
    raw : dict[str, Any]
        The unparsed mapping, so plugins can read their own keys.
    """

    mod_id: str
    base_dir: Path
    sections_file: str
    title: str = ""
    base_url: str = "/"
    theme: ThemeConfig = dc.field(default_factory=ThemeConfig)
    plugins: list[str] = dc.field(default_factory=list)
    injections: dict[str, list[InjectionConfig]] = dc.field(default_factory=dict)
    recipe_overrides: dict[str, dict[str, typ.Any]] = dc.field(default_factory=dict)
    google_adsense: AdConfig | None = None
    keybindings: dict[str, str] = dc.field(default_factory=dict)
    resources: list[Path] = dc.field(default_factory=list)
    registries_dir: Path = dc.field(default_factory=lambda: Path("registries"))
    icons_dir: Path = dc.field(default_factory=lambda: Path("icons"))
    assets_dirs: list[Path] = dc.field(default_factory=list)
    raw: dict[str, typ.Any] = dc.field(default_factory=dict)


__all__ = [
    "AdConfig",
    "InfobookConfig",
    "InfobookConfigError",
    "InjectionConfig",
    "ThemeConfig",
]
