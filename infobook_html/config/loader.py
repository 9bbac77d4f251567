"""Load infobook configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ

from ruamel.yaml import YAML

from .helpers import (
    _build_ad_config,
    _build_injections,
    _build_plugins,
    _build_recipe_overrides,
    _build_theme_config,
    _normalize_base_url,
    _optional_str,
    _require_str,
    _resolve_path,
    _resolve_paths,
    _string_mapping,
)
from .models import InfobookConfig

if typ.TYPE_CHECKING:
    from pathlib import Path


def load_infobook_config(path: Path) -> InfobookConfig:
    """Load the YAML configuration describing one infobook build.

    Relative paths in the file are resolved against the directory that
    contains it, so a build behaves the same from any working directory.

    Parameters
    ----------
    path : Path
        Filesystem path to the configuration file. JSON documents are valid
        YAML 1.2 and load unchanged.

    Returns
    -------
    InfobookConfig
        Parsed configuration with resolved paths and defaults applied.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    InfobookConfigError
        If a required field is missing or a field has the wrong shape.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> config = load_infobook_config(Path("infobook.yaml"))  # doctest: +SKIP
    >>> config.base_url  # doctest: +SKIP
    '/'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    return build_infobook_config(raw, path.resolve().parent)


def build_infobook_config(raw: typ.Mapping[str, typ.Any], root: Path) -> InfobookConfig:
    """Build an :class:`InfobookConfig` from an already-parsed mapping."""
    mod_id = _require_str(raw, "mod_id")
    base_dir = _resolve_path(root, _require_str(raw, "base_dir"))
    sections_file = _require_str(raw, "sections_file")

    return InfobookConfig(
        mod_id=mod_id,
        base_dir=base_dir,
        sections_file=sections_file,
        title=_optional_str(raw.get("title")) or "",
        base_url=_normalize_base_url(raw.get("base_url")),
        theme=_build_theme_config(raw.get("colors")),
        plugins=_build_plugins(raw.get("plugins")),
        injections=_build_injections(root, raw.get("sections")),
        recipe_overrides=_build_recipe_overrides(raw.get("recipe_overrides")),
        google_adsense=_build_ad_config(raw.get("google_adsense")),
        keybindings=_string_mapping(raw.get("keybindings"), "keybindings"),
        resources=_resolve_paths(root, raw.get("resources"), "resources"),
        registries_dir=_resolve_path(root, raw.get("registries_dir") or "registries"),
        icons_dir=_resolve_path(root, raw.get("icons_dir") or "icons"),
        assets_dirs=_resolve_paths(root, raw.get("assets_dirs"), "assets_dirs"),
        raw=dict(raw),
    )


__all__ = ["build_infobook_config", "load_infobook_config"]
