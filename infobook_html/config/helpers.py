"""Utility helpers shared by the infobook configuration loader."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from .models import AdConfig, InfobookConfigError, InjectionConfig, ThemeConfig


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _require_str(raw: typ.Mapping[str, typ.Any], key: str) -> str:
    """Return the non-empty string stored under ``key``."""
    value = _optional_str(raw.get(key))
    if value is None:
        msg = f"Missing {key} field for infobook construction"
        raise InfobookConfigError(msg)
    return value


def _normalize_base_url(value: object | None) -> str:
    """Return ``value`` with exactly one trailing slash, defaulting to ``/``."""
    text = _optional_str(value)
    if text is None:
        return "/"
    return text.rstrip("/") + "/"


def _resolve_path(root: Path, value: object) -> Path:
    """Resolve ``value`` against ``root`` unless it is already absolute."""
    path = Path(str(value)).expanduser()
    return path if path.is_absolute() else root / path


def _resolve_paths(root: Path, value: object | None, key: str) -> list[Path]:
    match value:
        case None:
            return []
        case str():
            return [_resolve_path(root, value)]
        case list():
            return [_resolve_path(root, entry) for entry in value]
        case _:
            msg = f"{key} must be a path or a list of paths"
            raise InfobookConfigError(msg)


def _string_mapping(value: object | None, key: str) -> dict[str, str]:
    match value:
        case None:
            return {}
        case dict():
            return {str(name): str(entry) for name, entry in value.items()}
        case _:
            msg = f"{key} must be a mapping"
            raise InfobookConfigError(msg)


def _build_theme_config(payload: object | None) -> ThemeConfig:
    """Build a ThemeConfig from the ``colors`` mapping."""
    return ThemeConfig(colors=_string_mapping(payload, "colors"))


def _build_ad_config(payload: object | None) -> AdConfig | None:
    """Build the ad configuration, or None when ads are disabled."""
    match payload:
        case None:
            return None
        case {"client": client, "slot": slot} if client and slot:
            return AdConfig(client=str(client), slot=str(slot))
        case _:
            msg = "google_adsense needs both a client and a slot"
            raise InfobookConfigError(msg)


def _build_injections(root: Path, payload: object | None) -> dict[str, list[InjectionConfig]]:
    """Build the injection map of target section key to external documents."""
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        msg = "sections must map section keys to lists of documents"
        raise InfobookConfigError(msg)

    injections: dict[str, list[InjectionConfig]] = {}
    for target, entries in payload.items():
        if isinstance(entries, dict):
            entries = [entries]  # noqa: PLW2901
        if not isinstance(entries, list):
            msg = f"sections.{target} must be a list of documents"
            raise InfobookConfigError(msg)
        documents: list[InjectionConfig] = []
        for entry in entries:
            if not isinstance(entry, dict):
                msg = f"sections.{target} entries need a file and a mod_id"
                raise InfobookConfigError(msg)
            documents.append(
                InjectionConfig(
                    file=_resolve_path(root, _require_str(entry, "file")),
                    mod_id=_require_str(entry, "mod_id"),
                )
            )
        injections[str(target)] = documents
    return injections


def _build_recipe_overrides(payload: object | None) -> dict[str, dict[str, typ.Any]]:
    match payload:
        case None:
            return {}
        case dict():
            return {
                str(recipe_type): dict(overrides or {})
                for recipe_type, overrides in payload.items()
            }
        case _:
            msg = "recipe_overrides must be a mapping"
            raise InfobookConfigError(msg)


def _build_plugins(payload: object | None) -> list[str]:
    match payload:
        case None:
            return []
        case str():
            return [payload]
        case list():
            return [str(entry) for entry in payload]
        case _:
            msg = "plugins must be a list of module:attribute paths"
            raise InfobookConfigError(msg)


__all__ = [
    "_build_ad_config",
    "_build_injections",
    "_build_plugins",
    "_build_recipe_overrides",
    "_build_theme_config",
    "_normalize_base_url",
    "_optional_str",
    "_require_str",
    "_resolve_path",
    "_resolve_paths",
    "_string_mapping",
]
