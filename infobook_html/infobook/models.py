"""Dataclasses describing a parsed infobook."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

if typ.TYPE_CHECKING:
    from infobook_html.appendix.base import InfoAppendix


@dc.dataclass(slots=True)
class Section:
    """A node in the infobook tree.

    Attributes
    ----------
    name : str
        Translation key of the section title; doubles as its identity.
    mod_id : str
        Identifier of the mod that authored the section.
    sub_sections : list[Section]
        Child sections, owned exclusively by this section.
    paragraph_translation_keys : list[str]
        Translation keys of the paragraphs shown on a leaf page.
    appendix : list[InfoAppendix | None]
        Rich content blocks; ``None`` marks an appendix of unknown type.
    tags : list[str]
        Item or fluid identifiers documented by this section.
    """

    name: str
    mod_id: str
    sub_sections: list[Section] = dc.field(default_factory=list)
    paragraph_translation_keys: list[str] = dc.field(default_factory=list)
    appendix: list[InfoAppendix | None] = dc.field(default_factory=list)
    tags: list[str] = dc.field(default_factory=list)

    @property
    def is_leaf(self) -> bool:
        """Return whether the section renders as a content page."""
        return not self.sub_sections

    @property
    def path_segment(self) -> str:
        """Return the last dotted component of the name, used in output paths."""
        return self.name.rsplit(".", 1)[-1]


@dc.dataclass(slots=True)
class InfoBook:
    """A root section plus a flat index of every reachable section."""

    root_section: Section
    sections: dict[str, Section]


@dc.dataclass(slots=True, frozen=True)
class Item:
    """An item stack referenced by recipes, rewards and tags."""

    item: str
    count: int = 1
    nbt: str = ""

    @classmethod
    def from_payload(cls, payload: typ.Mapping[str, typ.Any]) -> Item:
        """Build an item from a registry JSON object."""
        return cls(
            item=str(payload["item"]),
            count=int(payload.get("count", 1) or 1),
            nbt=str(payload.get("nbt", "") or ""),
        )


@dc.dataclass(slots=True, frozen=True)
class Fluid:
    """A fluid stack referenced by tags."""

    fluid: str
    amount: int = 1


__all__ = ["Fluid", "InfoBook", "Item", "Section"]
