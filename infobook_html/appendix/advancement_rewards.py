"""Appendices listing advancements and the items they reward.

Example element::

    <appendix type="advancement_rewards">
        <advancements>
            <advancement id="mymod:root/first_steps" />
        </advancements>
        <rewards>
            <reward type="item" amount="4">minecraft:bread</reward>
        </rewards>
    </appendix>
"""

from __future__ import annotations

import typing as typ

from infobook_html.errors import ParseError
from infobook_html.infobook.models import Item
from infobook_html.templating import get_template

from .base import AppendixHandler, InfoAppendix, element_text

if typ.TYPE_CHECKING:
    from lxml import etree

    from infobook_html.resources import Advancement, ResourceHandler
    from infobook_html.serializer import FileWriter, HtmlInfoBookSerializer, SerializeContext

NAME_TRANSLATION_KEY = "gui.advancements"
REWARDS_TRANSLATION_KEY = "gui.infobook.rewards"


class AdvancementRewardsAppendix(InfoAppendix):
    def __init__(
        self,
        resource_handler: ResourceHandler,
        advancements: list[Advancement],
        rewards: list[Item],
    ) -> None:
        self.resource_handler = resource_handler
        self.advancements = advancements
        self.rewards = rewards
        self.template = get_template("appendix/advancement_rewards.jinja")

    def get_name(self, context: SerializeContext) -> str | None:
        return self.resource_handler.get_translation(NAME_TRANSLATION_KEY, context.language)

    def to_html(
        self,
        context: SerializeContext,
        file_writer: FileWriter,
        serializer: HtmlInfoBookSerializer,
    ) -> str:
        translate = self.resource_handler.get_translation
        advancements = [
            {
                "title": translate(advancement.title, context.language),
                "description": translate(advancement.description, context.language),
            }
            for advancement in self.advancements
        ]
        rewards = [
            serializer.create_item_display(context, file_writer, reward, True)
            for reward in self.rewards
        ]
        return self.template.render(
            advancements=advancements,
            rewards=rewards,
            rewards_label=translate(REWARDS_TRANSLATION_KEY, context.language),
        )


class AdvancementRewardsAppendixHandler(AppendixHandler):
    """Resolve advancements eagerly and collect item rewards."""

    def __init__(self, resource_handler: ResourceHandler) -> None:
        self.resource_handler = resource_handler

    def create_appendix(self, element: etree._Element, mod_id: str) -> InfoAppendix:  # noqa: ARG002
        advancements = [
            self.resource_handler.get_advancement(advancement.get("id", ""))
            for advancement in element.iterfind("advancements/advancement")
        ]
        rewards = [self._reward(reward) for reward in element.iterfind("rewards/reward")]
        return AdvancementRewardsAppendix(self.resource_handler, advancements, rewards)

    @staticmethod
    def _reward(element: etree._Element) -> Item:
        reward_type = element.get("type")
        if reward_type != "item":
            msg = f"Unknown advancement reward type '{reward_type}'"
            raise ParseError(msg)
        try:
            amount = int(element.get("amount", 1))
        except ValueError as exc:
            msg = f"Reward {element_text(element)} needs an integer amount"
            raise ParseError(msg) from exc
        return Item(
            item=element_text(element),
            count=amount,
            nbt=element.get("nbt", ""),
        )


__all__ = ["AdvancementRewardsAppendix", "AdvancementRewardsAppendixHandler"]
