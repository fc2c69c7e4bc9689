# teamhub/locator/selectors.py
"""Selector chains for every field of an exported team page.

The exported pages use generated, versioned class names (``styles__TeamName-
sc-5671d23c-5``) that change between site releases. Each field is therefore
located through an ordered chain of strategies: the exact class seen in past
exports first, then a substring match on the stable part of the class name,
then semantic attributes or plain tags. The first strategy that matches wins.

New fallbacks are added by appending to a chain in ``FIELD_SELECTORS``; the
locator itself does not change.
"""
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict

from teamhub.models.enums import StrategyKind, TeamField, ValueSource


class SelectorStrategy(BaseModel):
    """One way of finding a field's node(s), rendered as a CSS selector."""

    model_config = ConfigDict(frozen=True)

    kind: StrategyKind
    value: str
    tag: Optional[str] = None  # Restrict the match to this element name
    attribute: Optional[str] = None  # Attribute name for ATTRIBUTE strategies
    descendant: Optional[str] = None  # Selector applied below the matched node

    def css(self) -> str:
        prefix = self.tag or ""
        if self.kind == StrategyKind.EXACT_CLASS:
            selector = f"{prefix}.{self.value}"
        elif self.kind == StrategyKind.CLASS_CONTAINS:
            selector = f'{prefix}[class*="{self.value}"]'
        elif self.kind == StrategyKind.ATTRIBUTE:
            selector = f'{prefix}[{self.attribute}="{self.value}"]'
        else:
            selector = self.value
        if self.descendant:
            selector = f"{selector} {self.descendant}"
        return selector


class FieldSelector(BaseModel):
    """Ordered strategy chain for one logical field."""

    model_config = ConfigDict(frozen=True)

    chain: List[SelectorStrategy]
    source: ValueSource = ValueSource.TEXT


def exact_class(value: str, **kwargs) -> SelectorStrategy:
    return SelectorStrategy(kind=StrategyKind.EXACT_CLASS, value=value, **kwargs)


def class_contains(value: str, **kwargs) -> SelectorStrategy:
    return SelectorStrategy(kind=StrategyKind.CLASS_CONTAINS, value=value, **kwargs)


def attribute(name: str, value: str, **kwargs) -> SelectorStrategy:
    return SelectorStrategy(
        kind=StrategyKind.ATTRIBUTE, attribute=name, value=value, **kwargs
    )


def tag(name: str, **kwargs) -> SelectorStrategy:
    return SelectorStrategy(kind=StrategyKind.TAG, value=name, **kwargs)


FIELD_SELECTORS: Dict[TeamField, FieldSelector] = {
    # --- Team header ---
    TeamField.TEAM_NAME: FieldSelector(
        chain=[
            exact_class("styles__TeamName-sc-5671d23c-5"),
            class_contains("TeamName", tag="h4"),
        ]
    ),
    TeamField.TEAM_AVATAR: FieldSelector(
        chain=[
            exact_class("Avatar__Image-sc-75870453-2"),
            class_contains("Avatar", tag="img"),
        ],
        source=ValueSource.SRC,
    ),
    TeamField.LEAGUE: FieldSelector(
        chain=[
            class_contains("TitleDescription"),
            attribute("data-testid", "description"),
        ]
    ),
    # --- Roster ---
    TeamField.PLAYER_NICKNAME: FieldSelector(
        chain=[
            exact_class("styles__Nickname-sc-3441c003-2"),
            class_contains("Nickname"),
        ]
    ),
    TeamField.PLAYER_ELO: FieldSelector(
        chain=[
            exact_class("styles__EloText-sc-c081ed6b-1"),
            class_contains("EloText"),
        ]
    ),
    TeamField.PLAYER_AVATAR: FieldSelector(
        chain=[
            exact_class("styles__Avatar-sc-5688573a-1", descendant="img"),
            class_contains("Avatar", descendant="img"),
            class_contains("Avatar", tag="img"),
        ],
        source=ValueSource.SRC,
    ),
    # --- Season stats ---
    TeamField.WINS: FieldSelector(chain=[class_contains("Wins")]),
    TeamField.LOSSES: FieldSelector(chain=[class_contains("Losses")]),
    TeamField.POSITION: FieldSelector(
        chain=[class_contains("ResultsInfoRow", descendant="h6")]
    ),
    # --- Upcoming matches (sub-fields are read inside each container) ---
    TeamField.MATCH_CONTAINER: FieldSelector(
        chain=[
            exact_class("styles__MatchesHolder-sc-b611c7e4-1", descendant="a"),
            class_contains("MatchesHolder", descendant="a"),
        ]
    ),
    TeamField.MATCH_DATE: FieldSelector(
        chain=[
            exact_class("styles__Holder-sc-464d563d-0", descendant="span:first-child"),
            class_contains("Holder-sc-464d563d", descendant="span:first-child"),
        ]
    ),
    TeamField.MATCH_TIME: FieldSelector(
        chain=[
            exact_class("styles__Holder-sc-464d563d-0", descendant="span:last-child"),
            class_contains("Holder-sc-464d563d", descendant="span:last-child"),
        ]
    ),
    TeamField.MATCH_OPPONENT: FieldSelector(
        chain=[
            exact_class("styles__TeamMetaContainer-sc-331aa0c3-0", descendant="span"),
            class_contains("TeamMetaContainer", descendant="span"),
            class_contains("TeamName"),
        ]
    ),
    TeamField.MATCH_OPPONENT_AVATAR: FieldSelector(
        chain=[
            exact_class("Avatar__AvatarHolder-sc-75870453-1", descendant="img"),
            class_contains("AvatarHolder", descendant="img"),
            tag("img"),
        ],
        source=ValueSource.SRC,
    ),
}
