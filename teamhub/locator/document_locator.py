# teamhub/locator/document_locator.py
from typing import Iterable, List, Optional, Tuple, Union

from bs4 import BeautifulSoup, Tag
from bs4.builder import ParserRejectedMarkup
from loguru import logger

from teamhub.models.enums import PlayerAlignment, TeamField, ValueSource
from teamhub.models.raw import RawMatch, RawPlayer, RawTeamData
from .selectors import FIELD_SELECTORS, FieldSelector

# Climbing from a nickname towards its player card stops at these
_ROOT_TAGS = {"html", "body", "[document]"}

# ...and before any ancestor holding one of these team-level nodes
_TEAM_LEVEL_FIELDS = (
    TeamField.TEAM_NAME,
    TeamField.TEAM_AVATAR,
    TeamField.LEAGUE,
    TeamField.WINS,
    TeamField.LOSSES,
    TeamField.POSITION,
)


class ExtractionError(Exception):
    """Custom exception for extraction-related errors."""

    pass


class ParseFailure(ExtractionError):
    """The input could not be interpreted as a markup document."""

    pass


def parse_document(html: Union[str, bytes]) -> BeautifulSoup:
    """Parses raw page content into a navigable tree.

    Raises:
        ParseFailure: If the content is not text, is blank, or holds no
            elements at all.
    """
    if isinstance(html, bytes):
        try:
            html = html.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ParseFailure(f"Content is not valid UTF-8 text: {e}") from e
    if not isinstance(html, str):
        raise ParseFailure(f"Expected markup text, got {type(html).__name__}")
    if not html.strip():
        raise ParseFailure("Document is empty")

    try:
        soup = BeautifulSoup(html, "html.parser")
    except ParserRejectedMarkup as e:
        raise ParseFailure(f"Markup rejected by parser: {e}") from e

    if soup.find() is None:
        raise ParseFailure("Document contains no markup elements")
    return soup


def _is_inside(node: Tag, ancestor: Tag) -> bool:
    return any(parent is ancestor for parent in node.parents)


class DocumentLocator:
    """Finds the nodes carrying each team field inside a parsed page."""

    def __init__(self, soup: BeautifulSoup):
        self.soup = soup

    def _matches(self, selector: FieldSelector, scope: Tag) -> Iterable[List[Tag]]:
        for strategy in selector.chain:
            nodes = scope.select(strategy.css())
            if nodes:
                yield nodes

    def locate(self, field: TeamField, scope: Optional[Tag] = None) -> Optional[Tag]:
        """Returns the first node of the first strategy that matches, or None."""
        scope = scope if scope is not None else self.soup
        for nodes in self._matches(FIELD_SELECTORS[field], scope):
            return nodes[0]
        logger.debug(f"No selector in the chain matched field '{field.value}'")
        return None

    def locate_all(self, field: TeamField, scope: Optional[Tag] = None) -> List[Tag]:
        """Returns every node of the first matching strategy, in document order."""
        scope = scope if scope is not None else self.soup
        for nodes in self._matches(FIELD_SELECTORS[field], scope):
            return nodes
        logger.debug(f"No selector in the chain matched field '{field.value}'")
        return []

    @staticmethod
    def _value(node: Tag, source: ValueSource) -> str:
        if source == ValueSource.SRC:
            return node.get("src") or ""
        return node.get_text()

    def read(self, field: TeamField, scope: Optional[Tag] = None) -> Optional[str]:
        """Text (or src) of the field's node; None when the chain is exhausted."""
        node = self.locate(field, scope)
        if node is None:
            return None
        return self._value(node, FIELD_SELECTORS[field].source)

    def read_all(self, field: TeamField, scope: Optional[Tag] = None) -> List[str]:
        source = FIELD_SELECTORS[field].source
        return [self._value(node, source) for node in self.locate_all(field, scope)]

    def player_containers(self) -> List[Tuple[Tag, Tag]]:
        """Pairs each nickname node with the node holding that player's card.

        The card is the largest ancestor of the nickname that contains no other
        nickname and none of the team-level nodes (header fields, season stats,
        match list).
        """
        nicknames = self.locate_all(TeamField.PLAYER_NICKNAME)
        barriers = self.locate_all(TeamField.MATCH_CONTAINER)
        for field in _TEAM_LEVEL_FIELDS:
            node = self.locate(field)
            if node is not None:
                barriers.append(node)

        pairs = []
        for node in nicknames:
            container = node
            for parent in node.parents:
                if parent.name in _ROOT_TAGS:
                    break
                if any(
                    other is not node and _is_inside(other, parent)
                    for other in nicknames
                ):
                    break
                if any(b is parent or _is_inside(b, parent) for b in barriers):
                    break
                container = parent
            pairs.append((node, container))
        return pairs

    def _extract_players(self, raw: RawTeamData, alignment: PlayerAlignment) -> None:
        if alignment == PlayerAlignment.INDEX:
            raw.players = [
                RawPlayer(nickname=nick)
                for nick in self.read_all(TeamField.PLAYER_NICKNAME)
            ]
            raw.elos = self.read_all(TeamField.PLAYER_ELO)
            raw.player_avatars = self.read_all(TeamField.PLAYER_AVATAR)
            return

        raw.players = [
            RawPlayer(
                nickname=node.get_text(),
                elo=self.read(TeamField.PLAYER_ELO, container),
                avatar=self.read(TeamField.PLAYER_AVATAR, container),
            )
            for node, container in self.player_containers()
        ]

    def _extract_matches(self) -> List[RawMatch]:
        return [
            RawMatch(
                date=self.read(TeamField.MATCH_DATE, container),
                time=self.read(TeamField.MATCH_TIME, container),
                opponent=self.read(TeamField.MATCH_OPPONENT, container),
                opponent_avatar=self.read(TeamField.MATCH_OPPONENT_AVATAR, container),
            )
            for container in self.locate_all(TeamField.MATCH_CONTAINER)
        ]

    def extract(
        self, alignment: PlayerAlignment = PlayerAlignment.CONTAINER
    ) -> RawTeamData:
        """Runs every field's chain independently and collects the raw values."""
        raw = RawTeamData(
            name=self.read(TeamField.TEAM_NAME),
            avatar=self.read(TeamField.TEAM_AVATAR),
            league=self.read(TeamField.LEAGUE),
            wins=self.read(TeamField.WINS),
            losses=self.read(TeamField.LOSSES),
            position=self.read(TeamField.POSITION),
            alignment=alignment,
        )
        self._extract_players(raw, alignment)
        raw.matches = self._extract_matches()
        logger.debug(
            f"Located {len(raw.players)} player node(s) and {len(raw.matches)} match node(s)"
        )
        return raw
