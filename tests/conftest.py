"""
Pytest configuration and shared fixtures.

Pages are built from small markup snippets shaped like real FACEIT exports:
generated class names, avatar holders, and a match list of anchors.
"""
from typing import Iterable, Optional, Tuple

import pytest

from teamhub.models.enums import PlayerAlignment, Variant

PlayerSpec = Tuple[str, Optional[str], Optional[str]]  # nickname, elo, avatar src

DEFAULT_PLAYERS = [
    ("fer0x", "2150", "https://cdn.test/p1.png"),
    ("Kiko", "1980", "https://cdn.test/p2.png"),
    ("nunoZ", "2301", "https://cdn.test/p3.png"),
    ("ruiB", "1765", "https://cdn.test/p4.png"),
    ("Tiago", "2044", "https://cdn.test/p5.png"),
]

DEFAULT_MATCHES = [
    ("12 Oct", "20:00", "Dragões", "https://cdn.test/o1.png"),
    ("19 Oct", "21:00", "Lobos", "https://cdn.test/o2.png"),
    ("26 Oct", "19:30", "Falcões", "https://cdn.test/o3.png"),
]


def player_card(nickname: str, elo: Optional[str] = None, avatar: Optional[str] = None) -> str:
    parts = ['<div class="styles__Member-sc-7a1b2c3d-0">']
    if avatar is not None:
        parts.append(
            f'<div class="styles__Avatar-sc-5688573a-1"><img src="{avatar}"></div>'
        )
    parts.append(f'<span class="styles__Nickname-sc-3441c003-2">{nickname}</span>')
    if elo is not None:
        parts.append(f'<span class="styles__EloText-sc-c081ed6b-1">{elo}</span>')
    parts.append("</div>")
    return "".join(parts)


def match_item(date: str, time: str, opponent: str, avatar: str) -> str:
    return (
        '<a href="/match">'
        f'<div class="styles__Holder-sc-464d563d-0"><span>{date}</span><span>{time}</span></div>'
        '<div class="Avatar__AvatarHolder-sc-75870453-1">'
        f'<img class="Avatar__Image-sc-75870453-2" src="{avatar}"></div>'
        f'<div class="styles__TeamMetaContainer-sc-331aa0c3-0"><span>{opponent}</span></div>'
        "</a>"
    )


def build_page(
    name: Optional[str] = "Lusitanos",
    players: Iterable[PlayerSpec] = DEFAULT_PLAYERS,
    matches: Iterable[Tuple[str, str, str, str]] = DEFAULT_MATCHES,
    league: Optional[str] = "Advanced · Group B",
    with_stats: bool = True,
) -> str:
    """Builds a team page using the class names seen in past exports."""
    header = ['<div class="styles__Header-sc-5671d23c-0">']
    header.append(
        '<div class="Avatar__AvatarHolder-sc-75870453-1">'
        '<img class="Avatar__Image-sc-75870453-2" src="https://cdn.test/team.png"></div>'
    )
    if name is not None:
        header.append(f'<h4 class="styles__TeamName-sc-5671d23c-5">{name}</h4>')
    if league is not None:
        header.append(f'<span data-testid="description">{league}</span>')
    header.append("</div>")

    roster = ['<div class="styles__Roster-sc-1f2e3d4c-0">']
    roster.extend(player_card(*p) for p in players)
    roster.append("</div>")

    stats = ""
    if with_stats:
        stats = (
            '<div class="styles__ResultsInfoRow-sc-9a8b7c6d-2"><h6>3rd</h6></div>'
            '<span class="styles__Wins-sc-9a8b7c6d-3">7 W</span>'
            '<span class="styles__Losses-sc-9a8b7c6d-4">2 L</span>'
        )

    match_list = ['<div class="styles__MatchesHolder-sc-b611c7e4-1">']
    match_list.extend(match_item(*m) for m in matches)
    match_list.append("</div>")

    return (
        "<html><head><title>Team</title></head><body>"
        + "".join(header)
        + "".join(roster)
        + stats
        + "".join(match_list)
        + "</body></html>"
    )


RENAMED_PAGE = (
    "<html><body>"
    '<div class="styles__Header-sc-00aa11bb-0">'
    '<div class="Avatar__AvatarHolder-sc-00aa11bb-1">'
    '<img class="Avatar__Image-sc-00aa11bb-2" src="https://cdn.test/team-v2.png"></div>'
    '<h4 class="styles__TeamName-sc-00aa11bb-5">Lusitanos v2</h4>'
    '<p class="styles__TitleDescription-sc-00aa11bb-6">Main · Division 3</p>'
    "</div>"
    '<div class="styles__Roster-sc-00aa11bb-7">'
    '<div class="styles__Member-sc-00aa11bb-8">'
    '<div class="styles__Avatar-sc-00aa11bb-9"><img src="https://cdn.test/v2-p1.png"></div>'
    '<span class="styles__Nickname-sc-00aa11bb-10">fer0x</span>'
    '<span class="styles__EloText-sc-00aa11bb-11">2150</span>'
    "</div>"
    "</div>"
    '<div class="styles__MatchesHolder-sc-00aa11bb-12">'
    '<a href="/m">'
    '<div class="styles__Holder-sc-464d563d-7"><span>02 Nov</span><span>18:00</span></div>'
    '<div class="styles__TeamName-sc-00aa11bb-13">Corvos</div>'
    '<img src="https://cdn.test/v2-o1.png">'
    "</a>"
    "</div>"
    "</body></html>"
)


@pytest.fixture
def team_page() -> str:
    return build_page()


@pytest.fixture
def renamed_page() -> str:
    return RENAMED_PAGE


@pytest.fixture
def empty_page() -> str:
    return "<html><body><p>Nothing exported</p></body></html>"


@pytest.fixture(autouse=True)
def default_profile(monkeypatch):
    """Pins the extraction defaults so a local .env cannot change results."""
    from teamhub.config.settings import settings

    monkeypatch.setattr(settings, "variant", Variant.MULTI.value)
    monkeypatch.setattr(settings, "player_alignment", PlayerAlignment.CONTAINER.value)
