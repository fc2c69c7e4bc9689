from typing import List, Optional

from loguru import logger

from teamhub.models.enums import PlayerAlignment
from teamhub.models.raw import RawMatch, RawPlayer, RawTeamData
from teamhub.models.team import (
    DEFAULT_PLAYER_AVATAR,
    Match,
    Player,
    TeamRecord,
    TeamStats,
)
from teamhub.models.variant import VariantProfile
from teamhub.utils.misc_utils import file_stem, generate_record_id

DEFAULT_LEAGUE = "Intermediate"
DEFAULT_WINS = "0 W"
DEFAULT_LOSSES = "0 L"
DEFAULT_POSITION = "N/A"

# A loose nickname selector also hits stray separators and empty nodes
MIN_NICKNAME_LENGTH = 2


def _or_default(value: Optional[str], default: str) -> str:
    """Located value, or the default when the field was missing or empty."""
    return value if value else default


def _at(values: List[str], index: int) -> Optional[str]:
    return values[index] if index < len(values) else None


class RecordNormalizer:
    """Turns located raw values into a canonical TeamRecord.

    Never raises for missing data: every absent field degrades to its
    documented default.
    """

    def __init__(self, profile: VariantProfile):
        self.profile = profile
        logger.debug(
            f"RecordNormalizer initialized for '{profile.variant.value}' "
            f"(player cap {profile.player_cap})."
        )

    def normalize(self, raw: RawTeamData, file_name: Optional[str] = None) -> TeamRecord:
        name_default = file_stem(file_name) or self.profile.team_name_default
        stats = None
        if self.profile.include_stats:
            stats = TeamStats(
                wins=_or_default(raw.wins, DEFAULT_WINS),
                losses=_or_default(raw.losses, DEFAULT_LOSSES),
                position=_or_default(raw.position, DEFAULT_POSITION),
            )

        record = TeamRecord(
            id=generate_record_id(),
            name=_or_default(raw.name, name_default),
            avatar=_or_default(raw.avatar, ""),
            players=self._normalize_players(raw),
            league=_or_default(raw.league, DEFAULT_LEAGUE),
            matches=[self._normalize_match(m) for m in raw.matches],
            stats=stats,
        )
        logger.debug(
            f"Normalized team '{record.name}' ({record.id}): "
            f"{len(record.players)} players, {len(record.matches)} matches"
        )
        return record

    def _normalize_players(self, raw: RawTeamData) -> List[Player]:
        candidates: List[RawPlayer] = raw.players[: self.profile.player_cap]
        kept = [p for p in candidates if len(p.nickname) >= MIN_NICKNAME_LENGTH]
        if len(kept) < len(candidates):
            logger.debug(f"Dropped {len(candidates) - len(kept)} degenerate nickname(s)")

        players = []
        for i, candidate in enumerate(kept):
            elo, avatar = candidate.elo, candidate.avatar
            if raw.alignment == PlayerAlignment.INDEX:
                # Legacy pairing: position in the filtered roster picks the entry
                elo, avatar = _at(raw.elos, i), _at(raw.player_avatars, i)
            players.append(
                Player(
                    nickname=candidate.nickname,
                    elo=_or_default(elo, self.profile.elo_default),
                    avatar=_or_default(avatar, DEFAULT_PLAYER_AVATAR),
                )
            )
        return players

    def _normalize_match(self, raw: RawMatch) -> Match:
        return Match(
            date=_or_default(raw.date, ""),
            time=_or_default(raw.time, ""),
            opponent=_or_default(raw.opponent, self.profile.opponent_default),
            opponent_avatar=_or_default(raw.opponent_avatar, ""),
        )
