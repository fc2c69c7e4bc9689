# teamhub/models/team.py
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_PLAYER_AVATAR = (
    "https://www.faceit.com/static/img/avatar/avatar_default_user.png"
)
DEFAULT_REGION = "Europe"
DEFAULT_COUNTRY = "PT"  # Roster flags on exported pages are all Portuguese
DEFAULT_LEVEL = "10"


class Player(BaseModel):
    """A roster member as shown on the team page."""

    nickname: str
    elo: str
    avatar: str = DEFAULT_PLAYER_AVATAR
    country: str = DEFAULT_COUNTRY
    lvl: str = DEFAULT_LEVEL


class Match(BaseModel):
    """An upcoming fixture from the team's match list."""

    model_config = ConfigDict(populate_by_name=True)

    date: str = ""
    time: str = ""
    opponent: str
    opponent_avatar: str = Field("", alias="opponentAvatar")


class TeamStats(BaseModel):
    """Season record, kept as the raw strings the page displays."""

    wins: str = "0 W"
    losses: str = "0 L"
    position: str = "N/A"


class TeamRecord(BaseModel):
    """Canonical team record produced once per uploaded page."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    avatar: str = ""
    players: List[Player] = []
    league: str
    region: str = DEFAULT_REGION
    matches: List[Match] = []
    stats: Optional[TeamStats] = None
    # Filled in later by the summarization step
    ai_report: Optional[str] = Field(None, alias="aiReport")

    def to_blob(self) -> dict:
        """Serialized form used by the stores (camelCase keys)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
