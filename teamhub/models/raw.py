from typing import List, Optional

from pydantic import BaseModel

from .enums import PlayerAlignment


# None marks a field whose selector chain was exhausted; "" is a node that
# was found but carried no content.
class RawPlayer(BaseModel):
    nickname: str
    elo: Optional[str] = None
    avatar: Optional[str] = None


class RawMatch(BaseModel):
    date: Optional[str] = None
    time: Optional[str] = None
    opponent: Optional[str] = None
    opponent_avatar: Optional[str] = None


class RawTeamData(BaseModel):
    """Values located in one document, before defaults are applied."""

    name: Optional[str] = None
    avatar: Optional[str] = None
    players: List[RawPlayer] = []
    # Index alignment only: document-wide lists paired with players by position
    alignment: PlayerAlignment = PlayerAlignment.CONTAINER
    elos: List[str] = []
    player_avatars: List[str] = []
    league: Optional[str] = None
    wins: Optional[str] = None
    losses: Optional[str] = None
    position: Optional[str] = None
    matches: List[RawMatch] = []
