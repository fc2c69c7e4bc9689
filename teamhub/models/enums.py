from enum import Enum


class Variant(str, Enum):
    SINGLE = "single"  # One team per page, roster capped at 5
    MULTI = "multi"  # Team hub, roster capped at 10, season stats


class PlayerAlignment(str, Enum):
    CONTAINER = "container"  # Sub-fields read inside each player's own node
    INDEX = "index"  # Legacy: independent global lists paired by position


class StrategyKind(str, Enum):
    EXACT_CLASS = "exact_class"
    CLASS_CONTAINS = "class_contains"
    ATTRIBUTE = "attribute"
    TAG = "tag"


class ValueSource(str, Enum):
    TEXT = "text"
    SRC = "src"


class TeamField(str, Enum):
    TEAM_NAME = "team_name"
    TEAM_AVATAR = "team_avatar"
    PLAYER_NICKNAME = "player_nickname"
    PLAYER_ELO = "player_elo"
    PLAYER_AVATAR = "player_avatar"
    LEAGUE = "league"
    WINS = "wins"
    LOSSES = "losses"
    POSITION = "position"
    MATCH_CONTAINER = "match_container"
    MATCH_DATE = "match_date"
    MATCH_TIME = "match_time"
    MATCH_OPPONENT = "match_opponent"
    MATCH_OPPONENT_AVATAR = "match_opponent_avatar"
