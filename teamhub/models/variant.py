from typing import Dict, Union

from pydantic import BaseModel, ConfigDict

from .enums import Variant


class VariantProfile(BaseModel):
    """Defaults and limits that differ between the single- and multi-team views."""

    model_config = ConfigDict(frozen=True)

    variant: Variant
    player_cap: int
    elo_default: str
    opponent_default: str
    team_name_default: str = "Unknown Team"
    include_stats: bool = False


PROFILES: Dict[Variant, VariantProfile] = {
    Variant.SINGLE: VariantProfile(
        variant=Variant.SINGLE,
        player_cap=5,
        elo_default="0",
        opponent_default="Unknown",
    ),
    Variant.MULTI: VariantProfile(
        variant=Variant.MULTI,
        player_cap=10,
        elo_default="N/A",
        opponent_default="TBD",
        include_stats=True,
    ),
}


def get_profile(variant: Union[Variant, str]) -> VariantProfile:
    return PROFILES[Variant(variant)]
