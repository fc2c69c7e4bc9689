from typing import Iterable, List, Optional

from pydantic import BaseModel

from .team import TeamRecord


class TeamCollection(BaseModel):
    """Caller-owned, ordered set of team records.

    Operations return a new collection instead of mutating this one, so a
    batch upload lands in a single step.
    """

    teams: List[TeamRecord] = []

    def __len__(self) -> int:
        return len(self.teams)

    def get(self, team_id: str) -> Optional[TeamRecord]:
        return next((t for t in self.teams if t.id == team_id), None)

    def append_batch(self, records: Iterable[TeamRecord]) -> "TeamCollection":
        return TeamCollection(teams=[*self.teams, *records])

    def remove(self, team_id: str) -> "TeamCollection":
        return TeamCollection(teams=[t for t in self.teams if t.id != team_id])

    def attach_report(self, team_id: str, report: str) -> "TeamCollection":
        return TeamCollection(
            teams=[
                t.model_copy(update={"ai_report": report}) if t.id == team_id else t
                for t in self.teams
            ]
        )

    def to_blob(self) -> List[dict]:
        return [t.to_blob() for t in self.teams]

    @classmethod
    def from_blob(cls, blob: List[dict]) -> "TeamCollection":
        return cls(teams=[TeamRecord.model_validate(item) for item in blob])
