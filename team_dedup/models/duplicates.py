from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from .enums import Outcome
from .team import Team


class DuplicateGroup(BaseModel):
    """One row of the group-by-code aggregation."""

    code: Any  # Whatever the store holds, including a missing (None) code
    count: int
    default_team: bool = False  # True when every team of the group is a default team


class Decision(BaseModel):
    """Result of classifying one duplicate group."""

    code: Any
    outcome: Outcome
    teams: List[Team] = []
    reason: str = ""

    # Only set for Outcome.MIGRATE
    team_to_migrate: Optional[Team] = None
    new_code: Optional[str] = None

    @property
    def requires_update(self) -> bool:
        return self.outcome == Outcome.MIGRATE and self.team_to_migrate is not None


class UpdateCommand(BaseModel):
    """A single replace-by-id, as issued to the store or shown in a dry run."""

    query: Dict[str, Any]
    document: Dict[str, Any]

    @classmethod
    def for_team(cls, team: Team) -> "UpdateCommand":
        return cls(query={"_id": team.id}, document=team.to_document())


class RunSummary(BaseModel):
    """Counters collected over one run of the resolver."""

    dryrun: bool = True
    groups_found: int = 0
    groups_skipped: int = 0
    outcomes: Dict[Outcome, int] = Field(default_factory=dict)
    planned_updates: List[UpdateCommand] = []
    updates_applied: int = 0

    def record(self, decision: Decision) -> None:
        self.outcomes[decision.outcome] = self.count(decision.outcome) + 1

    def count(self, outcome: Outcome) -> int:
        return self.outcomes.get(outcome, 0)

    def describe(self) -> str:
        parts = [f"{outcome.value.lower()}={self.count(outcome)}" for outcome in Outcome]
        mode = "dry run" if self.dryrun else "live run"
        return (
            f"{mode}: {self.groups_found} duplicate group(s), {self.groups_skipped} skipped, "
            + ", ".join(parts)
            + f", updates applied={self.updates_applied}"
        )
