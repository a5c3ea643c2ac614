from typing import Any, List, Optional, Sequence

from team_dedup.models.duplicates import Decision
from team_dedup.models.enums import Outcome
from team_dedup.models.team import Team

from .hierarchy import lowest_level


def classify(
    code: Any, teams: List[Team], ordering: Optional[Sequence[str]] = None
) -> Decision:
    """Decides what can be done about a pair of teams sharing a code.

    Same level, both have users: no migration possible, consult customer.
    Same level, one or both have no users: delete one of them manually.
    Different level, one or both have no users: delete one of them manually.
    Different level, both have users: migrate the first team to a new code.
    """
    if len(teams) != 2:
        return Decision(
            code=code,
            outcome=Outcome.UNSUPPORTED_CARDINALITY,
            teams=teams,
            reason=f"{len(teams)} non-default teams share this code, expected exactly 2",
        )

    team_a, team_b = teams
    both_have_users = team_a.has_users and team_b.has_users
    same_level = lowest_level(team_a, ordering) == lowest_level(team_b, ordering)

    if same_level:
        if both_have_users:
            return Decision(
                code=code,
                outcome=Outcome.CONFLICT,
                teams=teams,
                reason="Duplicates on the same level. Consult customer.",
            )
        return Decision(
            code=code,
            outcome=Outcome.SAFE_TO_DELETE,
            teams=teams,
            reason="Duplicate teams on same level, but one of them can be deleted "
            "because it has no users",
        )

    if not both_have_users:
        return Decision(
            code=code,
            outcome=Outcome.SAFE_TO_DELETE,
            teams=teams,
            reason="Duplicate teams on different levels, but one of them can be "
            "deleted because it has no users",
        )

    # A code cannot be built for a team without business objects
    team_to_migrate = team_a if team_a.business_objects else team_b
    return Decision(
        code=code,
        outcome=Outcome.MIGRATE,
        teams=teams,
        team_to_migrate=team_to_migrate,
        reason="Duplicate teams on different levels. Can be migrated",
    )
