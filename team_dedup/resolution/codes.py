import re
from typing import Optional, Sequence

from team_dedup.models.team import Team

from .hierarchy import lowest_level

CODE_SEPARATOR = "-"
WHITESPACE = re.compile(r"\s")


def create_team_code(
    team: Team, domain: str, ordering: Optional[Sequence[str]] = None
) -> str:
    """Builds the new code from the domain, the lowest level's object ids and the name.

    Every whitespace character of the result becomes an underscore, so
    "Test Team" with objects ["g1", "g2"] in domain "acme" gives
    "acme-g1-g2-Test_Team".
    """
    if not domain or not domain.strip():
        raise ValueError("A domain is required to create a team code.")

    level = lowest_level(team, ordering)
    if level is None:
        raise ValueError(f"Team {team.label} has no business objects.")

    object_ids = CODE_SEPARATOR.join(str(oid) for oid in team.business_objects[level])
    combined = CODE_SEPARATOR.join([domain, object_ids, team.name])
    return WHITESPACE.sub("_", combined)
