from typing import Optional, Sequence

from team_dedup.models.team import Team


def lowest_level(team: Team, ordering: Optional[Sequence[str]] = None) -> Optional[str]:
    """Returns the most deeply nested business-object level of a team.

    With an explicit ordering (top-most label first) the deepest known label
    wins. Without one, or when none of the team's labels are known, the
    longest label is taken as the deepest; ties go to the first label.
    Teams without business objects have no level.
    """
    labels = list(team.business_objects.keys())
    if not labels:
        return None

    if ordering:
        known = [label for label in labels if label in ordering]
        if known:
            return max(known, key=list(ordering).index)

    return max(labels, key=len)
