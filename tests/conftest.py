"""Pytest configuration and fixtures for team-dedup tests."""

import io
import os
from collections import Counter
from typing import Any, Callable, Dict, List

import pytest
from rich.console import Console

# Settings are read on import
os.environ.setdefault("DRYRUN", "true")

from team_dedup.models.duplicates import DuplicateGroup
from team_dedup.models.team import Team
from team_dedup.storage.base import TeamStore


class FakeTeamStore(TeamStore):
    """In-memory store that records every call made to it."""

    def __init__(self, documents: List[Dict[str, Any]], name: str = "fh-aaa"):
        self.documents = [dict(doc) for doc in documents]
        self.name = name
        self.calls: List[str] = []
        self.replaced: List[Team] = []
        self.closed = False

    def dataset_name(self) -> str:
        self.calls.append("dataset_name")
        return self.name

    def find_duplicate_codes(self) -> List[DuplicateGroup]:
        self.calls.append("find_duplicate_codes")
        counts = Counter(doc["code"] for doc in self.documents)
        remediable = {doc["code"] for doc in self.documents if not doc.get("defaultTeam")}
        return [
            DuplicateGroup(code=code, count=count, default_team=code not in remediable)
            for code, count in counts.items()
            if count > 1
        ]

    def find_teams(self, code: Any) -> List[Team]:
        self.calls.append("find_teams")
        return [
            Team.from_document(doc)
            for doc in self.documents
            if doc["code"] == code and not doc.get("defaultTeam")
        ]

    def replace_team(self, team: Team) -> int:
        self.calls.append("replace_team")
        for index, doc in enumerate(self.documents):
            if doc["_id"] == team.id:
                self.documents[index] = team.to_document()
                self.replaced.append(team)
                return 1
        return 0

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def make_team() -> Callable[..., Dict[str, Any]]:
    """Factory for raw team documents."""

    def _make_team(
        _id: str,
        code: str = "dup",
        name: str = "Test Team",
        levels: Dict[str, List[str]] = None,
        users: List[str] = None,
        default_team: bool = False,
        **extra: Any,
    ) -> Dict[str, Any]:
        return {
            "_id": _id,
            "name": name,
            "code": code,
            "defaultTeam": default_team,
            "business-objects": {"region": ["r1"]} if levels is None else levels,
            "users": ["u1"] if users is None else users,
            **extra,
        }

    return _make_team


@pytest.fixture
def migratable_pair(make_team) -> List[Dict[str, Any]]:
    """Two teams with users on different hierarchy levels."""
    return [
        make_team("t1", levels={"region": ["r1"], "region-site": ["g1", "g2"]}),
        make_team("t2", levels={"region": ["r1"]}, users=["u2", "u3"]),
    ]


@pytest.fixture
def console_output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def console(console_output: io.StringIO) -> Console:
    """Rich console writing to a buffer instead of the terminal."""
    return Console(file=console_output, color_system=None, width=200)


@pytest.fixture
def fake_store_factory() -> Callable[..., FakeTeamStore]:
    return FakeTeamStore
