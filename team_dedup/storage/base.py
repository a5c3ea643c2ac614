from abc import ABC, abstractmethod
from typing import Any, List

from team_dedup.models.duplicates import DuplicateGroup
from team_dedup.models.team import Team


class StorageError(Exception):
    """Custom exception for failures of the underlying store."""

    pass


class UpdateNotAppliedError(StorageError):
    """Exception raised when a replace-by-id matched no document."""

    def __init__(self, team_id: Any):
        super().__init__(f"Update of team {team_id} matched no document")
        self.team_id = team_id


class TeamStore(ABC):
    """Abstract base class for the stores holding team documents."""

    @abstractmethod
    def dataset_name(self) -> str:
        """Name of the logical dataset this store currently targets."""
        pass

    @abstractmethod
    def find_duplicate_codes(self) -> List[DuplicateGroup]:
        """Groups all teams by code and returns the groups with more than one team."""
        pass

    @abstractmethod
    def find_teams(self, code: Any) -> List[Team]:
        """Returns all non-default teams with the given code, in a stable order."""
        pass

    @abstractmethod
    def replace_team(self, team: Team) -> int:
        """Replaces the stored document of the team by id.

        Returns:
            The number of documents matched by the id.
        """
        pass

    def close(self) -> None:
        """Releases the connection, if the store holds one."""
        pass
