# team_dedup/models/team.py
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Team(BaseModel):
    """A team document as stored in the teams collection.

    Fields the remediation does not look at are kept as extras so the full
    document can be written back unchanged apart from its code.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: Any = Field(..., alias="_id")  # ObjectId, UUID or plain string
    name: str = ""
    code: Optional[str] = None
    default_team: Optional[bool] = Field(False, alias="defaultTeam")
    # Hierarchy label -> ordered object identifiers at that level
    business_objects: Dict[str, List[Any]] = Field(
        default_factory=dict, alias="business-objects"
    )
    users: List[Any] = Field(default_factory=list)

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "Team":
        return cls.model_validate(document)

    def to_document(self) -> Dict[str, Any]:
        """Document using the stored field names, extras included.

        Only fields read from the store or assigned since are written, so
        defaults never end up in a document that did not have them.
        """
        document = self.model_dump(by_alias=True, exclude_unset=True)
        document.update(self.model_extra or {})
        return document

    @property
    def user_count(self) -> int:
        return len(self.users)

    @property
    def has_users(self) -> bool:
        return self.user_count != 0

    @property
    def label(self) -> str:
        return f"{self.name} ({self.id})"
