"""Tests for the team document model."""

from team_dedup.models.team import Team


class TestTeamDocument:
    """Test the document written back to the store."""

    def test_sparse_document_round_trip(self):
        """Defaults are not written into a document that lacked them."""
        document = {"_id": "t1", "name": "Ops", "code": "dup", "business-objects": {"bu": ["b"]}}
        team = Team.from_document(document)

        assert team.users == []
        assert team.default_team is False
        assert team.to_document() == document

    def test_changed_code_is_written(self):
        document = {"_id": "t1", "code": "dup", "color": "red"}
        migrated = Team.from_document(document).model_copy(update={"code": "acme-b-Ops"})

        assert migrated.to_document() == {"_id": "t1", "code": "acme-b-Ops", "color": "red"}

    def test_stored_nulls_kept(self):
        document = {"_id": 7, "code": "dup", "defaultTeam": None, "users": []}
        assert Team.from_document(document).to_document() == document
