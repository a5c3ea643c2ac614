"""Tests for hierarchy level derivation and team code creation."""

import pytest

from team_dedup.models.team import Team
from team_dedup.resolution.codes import create_team_code
from team_dedup.resolution.hierarchy import lowest_level


class TestLowestLevel:
    """Test the lowest business-object level of a team."""

    def test_longest_label_without_ordering(self, make_team):
        """Without an ordering the longest label is the deepest level."""
        team = Team.from_document(
            make_team("t1", levels={"region": ["r1"], "region-site-unit": ["u1"], "region-site": ["s1"]})
        )
        assert lowest_level(team) == "region-site-unit"

    def test_tie_goes_to_first_label(self, make_team):
        """Labels of equal length resolve to the first one."""
        team = Team.from_document(make_team("t1", levels={"east": ["e"], "west": ["w"]}))
        assert lowest_level(team) == "east"

    def test_explicit_ordering_wins_over_length(self, make_team):
        """A configured ordering decides the depth, not the label length."""
        team = Team.from_document(
            make_team("t1", levels={"organisation": ["o1"], "site": ["s1"]})
        )
        assert lowest_level(team, ["organisation", "site"]) == "site"

    def test_unknown_labels_fall_back_to_length(self, make_team):
        """Labels missing from the ordering are ranked by length."""
        team = Team.from_document(make_team("t1", levels={"a": ["1"], "abc": ["2"]}))
        assert lowest_level(team, ["division", "site"]) == "abc"

    def test_no_business_objects(self, make_team):
        """A team without business objects has no level."""
        team = Team.from_document(make_team("t1", levels={}))
        assert lowest_level(team) is None


class TestCreateTeamCode:
    """Test the new code format."""

    def test_domain_objects_and_name(self, make_team):
        """Domain, lowest-level object ids and the name are joined by dashes."""
        team = Team.from_document(
            make_team("t1", name="Test Team", levels={"bu": ["x"], "bu-site": ["g1", "g2"]})
        )
        assert create_team_code(team, "acme") == "acme-g1-g2-Test_Team"

    def test_all_whitespace_replaced(self, make_team):
        """Every whitespace character becomes an underscore."""
        team = Team.from_document(
            make_team("t1", name="Night  Shift\tTeam", levels={"site": ["g 1"]})
        )
        code = create_team_code(team, "big corp")
        assert code == "big_corp-g_1-Night__Shift_Team"
        assert not any(char.isspace() for char in code)

    def test_non_string_object_ids(self, make_team):
        """Object ids are rendered as strings."""
        team = Team.from_document(make_team("t1", name="Ops", levels={"site": [1, 2]}))
        assert create_team_code(team, "acme") == "acme-1-2-Ops"

    def test_deterministic(self, make_team):
        """The same team always yields the same code."""
        team = Team.from_document(make_team("t1", levels={"site": ["g1"]}))
        assert create_team_code(team, "acme") == create_team_code(team, "acme")

    @pytest.mark.parametrize("domain", ["", "   ", None])
    def test_domain_required(self, make_team, domain):
        """A missing domain is rejected."""
        team = Team.from_document(make_team("t1"))
        with pytest.raises(ValueError):
            create_team_code(team, domain)

    def test_business_objects_required(self, make_team):
        """A team without business objects cannot get a new code."""
        team = Team.from_document(make_team("t1", levels={}))
        with pytest.raises(ValueError):
            create_team_code(team, "acme")
