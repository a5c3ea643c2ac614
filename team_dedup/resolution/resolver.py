"""Resolves teams sharing a code.

For every pair of non-default teams with the same code the resolver reports
one of three things:

1) One of the duplicates can be migrated to the new code format, which
   resolves the duplicate.
2) One of the duplicates has no users and can be deleted manually.
3) Both duplicates are on the same business-object level and both have users:
   the customer needs to be asked to merge the teams manually.

Only case 1 changes data, and only when the run is not a dry run.
"""
from typing import List, Optional

from loguru import logger
from rich.console import Console

from team_dedup.config.settings import RunConfig
from team_dedup.models.duplicates import (
    Decision,
    DuplicateGroup,
    RunSummary,
    UpdateCommand,
)
from team_dedup.models.enums import Outcome
from team_dedup.models.team import Team
from team_dedup.storage.base import TeamStore, UpdateNotAppliedError

from .classifier import classify
from .codes import create_team_code


class ResolverError(Exception):
    """Custom exception for conditions that abort the whole run."""

    pass


class MissingConfigurationError(ResolverError):
    """Exception raised when the domain needed for new codes is not supplied."""

    pass


class WrongTargetError(ResolverError):
    """Exception raised when the store targets another dataset than expected."""

    pass


def require_domain(config: RunConfig) -> None:
    """Fails unless the domain needed to build new codes is supplied."""
    if not config.domain or not config.domain.strip():
        raise MissingConfigurationError("Domain must be defined")


class DuplicateResolver:
    """Finds duplicate team codes and migrates or reports each pair."""

    def __init__(
        self, store: TeamStore, config: RunConfig, console: Optional[Console] = None
    ):
        self.store = store
        self.config = config
        self.console = console or Console()

    def check_preconditions(self) -> None:
        """Aborts before anything is read unless domain and target are right."""
        require_domain(self.config)

        dataset = self.store.dataset_name()
        if dataset != self.config.expected_dataset:
            raise WrongTargetError(
                f"Script must be run on {self.config.expected_dataset} "
                f"database, not on {dataset}"
            )

    def run(self) -> RunSummary:
        self.check_preconditions()

        summary = RunSummary(dryrun=self.config.dryrun)
        logger.info(f"using domain: {self.config.domain}")
        if self.config.dryrun:
            logger.info("dry run enabled, no updates will be performed")

        groups = self.store.find_duplicate_codes()
        summary.groups_found = len(groups)
        if not groups:
            logger.info("All good, nothing to do. Aborting script.")
            return summary

        logger.info(f"Found {len(groups)} duplicate team code(s)")
        for group in groups:
            self._resolve_group(group, summary)

        logger.info(f"Finished: {summary.describe()}")
        return summary

    def _resolve_group(self, group: DuplicateGroup, summary: RunSummary) -> None:
        # We do not mess with default teams
        if group.default_team:
            logger.debug(f"Skipping default team code {group.code!r}")
            summary.groups_skipped += 1
            return

        teams = self.store.find_teams(group.code)
        decision = classify(group.code, teams, self.config.hierarchy_levels)
        summary.record(decision)
        self._log_decision(decision)

        if decision.requires_update:
            self._migrate(decision, summary)
        logger.info("----- done")

    def _log_decision(self, decision: Decision) -> None:
        if decision.outcome == Outcome.CONFLICT:
            logger.warning(
                f"Problem with team '{decision.teams[0].name}': {decision.reason}"
            )
        elif decision.outcome == Outcome.MIGRATE:
            logger.info(f"Duplicate teams '{decision.teams[0].name}': {decision.reason}")
        elif decision.outcome == Outcome.UNSUPPORTED_CARDINALITY:
            logger.warning(
                f"Code {decision.code!r}: {decision.reason}. Resolve manually."
            )
            self._log_user_counts(decision.teams)
        else:
            logger.info(decision.reason)
            self._log_user_counts(decision.teams)

    @staticmethod
    def _log_user_counts(teams: List[Team]) -> None:
        for team in teams:
            logger.info(f"{team.label} has {team.user_count} users")

    def _migrate(self, decision: Decision, summary: RunSummary) -> None:
        team = decision.team_to_migrate
        logger.info(f"migrating {team.label}")

        decision.new_code = create_team_code(
            team, self.config.domain, self.config.hierarchy_levels
        )
        migrated = team.model_copy(update={"code": decision.new_code})
        command = UpdateCommand.for_team(migrated)
        summary.planned_updates.append(command)

        if self.config.dryrun:
            self.console.print_json(data=command.model_dump(), default=str)
            logger.info(f"{team.label} would get code: {decision.new_code}")
            logger.info("dry run. no operations have been performed.")
            return

        matched = self.store.replace_team(migrated)
        if matched == 0:
            raise UpdateNotAppliedError(migrated.id)
        summary.updates_applied += 1
        logger.success(f"{migrated.name} code has been changed to: {decision.new_code}")
