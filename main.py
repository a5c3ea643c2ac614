"""Resolve duplicate team codes.

Usage:
    python main.py --domain <DOMAIN> [--dryrun | --no-dryrun]

Without a domain the new codes cannot be generated and they cannot be
inferred automatically. Dry run is the default: the script tells you what it
would do but does not run any update.
"""
import argparse
import sys
from typing import List, Optional

# --- Settings/Logging ---
from team_dedup.logging.setup import setup_logging
from team_dedup.config.settings import (
    VALID_LOG_LEVELS,
    AppSettings,
    RunConfig,
    settings,
)

from loguru import logger

from team_dedup.models.enums import StorageBackend
from team_dedup.resolution.resolver import (
    DuplicateResolver,
    ResolverError,
    require_domain,
)
from team_dedup.storage.base import StorageError, TeamStore
from team_dedup.storage.mongo_client import MongoTeamStore
from team_dedup.storage.supabase_client import SupabaseTeamStore

EXIT_OK = 0
EXIT_STORAGE_ERROR = 1
EXIT_PRECONDITION_FAILED = 2
EXIT_INTERRUPTED = 130


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Find teams sharing a code and migrate or report each pair."
    )
    parser.add_argument(
        "--domain", help="Customer domain used as prefix of the new team codes."
    )
    parser.add_argument(
        "--dryrun",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Only report the updates (default: on, see DRYRUN).",
    )
    parser.add_argument(
        "--backend",
        choices=[backend.value for backend in StorageBackend],
        help="Store holding the teams (default: STORAGE_BACKEND).",
    )
    parser.add_argument(
        "--expected-dataset",
        help="Dataset the run must target (default: EXPECTED_DATASET).",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=VALID_LOG_LEVELS,
        help="Overrides LOG_LEVEL.",
    )
    return parser.parse_args(argv)


def build_store(app_settings: AppSettings, backend: Optional[str] = None) -> TeamStore:
    backend = StorageBackend(backend or app_settings.storage_backend)
    if backend == StorageBackend.SUPABASE:
        return SupabaseTeamStore(
            url=app_settings.supabase_url,
            key=app_settings.supabase_key,
            table=app_settings.teams_collection,
        )
    return MongoTeamStore(
        uri=app_settings.mongo_uri,
        database=app_settings.mongo_database,
        collection=app_settings.teams_collection,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point; returns the process exit status."""
    args = parse_args(argv)
    setup_logging(args.log_level)

    config = RunConfig.from_settings(
        settings,
        domain=args.domain,
        dryrun=args.dryrun,
        expected_dataset=args.expected_dataset,
    )

    store = None
    try:
        # Checked before any connection is set up
        require_domain(config)
        store = build_store(settings, args.backend)
        DuplicateResolver(store, config).run()
    except ResolverError as e:
        logger.critical(f"Aborting, nothing has been processed: {e}")
        return EXIT_PRECONDITION_FAILED
    except StorageError as e:
        logger.error(f"Storage error, run aborted: {e}")
        return EXIT_STORAGE_ERROR
    finally:
        if store:
            store.close()

    return EXIT_OK


def run() -> None:
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        logger.info("Execution interrupted by user (KeyboardInterrupt).")
        sys.exit(EXIT_INTERRUPTED)
    except Exception as e:
        logger.exception(f"Unhandled exception in main execution: {e}")
        sys.exit(EXIT_STORAGE_ERROR)


if __name__ == "__main__":
    run()
