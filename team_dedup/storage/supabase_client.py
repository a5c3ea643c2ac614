# team_dedup/storage/supabase_client.py
from collections import Counter
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

from loguru import logger
from postgrest import APIResponse
from postgrest.exceptions import APIError
from supabase import Client, create_client

from team_dedup.models.duplicates import DuplicateGroup
from team_dedup.models.team import Team

from .base import StorageError, TeamStore

# PostgREST caps responses (1000 rows by default), so reads are paged
PAGE_SIZE = 1000


class SupabaseTeamStore(TeamStore):
    """Team store on a Supabase table with the team documents as rows.

    The table uses `id` as primary key; it is exposed as `_id` on the Team
    model so both stores hand the resolver the same documents.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        key: Optional[str] = None,
        table: str = "teams",
        client: Optional[Client] = None,
    ):
        if client is None:
            if not url or not key:
                logger.critical("Supabase URL or Key not configured in settings.")
                raise StorageError("Supabase configuration missing.")
            key_snippet = f"{key[:5]}...{key[-5:]}"
            logger.debug(f"Creating Supabase client for {url} (key {key_snippet})")
            client = create_client(url, key)
        self.client = client
        self.url = url or ""
        self.table = table

    def dataset_name(self) -> str:
        # Project reference, e.g. "abcdefgh" for https://abcdefgh.supabase.co
        hostname = urlparse(self.url).hostname or ""
        return hostname.split(".")[0]

    def _select_all(self, columns: str) -> List[Dict[str, Any]]:
        rows: List[Dict[str, Any]] = []
        start = 0
        while True:
            try:
                response: APIResponse = (
                    self.client.table(self.table)
                    .select(columns)
                    .order("id")
                    .range(start, start + PAGE_SIZE - 1)
                    .execute()
                )
            except APIError as e:
                raise StorageError(f"Reading {self.table} failed: {e.message}") from e
            rows.extend(response.data)
            if len(response.data) < PAGE_SIZE:
                return rows
            start += PAGE_SIZE

    def find_duplicate_codes(self) -> List[DuplicateGroup]:
        rows = self._select_all("id, code, defaultTeam")
        counts = Counter(row.get("code") for row in rows)
        # Codes held by at least one non-default team
        remediable = {row.get("code") for row in rows if not row.get("defaultTeam")}

        logger.debug(f"Counted codes of {len(rows)} teams in {self.table}")
        return [
            DuplicateGroup(code=code, count=count, default_team=code not in remediable)
            for code, count in counts.items()
            if count > 1
        ]

    def find_teams(self, code: Any) -> List[Team]:
        query = self.client.table(self.table).select("*")
        # Teams without a code are grouped under None
        query = query.is_("code", "null") if code is None else query.eq("code", code)
        try:
            response: APIResponse = (
                query.or_("defaultTeam.is.null,defaultTeam.eq.false")
                .order("id")
                .execute()
            )
        except APIError as e:
            raise StorageError(
                f"Fetching teams with code {code!r} failed: {e.message}"
            ) from e
        return [self._to_team(row) for row in response.data]

    def replace_team(self, team: Team) -> int:
        row = self._to_row(team)
        try:
            response: APIResponse = (
                self.client.table(self.table).update(row).eq("id", team.id).execute()
            )
        except APIError as e:
            raise StorageError(f"Replacing team {team.id} failed: {e.message}") from e
        return len(response.data)

    @staticmethod
    def _to_team(row: Dict[str, Any]) -> Team:
        document = dict(row)
        document["_id"] = document.pop("id")
        return Team.from_document(document)

    @staticmethod
    def _to_row(team: Team) -> Dict[str, Any]:
        row = team.to_document()
        row["id"] = row.pop("_id")
        return row
