# team_dedup/storage/mongo_client.py
from typing import Any, List, Optional

from loguru import logger
from pymongo import ASCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from team_dedup.models.duplicates import DuplicateGroup
from team_dedup.models.team import Team

from .base import StorageError, TeamStore

DUPLICATE_CODES_PIPELINE = [
    {
        "$group": {
            "_id": "$code",
            "count": {"$sum": 1},
            "defaultTeam": {"$min": {"$eq": ["$defaultTeam", True]}},
        }
    },
    {"$match": {"count": {"$gt": 1}}},
]


class MongoTeamStore(TeamStore):
    """Team store on a MongoDB collection."""

    def __init__(
        self,
        uri: str = "mongodb://localhost:27017",
        database: str = "fh-aaa",
        collection: str = "teams",
        client: Optional[MongoClient] = None,
    ):
        self.client = client or MongoClient(uri)
        self.db = self.client[database]
        self.collection: Collection = self.db[collection]
        logger.debug(f"Using MongoDB collection {database}.{collection}")

    def dataset_name(self) -> str:
        return self.db.name

    def find_duplicate_codes(self) -> List[DuplicateGroup]:
        try:
            rows = list(self.collection.aggregate(DUPLICATE_CODES_PIPELINE))
        except PyMongoError as e:
            raise StorageError(f"Aggregation over team codes failed: {e}") from e

        logger.debug(f"Aggregation returned {len(rows)} duplicate code(s)")
        return [
            DuplicateGroup(
                code=row["_id"],
                count=row["count"],
                default_team=bool(row.get("defaultTeam")),
            )
            for row in rows
        ]

    def find_teams(self, code: Any) -> List[Team]:
        query = {"code": code, "defaultTeam": {"$ne": True}}
        try:
            documents = list(self.collection.find(query).sort("_id", ASCENDING))
        except PyMongoError as e:
            raise StorageError(f"Fetching teams with code {code!r} failed: {e}") from e
        return [Team.from_document(doc) for doc in documents]

    def replace_team(self, team: Team) -> int:
        try:
            result = self.collection.replace_one({"_id": team.id}, team.to_document())
        except PyMongoError as e:
            raise StorageError(f"Replacing team {team.id} failed: {e}") from e
        return result.matched_count

    def close(self) -> None:
        self.client.close()
        logger.debug("Closed MongoDB client")
