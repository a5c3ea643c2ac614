from enum import Enum


class Outcome(str, Enum):
    MIGRATE = "MIGRATE"  # Different levels, both have users
    CONFLICT = "CONFLICT"  # Same level, both have users: consult customer
    SAFE_TO_DELETE = "SAFE_TO_DELETE"  # At least one team has no users
    UNSUPPORTED_CARDINALITY = "UNSUPPORTED_CARDINALITY"  # Not exactly two teams


class StorageBackend(str, Enum):
    MONGO = "mongo"
    SUPABASE = "supabase"
