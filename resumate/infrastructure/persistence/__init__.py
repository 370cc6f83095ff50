"""Persistence adapters."""

from resumate.infrastructure.persistence.kv_store import FileKeyValueStore, MemoryKeyValueStore
from resumate.infrastructure.persistence.profile_store import (
    PROFILE_SCHEMA_VERSION,
    ProfileStore,
    profile_key,
)

__all__ = [
    "FileKeyValueStore",
    "MemoryKeyValueStore",
    "PROFILE_SCHEMA_VERSION",
    "ProfileStore",
    "profile_key",
]
