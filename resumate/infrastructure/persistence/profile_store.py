"""Profile store - versioned load/save of the user profile over a key-value store."""

import json
import logging
from collections.abc import Iterable

from pydantic import BaseModel, ValidationError

from resumate.domain.entities.profile import SearchPreferences, UserProfile, default_profile
from resumate.domain.errors import PersistenceError
from resumate.domain.ports.store import KeyValueStore
from resumate.domain.services.knowledge import merge_facts

logger = logging.getLogger(__name__)

# Bump to make defaults win over everything stored under the previous key.
PROFILE_SCHEMA_VERSION = 3


def profile_key(version: int = PROFILE_SCHEMA_VERSION) -> str:
    return f"resumate_profile_v{version}"


def _valid_fields(model: type[BaseModel], stored: dict) -> dict:
    """Stored fields that validate on their own; null, unknown or invalid ones are left out."""
    kept: dict = {}
    for name in model.model_fields:
        value = stored.get(name)
        if value is None:
            continue
        try:
            model.model_validate({name: value})
        except ValidationError:
            logger.warning("Invalid stored %s.%s, using default", model.__name__, name)
            continue
        kept[name] = value
    return kept


def _merge_with_defaults(stored: dict) -> dict:
    """Field-level merge: valid stored values win, every other field comes from defaults."""
    merged = _valid_fields(UserProfile, {k: v for k, v in stored.items() if k != "search_preferences"})
    stored_prefs = stored.get("search_preferences")
    merged["search_preferences"] = _valid_fields(
        SearchPreferences, stored_prefs if isinstance(stored_prefs, dict) else {}
    )
    return merged


class ProfileStore:
    """Load, save and learn into the persisted UserProfile.

    load() never raises and save() never raises: the in-memory profile held by
    callers stays authoritative even when the substrate fails.
    """

    def __init__(self, store: KeyValueStore, version: int = PROFILE_SCHEMA_VERSION) -> None:
        self._store = store
        self._key = profile_key(version)

    @property
    def key(self) -> str:
        return self._key

    def load(self) -> UserProfile:
        """Return the stored profile, or the default when missing or unusable."""
        try:
            raw = self._store.get(self._key)
        except PersistenceError:
            logger.warning("Failed to read profile %s", self._key, exc_info=True)
            return default_profile()
        if not raw:
            return default_profile()

        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Corrupted profile under %s, using defaults", self._key)
            return default_profile()
        if not isinstance(parsed, dict):
            logger.warning("Profile under %s is not an object, using defaults", self._key)
            return default_profile()

        try:
            return UserProfile.model_validate(_merge_with_defaults(parsed))
        except ValidationError as e:
            logger.warning("Invalid profile under %s, using defaults: %s", self._key, e)
            return default_profile()

    def save(self, profile: UserProfile) -> bool:
        """Overwrite the stored profile. Best effort: returns False on failure."""
        try:
            payload = profile.model_dump_json()
            self._store.set(self._key, payload)
        except (PersistenceError, TypeError, ValueError):
            logger.error("Failed to save profile %s", self._key, exc_info=True)
            return False
        return True

    def learn_facts(self, new_facts: Iterable[str]) -> UserProfile:
        """Merge facts into the latest stored profile and persist it.

        Re-reads the store right before merging so edits made elsewhere since
        this process last loaded are kept. Not atomic: a concurrent writer
        between the read and the write can still be lost.
        """
        latest = self.load()
        facts = [f for f in new_facts if f and f.strip()]
        merged = merge_facts(latest.facts, facts)
        if merged == latest.facts:
            return latest
        updated = latest.model_copy(update={"facts": merged})
        self.save(updated)
        logger.info("Learned %d new facts", len(merged) - len(latest.facts))
        return updated
