"""Conjugation lookup over the static store."""

from __future__ import annotations

import functools
import logging
import os
from pathlib import Path

from conjugations.models import VerbData
from conjugations.store import ConjugationStore, bundled_dataset_path

logger = logging.getLogger(__name__)

# Environment variable naming a dataset file to use instead of the bundled one
DATA_ENV_VAR = "CONJUGATIONS_DATA"


class ConjugationLookup:
    """Existence checks and retrieval of conjugation records.

    An unknown verb or language is a normal outcome: lookups return None
    (or False) rather than raising. Input that is not a non-empty string is
    treated the same way, so both operations are total.
    """

    def __init__(self, store: ConjugationStore) -> None:
        self._store = store

    @property
    def store(self) -> ConjugationStore:
        """Return the underlying store."""
        return self._store

    def lookup_conjugation(self, infinitive: str, language: str | None = None) -> VerbData | None:
        """Look up the full conjugation record of a verb.

        Args:
            infinitive: Exact infinitive to look up (no case or accent folding).
            language: Language tag. Defaults to the store's primary language.

        Returns:
            The VerbData record, or None if the verb or language is unknown.
        """
        if not _is_valid_key(infinitive) or (language is not None and not _is_valid_key(language)):
            logger.debug("Ignoring invalid lookup key %r (language %r)", infinitive, language)
            return None

        record = self._store.get(infinitive, language)
        if record is None:
            logger.debug("No conjugation for %r (language %r)", infinitive, language)
        return record

    def has_conjugation(self, infinitive: str, language: str | None = None) -> bool:
        """Return whether lookup_conjugation() would find a record."""
        if not _is_valid_key(infinitive) or (language is not None and not _is_valid_key(language)):
            return False
        return self._store.contains(infinitive, language)


def _is_valid_key(value: object) -> bool:
    return isinstance(value, str) and bool(value)


def resolve_data_path(data_path: Path | None = None) -> Path:
    """Resolve which dataset file to load.

    Precedence: explicit path, then the CONJUGATIONS_DATA environment
    variable, then the dataset bundled with the package.
    """
    if data_path is not None:
        return data_path
    env_path = os.environ.get(DATA_ENV_VAR)
    if env_path:
        return Path(env_path)
    return bundled_dataset_path()


@functools.cache
def get_default_store() -> ConjugationStore:
    """Return the process-wide store, building it on first use.

    Raises:
        MalformedDatasetError: If the configured dataset is invalid.
    """
    return ConjugationStore.from_paths([resolve_data_path()])


def get_default_lookup() -> ConjugationLookup:
    """Return a lookup service over the process-wide store."""
    return ConjugationLookup(get_default_store())


def lookup_conjugation(infinitive: str, language: str | None = None) -> VerbData | None:
    """Look up a verb in the process-wide store. See ConjugationLookup."""
    return get_default_lookup().lookup_conjugation(infinitive, language)


def has_conjugation(infinitive: str, language: str | None = None) -> bool:
    """Check a verb against the process-wide store. See ConjugationLookup."""
    return get_default_lookup().has_conjugation(infinitive, language)
