"""Immutable conjugation store built from compact JSON datasets."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Iterator
from importlib import resources
from pathlib import Path
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ValidationError

from conjugations.models import ConjugationForm, TenseData, VerbData

logger = logging.getLogger(__name__)

BUNDLED_DATASET = "spanish-conjugations.json"


class MalformedDatasetError(ValueError):
    """Raised when a conjugation dataset violates the store's invariants."""


class TenseMetadata(BaseModel):
    """Shared description of one tense in a dataset."""

    tense_id: str
    tense_name: str
    description: str
    persons: list[str]


class ConjugationDataset(BaseModel):
    """Compact conjugation document for one language.

    ``verbs[infinitive][tense_index][person_index]`` is a surface form, lined
    up positionally with ``tenses`` and each tense's ``persons``. The optional
    ``translations`` table has the same shape.
    """

    language: str
    generated_at: str | None = None
    verb_count: int | None = None
    tenses: list[TenseMetadata]
    verbs: dict[str, list[list[str]]]
    translations: dict[str, list[list[str]]] = {}


def _check_metadata(dataset: ConjugationDataset) -> None:
    """Validate the tense metadata shared by every verb."""
    if not dataset.language:
        raise MalformedDatasetError("Dataset language must not be empty")
    if not dataset.tenses:
        raise MalformedDatasetError(f"Dataset {dataset.language!r} defines no tenses")

    seen: set[str] = set()
    for meta in dataset.tenses:
        if not meta.tense_id:
            raise MalformedDatasetError(f"Dataset {dataset.language!r} has an empty tense_id")
        if meta.tense_id in seen:
            raise MalformedDatasetError(
                f"Dataset {dataset.language!r} has duplicate tense_id {meta.tense_id!r}"
            )
        if not meta.persons:
            raise MalformedDatasetError(
                f"Tense {meta.tense_id!r} in {dataset.language!r} has no persons"
            )
        seen.add(meta.tense_id)

    if dataset.verb_count is not None and dataset.verb_count != len(dataset.verbs):
        raise MalformedDatasetError(
            f"Dataset {dataset.language!r} declares {dataset.verb_count} verbs "
            f"but contains {len(dataset.verbs)}"
        )

    unknown = set(dataset.translations) - set(dataset.verbs)
    if unknown:
        raise MalformedDatasetError(
            f"Translations for unknown verbs in {dataset.language!r}: {sorted(unknown)}"
        )


def _check_table(
    infinitive: str,
    table: list[list[str]],
    dataset: ConjugationDataset,
    *,
    allow_empty: bool,
) -> None:
    """Check that a verb's table has the shape declared by the tense metadata."""
    if len(table) != len(dataset.tenses):
        raise MalformedDatasetError(
            f"Verb {infinitive!r} has {len(table)} tenses, expected {len(dataset.tenses)}"
        )
    for meta, row in zip(dataset.tenses, table, strict=True):
        if len(row) != len(meta.persons):
            raise MalformedDatasetError(
                f"Verb {infinitive!r} tense {meta.tense_id!r} has {len(row)} forms, "
                f"expected {len(meta.persons)}"
            )
        if not allow_empty and not all(row):
            raise MalformedDatasetError(
                f"Verb {infinitive!r} tense {meta.tense_id!r} has an empty form"
            )


def _build_verb(infinitive: str, dataset: ConjugationDataset) -> VerbData:
    """Materialize one verb's record from the compact tables."""
    forms = dataset.verbs[infinitive]
    translations = dataset.translations.get(infinitive)

    _check_table(infinitive, forms, dataset, allow_empty=False)
    if translations is not None:
        _check_table(infinitive, translations, dataset, allow_empty=True)

    tenses = []
    for tense_idx, meta in enumerate(dataset.tenses):
        conjugations = tuple(
            ConjugationForm(
                person=person,
                form=forms[tense_idx][person_idx],
                mini_translation=(
                    translations[tense_idx][person_idx] if translations is not None else ""
                ),
            )
            for person_idx, person in enumerate(meta.persons)
        )
        tenses.append(
            TenseData(
                tense_id=meta.tense_id,
                tense_name=meta.tense_name,
                description=meta.description,
                conjugations=conjugations,
            )
        )
    return VerbData(infinitive=infinitive, language=dataset.language, tenses=tuple(tenses))


def parse_dataset(raw: dict[str, Any], source: str = "<dataset>") -> ConjugationDataset:
    """Validate a raw JSON document against the dataset schema.

    Args:
        raw: Decoded JSON document.
        source: Name used in error messages.

    Returns:
        The parsed dataset.

    Raises:
        MalformedDatasetError: If the document does not match the schema.
    """
    try:
        return ConjugationDataset.model_validate(raw)
    except ValidationError as e:
        raise MalformedDatasetError(f"Invalid conjugation dataset {source}: {e}") from e


class ConjugationStore:
    """Read-only mapping from (language, infinitive) to a conjugation record.

    Every record is built and validated at construction, so a malformed
    dataset fails here and lookups afterwards are plain dictionary reads.
    The first dataset supplied is the primary language, used when callers
    do not name one.
    """

    def __init__(self, datasets: Iterable[ConjugationDataset]) -> None:
        """Build the store.

        Args:
            datasets: One dataset per language.

        Raises:
            MalformedDatasetError: If any dataset violates an invariant, or
                two datasets share a language.
        """
        verbs: dict[str, MappingProxyType[str, VerbData]] = {}
        tense_ids: dict[str, tuple[str, ...]] = {}

        for dataset in datasets:
            if dataset.language in verbs:
                raise MalformedDatasetError(f"Duplicate dataset for language {dataset.language!r}")
            _check_metadata(dataset)
            records = {infinitive: _build_verb(infinitive, dataset) for infinitive in dataset.verbs}
            verbs[dataset.language] = MappingProxyType(records)
            tense_ids[dataset.language] = tuple(m.tense_id for m in dataset.tenses)
            logger.info("Loaded %d %s verbs", len(records), dataset.language)

        if not verbs:
            raise MalformedDatasetError("At least one dataset is required")

        self._verbs = MappingProxyType(verbs)
        self._tense_ids = MappingProxyType(tense_ids)
        self._primary = next(iter(verbs))

    @classmethod
    def from_dicts(cls, documents: Iterable[dict[str, Any]]) -> ConjugationStore:
        """Build a store from decoded JSON documents."""
        return cls(parse_dataset(doc) for doc in documents)

    @classmethod
    def from_paths(cls, paths: Iterable[Path]) -> ConjugationStore:
        """Build a store from JSON dataset files.

        Raises:
            MalformedDatasetError: If a file is not valid JSON or fails validation.
        """
        return cls(_read_dataset(path) for path in paths)

    def _resolve(self, language: str | None) -> str:
        return self._primary if language is None else language

    @property
    def primary_language(self) -> str:
        """Return the language used when callers do not name one."""
        return self._primary

    @property
    def languages(self) -> list[str]:
        """Return the languages held by the store, primary first."""
        return list(self._verbs)

    def get(self, infinitive: str, language: str | None = None) -> VerbData | None:
        """Return the record for an exact infinitive, or None."""
        verbs = self._verbs.get(self._resolve(language))
        if verbs is None:
            return None
        return verbs.get(infinitive)

    def contains(self, infinitive: str, language: str | None = None) -> bool:
        """Return whether get() would find a record."""
        verbs = self._verbs.get(self._resolve(language))
        return verbs is not None and infinitive in verbs

    def tense_ids(self, language: str | None = None) -> list[str]:
        """Return the tense ids of a language in canonical order."""
        return list(self._tense_ids.get(self._resolve(language), ()))

    def tense_count(self, language: str | None = None) -> int:
        """Return the fixed number of tenses per verb for a language."""
        return len(self._tense_ids.get(self._resolve(language), ()))

    def infinitives(self, language: str | None = None) -> list[str]:
        """Return the infinitives of a language in dataset order."""
        return list(self._verbs.get(self._resolve(language), {}))

    def __len__(self) -> int:
        return sum(len(v) for v in self._verbs.values())

    def __iter__(self) -> Iterator[VerbData]:
        for verbs in self._verbs.values():
            yield from verbs.values()


def _reject_duplicate_keys(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    """Build a JSON object, refusing keys that appear twice."""
    obj: dict[str, Any] = {}
    for key, value in pairs:
        if key in obj:
            raise MalformedDatasetError(f"Duplicate key '{key}'")
        obj[key] = value
    return obj


def _read_dataset(path: Path) -> ConjugationDataset:
    """Read and validate one JSON dataset file."""
    logger.info("Loading conjugation dataset from %s", path)
    try:
        with path.open(encoding="utf-8") as f:
            raw = json.load(f, object_pairs_hook=_reject_duplicate_keys)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedDatasetError(f"Invalid JSON in {path}: {e}") from e
    except MalformedDatasetError as e:
        raise MalformedDatasetError(f"Invalid conjugation dataset {path}: {e}") from e
    return parse_dataset(raw, source=str(path))


def bundled_dataset_path() -> Path:
    """Return the path of the dataset shipped with the package."""
    return Path(str(resources.files("conjugations") / "data" / BUNDLED_DATASET))


def load_bundled_store() -> ConjugationStore:
    """Build a store from the dataset shipped with the package."""
    return ConjugationStore.from_paths([bundled_dataset_path()])
