"""Pytest fixtures for conjugations tests."""

import json
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest

from conjugations.lookup import get_default_store
from conjugations.store import ConjugationStore, load_bundled_store

PERSONS = ["yo", "tú", "él/ella/usted", "nosotros/as", "vosotros/as", "ellos/ellas/ustedes"]


@pytest.fixture
def small_dataset() -> dict[str, Any]:
    """Create a two-tense, two-verb dataset document.

    Returns:
        Compact dataset with a simple and a compound tense.
    """
    return {
        "language": "spanish",
        "verb_count": 2,
        "tenses": [
            {
                "tense_id": "present",
                "tense_name": "Present",
                "description": "Actions happening now",
                "persons": PERSONS,
            },
            {
                "tense_id": "present-perfect",
                "tense_name": "Present Perfect",
                "description": "Actions completed recently",
                "persons": PERSONS,
            },
        ],
        "verbs": {
            "hablar": [
                ["hablo", "hablas", "habla", "hablamos", "habláis", "hablan"],
                [
                    "he hablado",
                    "has hablado",
                    "ha hablado",
                    "hemos hablado",
                    "habéis hablado",
                    "han hablado",
                ],
            ],
            "ser": [
                ["soy", "eres", "es", "somos", "sois", "son"],
                ["he sido", "has sido", "ha sido", "hemos sido", "habéis sido", "han sido"],
            ],
        },
    }


@pytest.fixture
def dataset_file(tmp_path: Path, small_dataset: dict[str, Any]) -> Path:
    """Write the small dataset to a JSON file.

    Returns:
        Path to the dataset file.
    """
    path = tmp_path / "conjugations.json"
    path.write_text(json.dumps(small_dataset, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def small_store(small_dataset: dict[str, Any]) -> ConjugationStore:
    """Build a store from the small dataset."""
    return ConjugationStore.from_dicts([small_dataset])


@pytest.fixture(scope="session")
def bundled_store() -> ConjugationStore:
    """Build a store from the dataset shipped with the package."""
    return load_bundled_store()


@pytest.fixture(autouse=True)
def _reset_default_store(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Isolate tests from CONJUGATIONS_DATA and the memoized default store."""
    monkeypatch.delenv("CONJUGATIONS_DATA", raising=False)
    get_default_store.cache_clear()
    yield
    get_default_store.cache_clear()
