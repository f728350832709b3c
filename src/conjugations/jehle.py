"""Build conjugation datasets from the Fred Jehle Spanish verb database.

The Jehle database publishes every simple and compound tense of several
hundred common Spanish verbs, one CSV row per (verb, mood, tense). This
module turns it into the compact document read by ConjugationStore.
Progressive and modal constructs are not in the database; they are
composed from the published gerund or infinitive with fixed auxiliaries.
"""

from __future__ import annotations

import csv
import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import httpx

from conjugations.constructs import SPANISH

logger = logging.getLogger(__name__)

JEHLE_CSV_URL = (
    "https://raw.githubusercontent.com/ghidinelli/fred-jehle-spanish-verbs/"
    "master/jehle_verb_database.csv"
)
DEFAULT_CACHE_DIR = Path.home() / ".cache" / "conjugations"
CHUNK_SIZE = 8192

# (mood_english, tense_english) -> tense_id
JEHLE_TENSE_MAP: dict[tuple[str, str], str] = {
    ("Indicative", "Present"): "present",
    ("Indicative", "Preterite"): "preterite",
    ("Indicative", "Imperfect"): "imperfect",
    ("Indicative", "Future"): "future",
    ("Indicative", "Conditional"): "conditional",
    ("Subjunctive", "Present"): "present-subjunctive",
    ("Subjunctive", "Imperfect"): "imperfect-subjunctive",
    ("Imperative Affirmative", "Present"): "imperative",
    ("Indicative", "Present Perfect"): "present-perfect",
    ("Indicative", "Past Perfect"): "pluperfect",
    ("Indicative", "Future Perfect"): "future-perfect",
    ("Indicative", "Conditional Perfect"): "conditional-perfect",
}

IMPERATIVE_PERSONS = ["tú", "usted", "nosotros/as", "vosotros/as", "ustedes"]

# Auxiliary forms in person order for the constructs Jehle does not publish
ESTAR_PRESENT = ["estoy", "estás", "está", "estamos", "estáis", "están"]
ESTAR_IMPERFECT = ["estaba", "estabas", "estaba", "estábamos", "estabais", "estaban"]
PODER_PRESENT = ["puedo", "puedes", "puede", "podemos", "podéis", "pueden"]
DEBER_PRESENT = ["debo", "debes", "debe", "debemos", "debéis", "deben"]

# Column positions in the Jehle CSV
_COL_INFINITIVE = 0
_COL_MOOD = 3
_COL_TENSE = 5
_COL_FORMS = slice(7, 13)
_COL_GERUND = 13
_COL_PARTICIPLE = 15
_MIN_COLUMNS = 17


@dataclass
class JehleVerb:
    """Published forms of one verb.

    Attributes:
        infinitive: The verb's infinitive.
        gerund: Gerund (e.g., "hablando").
        past_participle: Past participle (e.g., "hablado").
        tenses: Mapping of tense_id to forms in person order.
    """

    infinitive: str
    gerund: str
    past_participle: str
    tenses: dict[str, list[str]] = field(default_factory=dict)


def download_jehle_csv(cache_dir: Path | None = None, url: str = JEHLE_CSV_URL) -> Path:
    """Download the Jehle CSV into the cache, unless already present.

    Args:
        cache_dir: Cache directory. Defaults to ~/.cache/conjugations/
        url: Source URL.

    Returns:
        Path to the cached CSV.

    Raises:
        httpx.HTTPStatusError: If the server answers with a non-2xx status.
        httpx.RequestError: If the request fails.
    """
    cache_dir = cache_dir or DEFAULT_CACHE_DIR
    cache_dir.mkdir(parents=True, exist_ok=True)
    csv_path = cache_dir / "jehle_verb_database.csv"

    if csv_path.exists():
        logger.info("Using cached Jehle database at %s", csv_path)
        return csv_path

    logger.info("Downloading Jehle verb database from %s", url)
    tmp_path = csv_path.with_suffix(".part")
    with httpx.stream("GET", url, follow_redirects=True, timeout=300) as response:
        response.raise_for_status()
        with tmp_path.open("wb") as f:
            for chunk in response.iter_bytes(chunk_size=CHUNK_SIZE):
                f.write(chunk)
    tmp_path.rename(csv_path)

    logger.info("Saved Jehle verb database to %s", csv_path)
    return csv_path


def parse_jehle_csv(path: Path) -> dict[str, JehleVerb]:
    """Parse the Jehle CSV into per-verb tense tables.

    Rows for moods and tenses without a tense_id are skipped. Imperative
    rows drop the (empty) first-person singular column.

    Args:
        path: Path to the CSV file.

    Returns:
        Mapping of infinitive to JehleVerb, in file order.
    """
    verbs: dict[str, JehleVerb] = {}

    with path.open(encoding="utf-8", newline="") as f:
        reader = csv.reader(f)
        next(reader, None)  # header
        for line_num, fields in enumerate(reader, 2):
            if len(fields) < _MIN_COLUMNS:
                logger.debug("Skipping short row %d", line_num)
                continue

            tense_id = JEHLE_TENSE_MAP.get((fields[_COL_MOOD], fields[_COL_TENSE]))
            if tense_id is None:
                continue

            infinitive = fields[_COL_INFINITIVE]
            verb = verbs.get(infinitive)
            if verb is None:
                verb = JehleVerb(
                    infinitive=infinitive,
                    gerund=fields[_COL_GERUND],
                    past_participle=fields[_COL_PARTICIPLE],
                )
                verbs[infinitive] = verb

            forms = fields[_COL_FORMS]
            verb.tenses[tense_id] = forms[1:] if tense_id == "imperative" else forms

    logger.info("Parsed %d verbs from %s", len(verbs), path)
    return verbs


def _compose(auxiliaries: list[str], word: str) -> list[str]:
    return [f"{aux} {word}" for aux in auxiliaries]


def build_table(verb: JehleVerb) -> list[list[str]] | None:
    """Build a verb's rows in canonical tense order.

    Returns:
        One row of forms per construct, or None if the database lacks a
        tense or has empty forms for this verb.
    """
    composed = {
        "present-progressive": _compose(ESTAR_PRESENT, verb.gerund),
        "imperfect-progressive": _compose(ESTAR_IMPERFECT, verb.gerund),
        "poder-present": _compose(PODER_PRESENT, verb.infinitive),
        "deber-present": _compose(DEBER_PRESENT, verb.infinitive),
    }

    table: list[list[str]] = []
    for tense_id in SPANISH.construct_ids:
        row = verb.tenses.get(tense_id) or composed.get(tense_id)
        if not row or not all(form.strip() for form in row):
            logger.warning("Skipping %s: missing %s forms", verb.infinitive, tense_id)
            return None
        table.append([form.strip() for form in row])
    return table


def tense_metadata() -> list[dict[str, Any]]:
    """Return the dataset's tense metadata for Spanish."""
    persons = list(SPANISH.persons)
    return [
        {
            "tense_id": c.id,
            "tense_name": c.name,
            "description": c.description,
            "persons": IMPERATIVE_PERSONS if c.id == "imperative" else persons,
        }
        for c in SPANISH.constructs
    ]


def build_dataset(
    verbs: dict[str, JehleVerb],
    infinitives: Iterable[str] | None = None,
) -> dict[str, Any]:
    """Build a compact conjugation document.

    Args:
        verbs: Parsed Jehle verbs.
        infinitives: Verbs to include, in order. None includes every verb.

    Returns:
        JSON-serializable document accepted by ConjugationStore.
    """
    selected = list(infinitives) if infinitives is not None else list(verbs)
    compact: dict[str, list[list[str]]] = {}

    for infinitive in selected:
        verb = verbs.get(infinitive)
        if verb is None:
            logger.warning("Verb %s not found in Jehle database", infinitive)
            continue
        table = build_table(verb)
        if table is not None:
            compact[infinitive] = table

    return {
        "language": SPANISH.id,
        "generated_at": datetime.now(UTC).isoformat(),
        "verb_count": len(compact),
        "tenses": tense_metadata(),
        "verbs": compact,
    }


def write_dataset(dataset: dict[str, Any], path: Path) -> None:
    """Write a dataset document as UTF-8 JSON."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(dataset, f, ensure_ascii=False, indent=2)
    logger.info("Wrote %d verbs to %s", dataset["verb_count"], path)
