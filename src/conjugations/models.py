"""Data models for verb conjugation records."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, dataclass
from typing import Any

# Mapping from tense_id to enablement, supplied by the presentation layer.
ConstructChecklist = Mapping[str, bool]


@dataclass(frozen=True)
class ConjugationForm:
    """One grammatical person's form within a tense.

    Attributes:
        person: Label for the grammatical person (e.g., "yo").
        form: The conjugated surface form. Compound tenses hold the
            auxiliary and participle as a single string (e.g., "he hablado").
        mini_translation: Short gloss, or "" when none is supplied.
    """

    person: str
    form: str
    mini_translation: str = ""


@dataclass(frozen=True)
class TenseData:
    """One tense's conjugation table for a verb.

    Attributes:
        tense_id: Identifier shared by every verb of a language (e.g., "present").
        tense_name: Human-readable label.
        description: Usage note shown to learners.
        conjugations: Forms in canonical person order.
    """

    tense_id: str
    tense_name: str
    description: str
    conjugations: tuple[ConjugationForm, ...]

    @property
    def forms(self) -> list[str]:
        """Return the surface forms in person order."""
        return [c.form for c in self.conjugations]


@dataclass(frozen=True)
class VerbData:
    """A verb's complete conjugation record.

    Attributes:
        infinitive: The unconjugated form, unique within a language.
        language: Language tag (e.g., "spanish").
        tenses: Tense tables in canonical presentation order.
    """

    infinitive: str
    language: str
    tenses: tuple[TenseData, ...]

    def tense(self, tense_id: str) -> TenseData | None:
        """Return the tense table with the given id, or None."""
        for tense in self.tenses:
            if tense.tense_id == tense_id:
                return tense
        return None

    def to_dict(self) -> dict[str, Any]:
        """Export the record as a JSON-serializable dictionary.

        Returns:
            Dictionary with infinitive, language and tenses, where tuples
            are rendered as lists.
        """
        data = asdict(self)
        data["tenses"] = [
            {**tense, "conjugations": list(tense["conjugations"])} for tense in data["tenses"]
        ]
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> VerbData:
        """Load a record from a dictionary produced by to_dict().

        Args:
            data: Dictionary with 'infinitive', 'language' and 'tenses' keys.

        Returns:
            VerbData instance.
        """
        tenses = tuple(
            TenseData(
                tense_id=t["tense_id"],
                tense_name=t["tense_name"],
                description=t["description"],
                conjugations=tuple(
                    ConjugationForm(
                        person=c["person"],
                        form=c["form"],
                        mini_translation=c.get("mini_translation", ""),
                    )
                    for c in t["conjugations"]
                ),
            )
            for t in data["tenses"]
        )
        return cls(infinitive=data["infinitive"], language=data["language"], tenses=tenses)
