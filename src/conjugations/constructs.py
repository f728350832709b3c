"""Grammatical construct catalogue and checklist-driven tense filtering."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from conjugations.models import ConstructChecklist, TenseData


@dataclass(frozen=True)
class ConstructDefinition:
    """A grammatical construct a learner can enable or disable.

    Attributes:
        id: Construct id, equal to the tense_id it controls.
        name: Human-readable name.
        category: Grouping shown in the checklist (e.g., "tense", "mood").
        description: Usage note.
    """

    id: str
    name: str
    category: str
    description: str


@dataclass(frozen=True)
class LanguageModule:
    """Constructs and persons supported for one language.

    Attributes:
        id: Language tag matching VerbData.language.
        name: Display name.
        constructs: Constructs in canonical presentation order.
        persons: Grammatical persons in canonical order.
    """

    id: str
    name: str
    constructs: tuple[ConstructDefinition, ...]
    persons: tuple[str, ...]

    @property
    def construct_ids(self) -> list[str]:
        """Return construct ids in canonical order."""
        return [c.id for c in self.constructs]

    @property
    def categories(self) -> list[str]:
        """Return construct categories in order of first appearance."""
        return list(dict.fromkeys(c.category for c in self.constructs))


SPANISH = LanguageModule(
    id="spanish",
    name="Spanish",
    constructs=(
        # Indicative
        ConstructDefinition(
            id="present",
            name="Present",
            category="tense",
            description="Actions happening now, habitual actions, general truths",
        ),
        ConstructDefinition(
            id="preterite",
            name="Preterite",
            category="tense",
            description="Completed past actions with a definite endpoint",
        ),
        ConstructDefinition(
            id="imperfect",
            name="Imperfect",
            category="tense",
            description="Ongoing, habitual, or background past actions",
        ),
        ConstructDefinition(
            id="future",
            name="Future",
            category="tense",
            description="Actions that will happen, predictions, probability",
        ),
        ConstructDefinition(
            id="conditional",
            name="Conditional",
            category="tense",
            description="Hypothetical situations, polite requests, future in the past",
        ),
        # Subjunctive
        ConstructDefinition(
            id="present-subjunctive",
            name="Present Subjunctive",
            category="tense",
            description="Wishes, doubts, emotions, impersonal expressions in the present",
        ),
        ConstructDefinition(
            id="imperfect-subjunctive",
            name="Imperfect Subjunctive",
            category="tense",
            description="Hypothetical or contrary-to-fact situations in the past",
        ),
        ConstructDefinition(
            id="imperative",
            name="Imperative",
            category="mood",
            description="Commands and instructions",
        ),
        # Compound (haber + participle)
        ConstructDefinition(
            id="present-perfect",
            name="Present Perfect",
            category="tense",
            description="Actions completed recently or with present relevance (he comido)",
        ),
        ConstructDefinition(
            id="pluperfect",
            name="Pluperfect",
            category="tense",
            description="Actions completed before another past action (había comido)",
        ),
        ConstructDefinition(
            id="future-perfect",
            name="Future Perfect",
            category="tense",
            description="Actions that will be completed before a future point (habré comido)",
        ),
        ConstructDefinition(
            id="conditional-perfect",
            name="Conditional Perfect",
            category="tense",
            description="Hypothetical completed actions (habría comido)",
        ),
        # Progressive (estar + gerund)
        ConstructDefinition(
            id="present-progressive",
            name="Present Progressive",
            category="tense",
            description="Actions happening right now (estoy hablando)",
        ),
        ConstructDefinition(
            id="imperfect-progressive",
            name="Imperfect Progressive",
            category="tense",
            description="Ongoing past actions in progress (estaba hablando)",
        ),
        # Modal + infinitive
        ConstructDefinition(
            id="poder-present",
            name="Poder + Infinitive",
            category="tense",
            description="Ability or possibility (puedo hablar)",
        ),
        ConstructDefinition(
            id="deber-present",
            name="Deber + Infinitive",
            category="tense",
            description="Obligation or probability (debo hablar)",
        ),
    ),
    persons=(
        "yo",
        "tú",
        "él/ella/usted",
        "nosotros/as",
        "vosotros/as",
        "ellos/ellas/ustedes",
    ),
)

LANGUAGE_MODULES: dict[str, LanguageModule] = {SPANISH.id: SPANISH}


def get_language_module(language: str) -> LanguageModule | None:
    """Return the construct catalogue for a language, or None."""
    return LANGUAGE_MODULES.get(language)


def default_checklist(module: LanguageModule = SPANISH) -> dict[str, bool]:
    """Return a checklist with only the present tense enabled.

    Every other construct is listed explicitly as False, so new learners
    start with a single construct and unlock the rest one at a time.
    """
    return {c.id: c.id == "present" for c in module.constructs}


def is_enabled(tense_id: str, checklist: ConstructChecklist | None) -> bool:
    """Return whether a tense passes the checklist.

    A tense missing from the checklist is enabled; only an explicit False
    disables it.
    """
    if checklist is None:
        return True
    return checklist.get(tense_id, True) is not False


def filter_tenses(
    tenses: Sequence[TenseData],
    checklist: ConstructChecklist | None = None,
) -> tuple[TenseData, ...]:
    """Narrow tense tables to the constructs a learner has enabled.

    Args:
        tenses: Tense tables, usually VerbData.tenses.
        checklist: Mapping from tense_id to enablement. None passes
            every tense through.

    Returns:
        The tenses not explicitly disabled, in input order, as a tuple
        like VerbData.tenses.
    """
    return tuple(t for t in tenses if is_enabled(t.tense_id, checklist))


def enabled_constructs(
    checklist: ConstructChecklist | None,
    module: LanguageModule = SPANISH,
) -> list[str]:
    """Return the construct ids of a module that pass the checklist, in order."""
    return [c.id for c in module.constructs if is_enabled(c.id, checklist)]
