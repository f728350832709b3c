"""Verb conjugation lookup and construct filtering."""

from conjugations.constructs import (
    LANGUAGE_MODULES,
    SPANISH,
    ConstructDefinition,
    LanguageModule,
    default_checklist,
    enabled_constructs,
    filter_tenses,
    get_language_module,
    is_enabled,
)
from conjugations.lookup import (
    ConjugationLookup,
    get_default_lookup,
    get_default_store,
    has_conjugation,
    lookup_conjugation,
)
from conjugations.models import ConjugationForm, ConstructChecklist, TenseData, VerbData
from conjugations.reflexive import format_reflexive_form, is_reflexive_verb, reflexive_tense
from conjugations.store import (
    ConjugationDataset,
    ConjugationStore,
    MalformedDatasetError,
    TenseMetadata,
    load_bundled_store,
)

__all__ = [
    "LANGUAGE_MODULES",
    "SPANISH",
    "ConjugationDataset",
    "ConjugationForm",
    "ConjugationLookup",
    "ConjugationStore",
    "ConstructChecklist",
    "ConstructDefinition",
    "LanguageModule",
    "MalformedDatasetError",
    "TenseData",
    "TenseMetadata",
    "VerbData",
    "default_checklist",
    "enabled_constructs",
    "filter_tenses",
    "format_reflexive_form",
    "get_default_lookup",
    "get_default_store",
    "get_language_module",
    "has_conjugation",
    "is_enabled",
    "is_reflexive_verb",
    "load_bundled_store",
    "lookup_conjugation",
    "reflexive_tense",
]
