"""Reflexive pronoun placement for Spanish -se verbs."""

from __future__ import annotations

from conjugations.models import ConjugationForm, TenseData

REFLEXIVE_PRONOUNS = {
    "yo": "me",
    "tú": "te",
    "él/ella/usted": "se",
    "usted": "se",
    "nosotros/as": "nos",
    "nosotros": "nos",
    "vosotros/as": "os",
    "vosotros": "os",
    "ellos/ellas/ustedes": "se",
    "ustedes": "se",
}

PRONOUN_SUFFIXES = ("me", "te", "se", "nos", "os")


def is_reflexive_verb(infinitive: str) -> bool:
    """Check whether an infinitive is reflexive (levantarse, irse)."""
    return len(infinitive) > 2 and infinitive.endswith("se")


def base_infinitive(infinitive: str) -> str:
    """Strip the -se ending from a reflexive infinitive."""
    return infinitive[:-2] if is_reflexive_verb(infinitive) else infinitive


def reflexive_pronoun(person: str) -> str:
    """Return the reflexive pronoun for a person label, defaulting to "se"."""
    return REFLEXIVE_PRONOUNS.get(person.strip().lower(), "se")


def format_reflexive_form(form: str, person: str, infinitive: str, tense_id: str) -> str:
    """Place the reflexive pronoun in a conjugated form.

    The pronoun precedes the verb in simple tenses ("me levanto") and the
    auxiliary in compound ones ("me he levantado"). In the affirmative
    imperative it is attached to the end ("levantate"), unless the form
    already ends in a pronoun. No written accent is added.

    Args:
        form: Conjugated form as stored, e.g. "levanto" or "he levantado".
        person: Person label of the form.
        infinitive: Infinitive of the verb. Non-reflexive verbs are returned
            unchanged.
        tense_id: Tense of the form.

    Returns:
        The form with its pronoun placed.
    """
    if not is_reflexive_verb(infinitive):
        return form

    pronoun = reflexive_pronoun(person)
    if tense_id == "imperative":
        if form.endswith(PRONOUN_SUFFIXES):
            return form
        return f"{form}{pronoun}"
    return f"{pronoun} {form}"


def reflexive_tense(tense: TenseData, infinitive: str) -> TenseData:
    """Return a copy of a tense table with reflexive pronouns placed."""
    if not is_reflexive_verb(infinitive):
        return tense
    conjugations = tuple(
        ConjugationForm(
            person=c.person,
            form=format_reflexive_form(c.form, c.person, infinitive, tense.tense_id),
            mini_translation=c.mini_translation,
        )
        for c in tense.conjugations
    )
    return TenseData(
        tense_id=tense.tense_id,
        tense_name=tense.tense_name,
        description=tense.description,
        conjugations=conjugations,
    )
