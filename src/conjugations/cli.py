"""Command line for looking up and filtering verb conjugation tables."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Annotated

import httpx
import typer
from dotenv import load_dotenv

from conjugations.constructs import (
    default_checklist,
    enabled_constructs,
    filter_tenses,
    get_language_module,
)
from conjugations.jehle import build_dataset, download_jehle_csv, parse_jehle_csv, write_dataset
from conjugations.lookup import ConjugationLookup, resolve_data_path
from conjugations.models import TenseData
from conjugations.reflexive import reflexive_tense
from conjugations.store import ConjugationStore, MalformedDatasetError

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="conjugations",
    no_args_is_help=True,
)


@app.callback()
def _callback(
    ctx: typer.Context,
    data: Annotated[
        Path | None,
        typer.Option("--data", help="Conjugation dataset (JSON). Overrides CONJUGATIONS_DATA."),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logging."),
    ] = False,
) -> None:
    """Look up Spanish verb conjugations and filter them by construct."""
    # Load .env for CONJUGATIONS_DATA
    load_dotenv()
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    ctx.obj = {"data": data}


def _load_lookup(ctx: typer.Context) -> ConjugationLookup:
    """Build the lookup service, exiting on a malformed dataset."""
    path = resolve_data_path(ctx.obj.get("data") if ctx.obj else None)
    try:
        store = ConjugationStore.from_paths([path])
    except (MalformedDatasetError, OSError) as e:
        typer.echo(f"Error: could not load conjugation data: {e}", err=True)
        raise typer.Exit(1) from e
    return ConjugationLookup(store)


def _build_checklist(
    tense_ids: list[str],
    *,
    only: list[str] | None,
    disable: list[str] | None,
    use_default: bool,
) -> dict[str, bool] | None:
    """Translate show options into a construct checklist.

    Returns:
        None when no option narrows the tenses.

    Raises:
        typer.BadParameter: If an option names an unknown tense.
    """
    for tense_id in [*(only or []), *(disable or [])]:
        if tense_id not in tense_ids:
            supported = ", ".join(tense_ids)
            raise typer.BadParameter(f"Unknown tense: {tense_id}. Supported: {supported}")

    if not (only or disable or use_default):
        return None

    checklist: dict[str, bool] = {}
    if use_default:
        checklist.update(default_checklist())
    if only:
        checklist.update({tense_id: tense_id in only for tense_id in tense_ids})
    for tense_id in disable or []:
        checklist[tense_id] = False
    return checklist


def _format_tense(tense: TenseData) -> str:
    """Render one tense table as aligned text."""
    width = max(len(c.person) for c in tense.conjugations)
    lines = [f"{tense.tense_name}: {tense.description}"]
    for conjugation in tense.conjugations:
        line = f"  {conjugation.person:<{width}}  {conjugation.form}"
        if conjugation.mini_translation:
            line += f"  ({conjugation.mini_translation})"
        lines.append(line)
    return "\n".join(lines)


@app.command()
def show(
    ctx: typer.Context,
    infinitive: Annotated[str, typer.Argument(help="Verb infinitive (exact match).")],
    language: Annotated[
        str | None,
        typer.Option("--language", "-l", help="Dataset language. Defaults to the primary one."),
    ] = None,
    only: Annotated[
        list[str] | None,
        typer.Option("--only", "-t", help="Show only this tense (repeatable)."),
    ] = None,
    disable: Annotated[
        list[str] | None,
        typer.Option("--disable", "-x", help="Hide this tense (repeatable)."),
    ] = None,
    use_default: Annotated[
        bool,
        typer.Option("--default-checklist", help="Start from the beginner checklist."),
    ] = False,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the record as JSON."),
    ] = False,
) -> None:
    """Show the conjugation tables of a verb."""
    lookup = _load_lookup(ctx)
    verb = lookup.lookup_conjugation(infinitive, language)
    if verb is None:
        typer.echo(f"No conjugation found for '{infinitive}'.", err=True)
        raise typer.Exit(1)

    checklist = _build_checklist(
        lookup.store.tense_ids(verb.language),
        only=only,
        disable=disable,
        use_default=use_default,
    )
    tenses = filter_tenses(verb.tenses, checklist)

    if as_json:
        record = verb.to_dict()
        enabled = {t.tense_id for t in tenses}
        record["tenses"] = [t for t in record["tenses"] if t["tense_id"] in enabled]
        typer.echo(json.dumps(record, ensure_ascii=False, indent=2))
        return

    typer.echo(f"{verb.infinitive} ({verb.language})")
    for tense in tenses:
        typer.echo("")
        typer.echo(_format_tense(reflexive_tense(tense, verb.infinitive)))


@app.command()
def check(
    ctx: typer.Context,
    infinitive: Annotated[str, typer.Argument(help="Verb infinitive (exact match).")],
    language: Annotated[
        str | None,
        typer.Option("--language", "-l", help="Dataset language. Defaults to the primary one."),
    ] = None,
) -> None:
    """Exit 0 if a verb is in the dataset, 1 otherwise."""
    lookup = _load_lookup(ctx)
    if lookup.has_conjugation(infinitive, language):
        typer.echo(f"{infinitive}: found")
        return
    typer.echo(f"{infinitive}: not found")
    raise typer.Exit(1)


@app.command()
def constructs(
    language: Annotated[
        str,
        typer.Option("--language", "-l", help="Language whose constructs to list."),
    ] = "spanish",
) -> None:
    """List grammatical constructs and whether beginners start with them."""
    module = get_language_module(language)
    if module is None:
        raise typer.BadParameter(f"Unsupported language: {language}")

    enabled = set(enabled_constructs(default_checklist(module), module))
    for category in module.categories:
        typer.echo(f"{category.capitalize()}s:")
        for construct in module.constructs:
            if construct.category != category:
                continue
            mark = "x" if construct.id in enabled else " "
            typer.echo(f"  [{mark}] {construct.id:<22} {construct.description}")


@app.command("build-data")
def build_data(
    output: Annotated[
        Path,
        typer.Option("--output", "-o", help="Output dataset path."),
    ] = Path("spanish-conjugations.json"),
    verbs: Annotated[
        str | None,
        typer.Option("--verbs", help="Comma-separated infinitives to include (default: all)."),
    ] = None,
    cache_dir: Annotated[
        Path | None,
        typer.Option("--cache-dir", help="Directory for the downloaded Jehle database."),
    ] = None,
) -> None:
    """Build a dataset from the Fred Jehle Spanish verb database."""
    try:
        csv_path = download_jehle_csv(cache_dir)
    except httpx.HTTPError as e:
        typer.echo(f"Error: download failed: {e}", err=True)
        raise typer.Exit(1) from e

    parsed = parse_jehle_csv(csv_path)
    infinitives = [v.strip() for v in verbs.split(",") if v.strip()] if verbs else None
    dataset = build_dataset(parsed, infinitives)

    # Fail here rather than ship a dataset the store would reject
    try:
        ConjugationStore.from_dicts([dataset])
    except MalformedDatasetError as e:
        typer.echo(f"Error: generated dataset is invalid: {e}", err=True)
        raise typer.Exit(1) from e

    write_dataset(dataset, output)
    typer.echo(f"Generated: {output} ({dataset['verb_count']} verbs)")


def main() -> None:  # pragma: no cover
    """Entry point for the CLI."""
    # Only show warnings unless --verbose
    logging.basicConfig(
        level=logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )
    app()
