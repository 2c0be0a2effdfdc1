from __future__ import annotations

import asyncio
import random
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from mockbanker.config import get_settings
from mockbanker.descriptors import (
    DomainDescriptor,
    all_descriptors,
    descriptor_for_tag,
    resolve_domain,
)
from mockbanker.domain.models import GenerationOptions
from mockbanker.history import ActivityHistoryLog
from mockbanker.infrastructure.clipboard import copy_to_clipboard, save_export
from mockbanker.infrastructure.kv_store import get_store
from mockbanker.install import InstallOutcome, InstallPrompt
from mockbanker.pipeline import GenerationPipeline
from mockbanker.reporter import print_history, print_options, print_rows, print_verdict
from mockbanker.selector import SearchableSelector
from mockbanker.tab import CopyAll, Generate, SelectOption, SetCount, SetOptions, Tab
from mockbanker.theme import ThemePreference
from mockbanker.utils.logging import configure_logging
from mockbanker.validator import ValidationDispatcher

app = typer.Typer(help="MockBanker: generate and validate synthetic financial identifiers.")

FORMATS = ("table", "csv", "json", "sql")


def _history_log() -> ActivityHistoryLog:
    return ActivityHistoryLog(get_store(), limit=get_settings().history_limit)


def _resolve(domain: str) -> DomainDescriptor:
    try:
        return resolve_domain(domain)
    except ValueError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=2)


@app.callback()
def _configure() -> None:
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"home={settings.home_dir} | history_limit={settings.history_limit} "
        f"count={settings.default_count} max={settings.max_count} seed={settings.seed} "
        f"theme={ThemePreference(get_store()).current}"
    )


@app.command()
def domains() -> None:
    """
    List identifier domains.
    """
    for descriptor in all_descriptors():
        typer.echo(f"{descriptor.key:<16} {descriptor.category:<18} validate as '{descriptor.validator_tag}'")


@app.command()
def options(
    domain: str = typer.Argument(..., help="Domain key (see `mockbanker domains`)."),
    query: str = typer.Option("", "--query", "-q", help="Filter by code or name."),
) -> None:
    """
    List the countries or brands a domain can generate for.
    """
    descriptor = _resolve(domain)
    selector = SearchableSelector(descriptor.registry().list_options(), selected=descriptor.default_selector)
    selector.input(query)
    print_options(descriptor, selector.results)


@app.command()
def generate(
    domain: str = typer.Argument(..., help="Domain key (see `mockbanker domains`)."),
    selector: Optional[str] = typer.Option(
        None,
        "--country",
        "--brand",
        "-c",
        help="Country code or card brand; 'random' where the domain allows it.",
    ),
    count: Optional[int] = typer.Option(None, "--count", "-n", help="Values to generate (1-100)."),
    gender: Optional[str] = typer.Option(None, "--gender", help="male or female (personal IDs)."),
    year: Optional[int] = typer.Option(None, "--year", help="Birth year (personal IDs)."),
    holder_type: Optional[str] = typer.Option(
        None, "--holder-type", help="individual or company (tax IDs)."
    ),
    spaces: bool = typer.Option(True, "--spaces/--no-spaces", help="Group IBANs in blocks of four."),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for reproducible output."),
    fmt: str = typer.Option("table", "--format", "-f", help="table, csv, json or sql."),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Directory to save the export artifact into."
    ),
    copy: bool = typer.Option(False, "--copy", help="Copy all values to the clipboard."),
) -> None:
    """
    Generate a batch of identifiers and record it in the activity history.
    """
    settings = get_settings()
    descriptor = _resolve(domain)
    if fmt not in FORMATS:
        typer.echo(f"Unknown format '{fmt}'. Available: {', '.join(FORMATS)}", err=True)
        raise typer.Exit(code=2)

    try:
        generation_options = GenerationOptions(
            gender=gender, year=year, holder_type=holder_type, spaces=spaces
        )
    except ValueError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=2)

    rng = random.Random(seed if seed is not None else settings.seed)
    console = Console()
    tab = Tab(
        descriptor,
        GenerationPipeline(history=_history_log(), rng=rng),
        copy=lambda text: copy_to_clipboard(text, Console(stderr=True)),
        count=settings.default_count,
    )
    if selector is not None:
        tab.dispatch(SelectOption(selector))
    requested = count if count is not None else settings.default_count
    tab.dispatch(SetCount(min(requested, settings.max_count)))
    tab.dispatch(SetOptions(generation_options))
    state = tab.dispatch(Generate())

    if fmt == "table":
        print_rows(descriptor, state.rows, spaces=spaces, requested=state.count, console=console)
    else:
        typer.echo(tab.export(fmt).content, nl=False)  # type: ignore[arg-type]

    if output is not None:
        saved = save_export(tab.export("csv" if fmt == "table" else fmt), output)  # type: ignore[arg-type]
        if saved is not None:
            typer.echo(f"Saved {saved}", err=True)
    if copy:
        tab.dispatch(CopyAll())


@app.command()
def validate(
    domain: str = typer.Argument(..., help="Validator tag (iban, id, bank, card, ...) or domain key."),
    value: str = typer.Argument(..., help="Value to check."),
    country: Optional[str] = typer.Option(None, "--country", "-c", help="Country for country-scoped domains."),
) -> None:
    """
    Validate a single value. Exits with code 1 when it is invalid.
    """
    tag = domain
    if descriptor_for_tag(domain) is None:
        try:
            tag = resolve_domain(domain).validator_tag
        except ValueError:
            tag = domain

    verdict = ValidationDispatcher().validate(tag, value, country)
    if verdict is None:
        typer.echo("Nothing to validate.", err=True)
        raise typer.Exit(code=2)
    print_verdict(verdict)
    if not verdict.valid:
        raise typer.Exit(code=1)


@app.command()
def history(
    clear: bool = typer.Option(False, "--clear", help="Delete the activity history."),
) -> None:
    """
    Show (or clear) the activity history.
    """
    log = _history_log()
    if clear:
        log.clear()
        typer.echo("History cleared.")
        return
    print_history(log.load())


@app.command()
def theme(
    toggle: bool = typer.Option(False, "--toggle", help="Switch between light and dark."),
) -> None:
    """
    Show or toggle the theme preference.
    """
    preference = ThemePreference(get_store())
    if toggle:
        typer.echo(f"Theme set to {preference.toggle()}.")
        return
    source = "stored" if preference.stored else "ambient"
    typer.echo(f"{preference.current} ({source})")


def _confirm(prompt: InstallPrompt, home: Path, assume_yes: bool) -> None:
    # Closed stdin aborts the confirm; that counts as a dismissal.
    try:
        accepted = assume_yes or typer.confirm(f"Create MockBanker state directory at {home}?", default=True)
    except typer.Abort:
        accepted = False
    prompt.resolve(accepted)


async def _ask(prompt: InstallPrompt, home: Path, assume_yes: bool) -> Optional[InstallOutcome]:
    asyncio.get_running_loop().call_soon(_confirm, prompt, home, assume_yes)
    return await prompt.prompt()


@app.command()
def init(
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation."),
) -> None:
    """
    Set up the state directory that holds history and preferences.
    """
    home = get_settings().home_dir.expanduser()
    prompt = InstallPrompt()
    if home.exists():
        typer.echo(f"Already initialised: {home}")
        return
    prompt.make_available()
    outcome = asyncio.run(_ask(prompt, home, yes))
    if outcome is InstallOutcome.ACCEPTED:
        home.mkdir(parents=True, exist_ok=True)
        typer.echo(f"Initialised {home}")
    else:
        typer.echo("Skipped.")


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
