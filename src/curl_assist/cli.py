"""CLI entry point for curl-assist."""

import json
import logging
import sys
from pathlib import Path

import click

from curl_assist.config import get_settings
from curl_assist.editor.completer import doc_tooltip, get_completions
from curl_assist.editor.highlight import highlight as highlight_text
from curl_assist.editor.validator import validate_curl
from curl_assist.env import EnvironmentStore, load_environment
from curl_assist.exceptions import CurlAssistError
from curl_assist.parser.curl import curl_to_request
from curl_assist.reference.loader import get_flag_doc

COMMAND_ARG = click.argument("source", default="-", type=click.File("r", encoding="utf-8"))
ENV_OPTION = click.option(
    "--env", "env_path", default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Environment file (Postman export JSON or YAML) for {{variable}} lookups.",
)


def _load_store(env_path: Path | None) -> EnvironmentStore | None:
    """Build a store from --env, falling back to the configured environment file."""
    env_path = env_path or get_settings().environment_file
    if env_path is None:
        return None
    try:
        return EnvironmentStore([load_environment(env_path)])
    except CurlAssistError as exc:
        raise click.ClickException(str(exc)) from exc


def _deferred_store(env_path: Path | None) -> EnvironmentStore | None:
    """Like _load_store, but the file is read on first lookup and a bad file only drops variables."""
    env_path = env_path or get_settings().environment_file
    if env_path is None:
        return None
    return EnvironmentStore.from_file(env_path)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """curl-assist — parse, lint and complete curl command text."""
    level = logging.DEBUG if verbose else get_settings().log_level.upper()
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)


@main.command()
@COMMAND_ARG
@ENV_OPTION
def parse(source, env_path: Path | None):
    """Print the structured request for a curl command as JSON."""
    store = _load_store(env_path)
    request = curl_to_request(source.read(), store=store)
    click.echo(request.model_dump_json(indent=2, by_alias=True))


@main.command()
@COMMAND_ARG
@click.option("--json", "as_json", is_flag=True, help="Print diagnostics as JSON.")
def lint(source, as_json: bool):
    """Report problems in a curl command. Exits 1 if any error is found."""
    diagnostics = validate_curl(source.read(), threshold=get_settings().similarity_threshold)

    if as_json:
        click.echo(json.dumps([d.model_dump() for d in diagnostics], indent=2))
    else:
        for d in diagnostics:
            click.echo(f"{d.row + 1}:{d.column + 1}: {d.kind}: {d.text}")
        if not diagnostics:
            click.echo("No problems found.")

    if any(d.kind == "error" for d in diagnostics):
        sys.exit(1)


@main.command()
@COMMAND_ARG
@click.option("--row", required=True, type=int, help="Zero-based cursor row.")
@click.option("--column", required=True, type=int, help="Zero-based cursor column.")
@click.option("--prefix", default=None, help="Fragment being completed (default: taken from the text).")
@ENV_OPTION
def complete(source, row: int, column: int, prefix: str | None, env_path: Path | None):
    """List completions for the cursor position in a curl command."""
    store = _deferred_store(env_path)
    suggestions = get_completions(source.read(), row, column, prefix=prefix, store=store)
    for s in suggestions:
        tooltip = doc_tooltip(s)
        line = f"{s.score:>5}  {s.caption:<50} {s.kind}"
        if tooltip:
            line += f"  - {tooltip['description']}"
        click.echo(line)


@main.command()
@click.argument("flag")
def doc(flag: str):
    """Show documentation for a curl flag."""
    entry = get_flag_doc(flag)
    if entry is None:
        click.echo(f"No documentation for {flag}.")
        return

    spellings = ", ".join(f for f in (entry.short, entry.long) if f)
    click.echo(f"{entry.name} ({spellings})")
    click.echo(f"  {entry.description}")
    for label, text in (("Example", entry.example), ("Usage", entry.usage), ("Tip", entry.tip)):
        if text:
            click.echo(f"  {label}: {text}")


@main.command()
@COMMAND_ARG
def highlight(source):
    """Print the highlighting classes of a curl command, one span per line."""
    for span in highlight_text(source.read()):
        if span.kind != "text":
            click.echo(f"{span.row}:{span.start}-{span.end} {span.kind:<12} {span.value}")
