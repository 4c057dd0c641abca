"""linkmeta CLI — resolve link metadata from the terminal or run the API.

Usage:
    python cli/main.py --help

Commands:
    resolve    → full pipeline (normalize, fetch, extract or fall back)
    normalize  → URL normalisation only, no network access
    serve      → run the HTTP API under uvicorn
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from linkmeta.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import json

import typer

from linkmeta.observability import configure_logging
from linkmeta.resolver import InvalidURLError, MissingURLError, normalize, resolve

app = typer.Typer(
    name="linkmeta",
    help="Link metadata resolution CLI.",
    no_args_is_help=True,
)


@app.callback()
def main(
    log_level: str = typer.Option("WARNING", "--log-level", help="Log level for pipeline events."),
) -> None:
    """Configure logging before any command runs."""
    configure_logging(level=log_level)


@app.command("resolve")
def resolve_cmd(
    url: str = typer.Argument(..., help="URL or bare domain, as a user would type it."),
    as_json: bool = typer.Option(False, "--json", help="Print the API response body as JSON."),
) -> None:
    """Fetch a page and print its title, description and icon."""
    try:
        result = resolve(url)
    except MissingURLError as exc:
        typer.echo(f"[resolve] {exc}", err=True)
        raise typer.Exit(code=1)
    except InvalidURLError as exc:
        typer.echo(f"[resolve] {exc}: {exc.normalized_url!r}", err=True)
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
        return

    typer.echo(f"[resolve] URL         : {result.normalized_url}")
    typer.echo(f"[resolve] Title       : {result.title}")
    typer.echo(f"[resolve] Description : {result.description or '(none)'}")
    typer.echo(f"[resolve] Icon        : {result.icon or '(none)'}")
    if result.is_fallback:
        typer.echo("[resolve] Page unavailable; metadata derived from the hostname.")


@app.command("normalize")
def normalize_cmd(
    url: str = typer.Argument(..., help="Raw URL input."),
) -> None:
    """Print the normalised form of URL without fetching it."""
    try:
        typer.echo(normalize(url))
    except InvalidURLError as exc:
        typer.echo(f"[normalize] {exc}: {exc.normalized_url!r}", err=True)
        raise typer.Exit(code=1)


@app.command("serve")
def serve(
    host: str = typer.Option("127.0.0.1", help="Interface to bind."),
    port: int = typer.Option(8000, help="Port to listen on."),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes."),
) -> None:
    """Run the metadata HTTP API."""
    import uvicorn

    uvicorn.run("linkmeta.api.app:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    app()
