"""Command-line interface for Shoplist."""

from __future__ import annotations

import json
from typing import Any, Optional

import typer

from shoplist.config import get_settings
from shoplist.db import CatalogStore, Database, ListStore
from shoplist.errors import NotFoundError
from shoplist.logging_utils import configure_logging
from shoplist.summary import budget_delta

app = typer.Typer(help="Shoplist household shopping-list commands.")


def _open_database() -> Database:
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format, [settings.api_token or ""])
    return Database.from_settings(settings).open()


def _echo_json(payload: Any, pretty: bool) -> None:
    typer.echo(json.dumps(payload, indent=2 if pretty else None, sort_keys=pretty))


@app.command("init-db")
def init_db() -> None:
    """Create the database schema at the configured path."""

    database = _open_database()
    database.close()
    typer.echo(f"Database ready at {database.path}")


@app.command("lists")
def lists(
    pretty: bool = typer.Option(False, "--pretty", help="Pretty-print output JSON."),
) -> None:
    """Print all shopping lists, most recent week first."""

    with _open_database() as database:
        rows = ListStore(database).list()
    _echo_json([row.model_dump(mode="json") for row in rows], pretty)


@app.command("summary")
def summary(
    list_id: int = typer.Argument(..., help="Shopping list ID."),
    pretty: bool = typer.Option(True, "--pretty/--no-pretty", help="Pretty-print output JSON."),
) -> None:
    """Print the totals and completion of one shopping list."""

    with _open_database() as database:
        try:
            result = ListStore(database).summary(list_id)
        except NotFoundError as exc:
            typer.secho(exc.detail, fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1) from exc

    payload = result.model_dump(mode="json")
    payload["budget_remaining"] = budget_delta(result)
    _echo_json(payload, pretty)


@app.command("catalog")
def catalog(
    category: Optional[str] = typer.Option(None, "--category", help="Only show this category."),
    pretty: bool = typer.Option(False, "--pretty", help="Pretty-print output JSON."),
) -> None:
    """Print the catalog, most used items first."""

    settings = get_settings()
    with _open_database() as database:
        store = CatalogStore(
            database,
            default_unit=settings.default_unit,
            default_category=settings.default_category,
        )
        rows = store.list(category=category)
    _echo_json([row.model_dump(mode="json") for row in rows], pretty)


@app.command("serve")
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address."),
    port: Optional[int] = typer.Option(None, "--port", help="Bind port."),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes."),
) -> None:
    """Run the HTTP API with uvicorn."""

    from shoplist.server.run import serve as run_server

    run_server(host=host, port=port, reload=reload or None)


def main(argv: Optional[list[str]] = None) -> None:
    """Entry point for `python -m shoplist`."""
    app(prog_name="shoplist", args=argv)


if __name__ == "__main__":
    main()
