"""smart-table Command Line Interface.

Runs one table state against a JSON file of records and prints the
resulting page, mostly for checking criteria before wiring them into a UI.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any

import typer
from pydantic import ValidationError

from smart_table import __version__
from smart_table.contracts.enums import FilterOperator, FilterType, SortDirection, TableEvent
from smart_table.contracts.state import FilterClause, TableState, default_table_state
from smart_table.core.config import TableSettings, load_settings
from smart_table.core.logging import configure_logging
from smart_table.engine.table import smart_table

app = typer.Typer(
    name="smart-table",
    help="smart-table: sort, filter, search and paginate JSON records.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"smart-table version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """smart-table command line."""


def parse_filter(expression: str) -> tuple[str, FilterClause]:
    """Parse ``PATH:OPERATOR:VALUE[:TYPE]`` into a path and a clause.

    The value may itself contain colons when no type is given last.
    ``anyOf`` values are comma-separated.

    Raises:
        typer.BadParameter: If the expression has fewer than three parts or an unknown operator/type
    """
    parts = expression.split(":")
    if len(parts) < 3:
        raise typer.BadParameter(f"expected PATH:OPERATOR:VALUE[:TYPE], got {expression!r}")
    path, operator, *rest = parts
    type_: str | None = None
    if len(rest) > 1 and rest[-1] in {t.value for t in FilterType}:
        type_ = rest.pop()
    raw_value = ":".join(rest)

    try:
        FilterOperator(operator)
    except ValueError:
        raise typer.BadParameter(f"unknown operator {operator!r}") from None

    value: Any = raw_value.split(",") if operator == FilterOperator.ANY_OF else raw_value
    clause: FilterClause = {"value": value, "operator": operator}
    if type_ is not None:
        clause["type"] = type_
    return path, clause


def _build_state(
    sort: str | None,
    direction: SortDirection,
    filters: list[str],
    search: str | None,
    scope: list[str],
    flags: str | None,
    page: int,
    size: int | None,
) -> TableState:
    state = default_table_state()
    if sort:
        state["sort"] = {"pointer": sort, "direction": direction.value}
    for expression in filters:
        path, clause = parse_filter(expression)
        state["filter"].setdefault(path, []).append(clause)
    if search:
        state["search"] = {"value": search, "scope": scope}
        if flags:
            state["search"]["flags"] = flags
    state["slice"] = {"page": page, "size": size}
    return state


async def _view(records: list[Any], state: TableState, settings: TableSettings) -> dict[str, Any]:
    table = smart_table(data=records, table_state=state, settings=settings)
    captured: dict[str, Any] = {}
    table.on(TableEvent.SUMMARY_CHANGED, lambda summary: captured.update(summary=summary))
    table.on(TableEvent.DISPLAY_CHANGED, lambda items: captured.update(items=items))
    table.on(TableEvent.EXEC_ERROR, lambda error: captured.update(error=error))

    task = table.exec(processing_delay_ms=0)
    if task is not None:
        await task
    return captured


@app.command()
def view(
    data_file: Path = typer.Argument(..., help="JSON file holding a list of records.", exists=True, dir_okay=False),
    sort: str | None = typer.Option(None, "--sort", help="Dotted path to sort on."),
    direction: SortDirection = typer.Option(SortDirection.ASC, "--direction", "-d", help="Sort direction."),
    filters: list[str] = typer.Option(
        [], "--filter", "-f", help="Filter clause PATH:OPERATOR:VALUE[:TYPE]; repeat to AND clauses."
    ),
    search: str | None = typer.Option(None, "--search", help="Regular expression searched in --scope fields."),
    scope: list[str] = typer.Option([], "--scope", help="Field searched by --search; repeatable."),
    search_flags: str | None = typer.Option(None, "--search-flags", help="Regular expression flags, e.g. \"i\"."),
    page: int = typer.Option(1, "--page", "-p", min=1, help="1-based page number."),
    size: int | None = typer.Option(None, "--size", "-n", min=1, help="Page size (default: everything)."),
    settings_file: Path | None = typer.Option(None, "--settings", "-s", help="Settings YAML file."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
    json_logs: bool = typer.Option(False, "--json-logs", help="Output structured JSON logs."),
) -> None:
    """Print one page of DATA_FILE as JSON, with its summary."""
    try:
        settings = load_settings(settings_file) if settings_file is not None else TableSettings()
    except FileNotFoundError:
        typer.echo(f"Error: Settings file not found: {settings_file}", err=True)
        raise typer.Exit(1) from None
    except ValidationError as e:
        typer.echo("Configuration errors:", err=True)
        for error in e.errors():
            loc = ".".join(str(x) for x in error["loc"])
            typer.echo(f"  - {loc}: {error['msg']}", err=True)
        raise typer.Exit(1) from None

    configure_logging(
        json_output=json_logs or settings.json_logs,
        level="DEBUG" if verbose else settings.log_level,
    )

    try:
        records = json.loads(data_file.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        typer.echo(f"Error: {data_file} is not valid JSON: {e}", err=True)
        raise typer.Exit(1) from None
    if not isinstance(records, list):
        typer.echo(f"Error: {data_file} must hold a JSON list of records", err=True)
        raise typer.Exit(1)

    state = _build_state(
        sort, direction, filters, search, scope, search_flags, page, size or settings.default_page_size
    )
    result = asyncio.run(_view(records, state, settings))

    if "error" in result:
        typer.echo(f"Error: {result['error']}", err=True)
        raise typer.Exit(1)
    output = {
        "summary": result["summary"],
        "items": [{"index": item.index, "value": item.value} for item in result["items"]],
    }
    typer.echo(json.dumps(output, indent=2, default=str))


if __name__ == "__main__":
    app()
