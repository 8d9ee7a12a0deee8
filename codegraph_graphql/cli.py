"""
codegraph-graphql CLI

Extract GraphQL documents from TypeScript / JavaScript sources and check
them against a schema.
"""

from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from codegraph_graphql.adapter import GraphQLLanguageServiceAdapter
from codegraph_graphql.config import OverlaySettings
from codegraph_graphql.errors import GraphQLOverlayError
from codegraph_graphql.manifest import extract_documents
from codegraph_graphql.models import DiagnosticCategory, HostDiagnostic
from codegraph_graphql.observability import configure_logging
from codegraph_graphql.parsing import TreeSitterSourceHelper
from codegraph_graphql.schema_loader import load_schema

app = typer.Typer(
    name="codegraph-graphql",
    help="GraphQL documents embedded in template strings",
    add_completion=False,
)

console = Console()

CATEGORY_STYLES = {
    DiagnosticCategory.ERROR: "[red]error[/red]",
    DiagnosticCategory.WARNING: "[yellow]warning[/yellow]",
    DiagnosticCategory.SUGGESTION: "[cyan]suggestion[/cyan]",
    DiagnosticCategory.MESSAGE: "[dim]message[/dim]",
}


def _settings(tag: str | None, schema: Path | None, verbose: bool) -> OverlaySettings:
    overrides: dict = {}
    if tag is not None:
        overrides["tag"] = tag
    if schema is not None:
        overrides["schema_path"] = schema
    if verbose:
        overrides["log_level"] = "DEBUG"

    try:
        settings = OverlaySettings(**overrides)
    except ValidationError as e:
        console.print(f"[bold red]Invalid settings:[/bold red] {e.errors()[0]['msg']}")
        raise typer.Exit(code=2) from e

    configure_logging(level=settings.log_level, json_format=settings.json_logs)
    return settings


@app.command()
def extract(
    files: list[Path] = typer.Argument(..., help="Source files to scan"),
    out_file: Path = typer.Option(Path("manifest.json"), "--out-file", "-o", help="Output file name of manifest"),
    tag: str | None = typer.Option(None, "--tag", "-t", help="Template tag name(s), comma-separated"),
    verbose: bool = typer.Option(False, "--verbose", help="Show debug messages"),
):
    """
    Extract GraphQL documents into a manifest file.
    """
    settings = _settings(tag, None, verbose)
    helper = TreeSitterSourceHelper()

    errors, manifest = extract_documents(helper, [str(f) for f in files], settings.tag_condition)

    if errors:
        console.print("[magenta]Found some errors extracting operations.[/magenta]\n")
        for error in errors:
            console.print(
                f"  [bold]{error.file_name}:{error.start.line + 1}:{error.start.character + 1}[/bold] {error.message}"
            )

    out_file.write_text(manifest.model_dump_json(indent=2), encoding="utf-8")
    console.print(f"Write manifest file to '[green]{out_file}[/green]'.")


@app.command()
def check(
    files: list[Path] = typer.Argument(..., help="Source files to check"),
    schema: Path | None = typer.Option(None, "--schema", "-s", help="SDL or introspection JSON schema file"),
    tag: str | None = typer.Option(None, "--tag", "-t", help="Template tag name(s), comma-separated"),
    verbose: bool = typer.Option(False, "--verbose", help="Show debug messages"),
):
    """
    Report GraphQL diagnostics of embedded documents.

    Exits with code 1 if any error is found.
    """
    settings = _settings(tag, schema, verbose)
    if settings.schema_path is None:
        console.print("[bold red]No schema given.[/bold red] Use --schema or CODEGRAPH_GRAPHQL_SCHEMA_PATH.")
        raise typer.Exit(code=2)

    try:
        loaded = load_schema(settings.schema_path)
    except GraphQLOverlayError as e:
        console.print(f"[bold red]Schema load failed:[/bold red] {e.message}")
        raise typer.Exit(code=2) from e

    helper = TreeSitterSourceHelper()
    adapter = GraphQLLanguageServiceAdapter(helper, schema=loaded, tag=settings.tag_condition)

    rows: list[tuple[HostDiagnostic, str]] = []
    for file in files:
        file_name = str(file)
        for diagnostic in adapter.get_semantic_diagnostics(lambda _: [], file_name) or []:
            location = helper.get_line_and_char(file_name, diagnostic.start)
            rows.append((diagnostic, f"{file_name}:{location.line + 1}:{location.character + 1}"))

    if not rows:
        console.print("[green]No GraphQL errors found.[/green]")
        return

    _display_diagnostics(rows)

    error_count = sum(1 for diagnostic, _ in rows if diagnostic.category is DiagnosticCategory.ERROR)
    if error_count:
        console.print(f"\n[bold red]Found {error_count} error(s).[/bold red]")
        raise typer.Exit(code=1)


def _display_diagnostics(rows: list[tuple[HostDiagnostic, str]]) -> None:
    table = Table(title="GraphQL Diagnostics", show_header=True, header_style="bold magenta")
    table.add_column("Location", style="cyan")
    table.add_column("Severity")
    table.add_column("Code", justify="right")
    table.add_column("Message")

    for diagnostic, location in rows:
        table.add_row(
            location,
            CATEGORY_STYLES.get(diagnostic.category, str(diagnostic.category)),
            str(diagnostic.code),
            diagnostic.message_text,
        )

    console.print(table)


def main():
    app()


if __name__ == "__main__":
    main()
