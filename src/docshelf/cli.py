"""Command line interface for docshelf."""

from __future__ import annotations

import difflib
import logging
from pathlib import Path
from typing import Any, Iterable, NoReturn, Sequence

import click
import yaml
from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

from docshelf.config import ConfigError, ConfigManager, DocshelfConfig, resolve_with_precedence
from docshelf.discovery import DocumentDiscoveryService, DocumentRecord
from docshelf.library import (
    DocumentLibrary,
    LibraryError,
    category_names,
    count_by_extension,
    file_icon,
    filter_by_category,
    filter_by_name,
    format_file_size,
    format_time_ago,
)
from docshelf.state import FavoritesRepository, StateError
from docshelf.viewers import DocumentPreview, ViewerError, render_document

console = Console()

_root_option = click.option(
    "--root",
    "roots",
    multiple=True,
    type=click.Path(file_okay=False),
    help="Scan DIR instead of the configured directories (repeatable).",
)


def _handle_cli_error(
    message: str,
    *,
    code: str,
    json_output: bool,
    original: Exception | None = None,
) -> NoReturn:
    """Emit a standardized error and terminate the command.

    Args:
        message: Human-readable error message.
        code: Machine-readable error identifier.
        json_output: Indicates whether JSON mode is active.
        original: Original exception for chaining when not using JSON.

    Raises:
        SystemExit: When emitting JSON output to terminate the command.
        click.ClickException: For non-JSON flows to surface the error.
    """
    if json_output:
        console.print_json(data={"error": {"code": code, "message": message}})
        raise SystemExit(1)
    raise click.ClickException(message) from original


def _emit_message(message: Any, *, quiet: bool) -> None:
    if quiet:
        return
    console.print(message)


def _configure_logging(config: DocshelfConfig, verbose: bool) -> None:
    level_name = "DEBUG" if verbose else config.logging.level.upper()
    level = getattr(logging, level_name, logging.WARNING)
    logging.basicConfig(level=level, format="[%(levelname)s] %(name)s: %(message)s")
    logging.getLogger("docshelf").setLevel(level)


def _load_config(
    ctx: click.Context, roots: Sequence[str] = (), *, json_output: bool = False
) -> DocshelfConfig:
    """Load configuration, applying ``--root`` as CLI overrides, and configure logging."""
    overrides: dict[str, Any] = {}
    if roots:
        overrides["discovery.primary_dirs"] = [str(Path(root).expanduser()) for root in roots]
        overrides["discovery.broad_root"] = None
    try:
        config = ConfigManager().load(cli_overrides=overrides or None)
    except ConfigError as exc:
        _handle_cli_error(str(exc), code="config_error", json_output=json_output, original=exc)
    verbose = bool((ctx.obj or {}).get("verbose"))
    _configure_logging(config, verbose)
    return config


def _build_library(config: DocshelfConfig) -> DocumentLibrary:
    return DocumentLibrary(
        DocumentDiscoveryService.from_config(config.discovery),
        FavoritesRepository(Path(config.library.favorites_path)),
        import_dir=Path(config.library.import_dir),
        recent_limit=config.library.recent_limit,
    )


def _load_library(config: DocshelfConfig) -> DocumentLibrary:
    library = _build_library(config)
    library.load()
    return library


def _record_payload(record: DocumentRecord) -> dict[str, Any]:
    return record.model_dump(mode="json")


def _records_table(records: Iterable[DocumentRecord], title: str) -> Table:
    table = Table(title=title)
    table.add_column("", no_wrap=True)
    table.add_column("Name", overflow="fold")
    table.add_column("Type", no_wrap=True)
    table.add_column("Size", justify="right", no_wrap=True)
    table.add_column("Modified", no_wrap=True)
    table.add_column("Fav", justify="center", no_wrap=True)
    table.add_column("ID", no_wrap=True)
    for record in records:
        table.add_row(
            file_icon(record.extension_tag),
            record.display_name,
            record.extension_tag.upper(),
            format_file_size(record.byte_size),
            format_time_ago(record.last_modified_at),
            "♥" if record.is_favorite else "",
            record.identifier,
        )
    return table


def _emit_records(
    records: Sequence[DocumentRecord],
    *,
    title: str,
    total: int,
    json_output: bool,
    quiet: bool,
) -> None:
    if json_output:
        console.print_json(
            data={
                "counts": {"total": total, "matches": len(records)},
                "results": [_record_payload(record) for record in records],
            }
        )
        return

    if records:
        _emit_message(_records_table(records, title), quiet=quiet)
    else:
        _emit_message("[yellow]No documents found.[/yellow]", quiet=quiet)
    _emit_message(
        f"[green]{title} summary: total={total}, shown={len(records)}.[/green]", quiet=quiet
    )


def _emit_preview(preview: DocumentPreview) -> None:
    console.print(f"[bold]{escape(preview.title)}[/bold] ({preview.kind})", highlight=False)
    for key, value in preview.metadata.items():
        console.print(f"  {key}: {value}", markup=False, highlight=False)

    if preview.text is not None:
        console.print()
        console.print(preview.text, markup=False, highlight=False)

    for sheet in preview.sheets:
        table = Table(title=sheet.name, show_header=False)
        for _ in range(sheet.column_count):
            table.add_column(overflow="fold")
        for row in sheet.display_rows():
            table.add_row(*row)
        console.print(table)
        if sheet.truncated:
            console.print(f"[yellow]{sheet.name}: more rows not shown.[/yellow]")

    if preview.truncated and preview.text is not None:
        console.print("[yellow]Preview truncated.[/yellow]")


def _without_timestamp(lines: list[str]) -> list[str]:
    return [line for line in lines if not line.startswith("# Last updated")]


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="docshelf")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """docshelf finds documents and images on this device and previews them."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


@cli.command()
@_root_option
@click.option(
    "--category",
    type=click.Choice(category_names(), case_sensitive=False),
    help="Only show documents of this category.",
)
@click.option("--name", "name_query", type=str, help="Case-insensitive substring of the file name.")
@click.option("--limit", type=click.IntRange(min=0), help="Maximum number of results to show.")
@click.option("--json", "json_output", is_flag=True, help="Emit results as JSON.")
@click.option("--quiet", is_flag=True, help="Suppress non-error output.")
@click.pass_context
def scan(
    ctx: click.Context,
    roots: tuple[str, ...],
    category: str | None,
    name_query: str | None,
    limit: int | None,
    json_output: bool,
    quiet: bool,
) -> None:
    """Scan the document directories and list what was found."""
    config = _load_config(ctx, roots, json_output=json_output)
    quiet = quiet or config.cli.quiet_default
    library = _load_library(config)

    records = library.records
    if category:
        records = filter_by_category(records, category)
    if name_query:
        records = filter_by_name(records, name_query)
    if limit is not None:
        records = records[:limit]

    _emit_records(
        records,
        title="scan",
        total=len(library.records),
        json_output=json_output,
        quiet=quiet,
    )


@cli.command()
@_root_option
@click.option("--limit", type=click.IntRange(min=0), help="Number of documents to show.")
@click.option("--json", "json_output", is_flag=True, help="Emit results as JSON.")
@click.option("--quiet", is_flag=True, help="Suppress non-error output.")
@click.pass_context
def recent(
    ctx: click.Context,
    roots: tuple[str, ...],
    limit: int | None,
    json_output: bool,
    quiet: bool,
) -> None:
    """Show the most recently modified documents."""
    config = _load_config(ctx, roots, json_output=json_output)
    library = _load_library(config)
    _emit_records(
        library.recent(limit),
        title="recent",
        total=len(library.records),
        json_output=json_output,
        quiet=quiet or config.cli.quiet_default,
    )


@cli.group()
def favorites() -> None:
    """List and toggle favorite documents."""


@favorites.command("list")
@_root_option
@click.option("--json", "json_output", is_flag=True, help="Emit results as JSON.")
@click.pass_context
def favorites_list(ctx: click.Context, roots: tuple[str, ...], json_output: bool) -> None:
    """Show documents marked as favorite."""
    config = _load_config(ctx, roots, json_output=json_output)
    library = _load_library(config)
    _emit_records(
        library.favorites(),
        title="favorites",
        total=len(library.records),
        json_output=json_output,
        quiet=config.cli.quiet_default,
    )


@favorites.command("toggle")
@click.argument("target")
@_root_option
@click.option("--json", "json_output", is_flag=True, help="Emit the updated record as JSON.")
@click.pass_context
def favorites_toggle(
    ctx: click.Context, target: str, roots: tuple[str, ...], json_output: bool
) -> None:
    """Flip favorite status for TARGET, given as an identifier or a file path."""
    config = _load_config(ctx, roots, json_output=json_output)
    library = _load_library(config)

    record = next((item for item in library.records if item.identifier == target), None)
    if record is None:
        record = library.find_by_path(Path(target))
    if record is None:
        _handle_cli_error(
            f"No scanned document matches {target}.", code="not_found", json_output=json_output
        )

    try:
        favorite = library.toggle_favorite(record.identifier)
    except (LibraryError, StateError) as exc:
        _handle_cli_error(str(exc), code="state_error", json_output=json_output, original=exc)

    if json_output:
        console.print_json(data={"record": _record_payload(record)})
        return
    state = "added to" if favorite else "removed from"
    console.print(
        f"[green]{escape(record.display_name)} {state} favorites.[/green]", highlight=False
    )


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--max-chars", type=click.IntRange(min=0), help="Cap on extracted text.")
@click.option("--max-rows", type=click.IntRange(min=0), help="Cap on rows per worksheet.")
@click.option("--json", "json_output", is_flag=True, help="Emit the preview as JSON.")
@click.pass_context
def view(
    ctx: click.Context,
    path: Path,
    max_chars: int | None,
    max_rows: int | None,
    json_output: bool,
) -> None:
    """Render PATH with the viewer for its file type."""
    config = _load_config(ctx, json_output=json_output)
    try:
        preview = render_document(
            path,
            max_chars=config.viewer.max_chars if max_chars is None else max_chars,
            max_rows=config.viewer.max_rows if max_rows is None else max_rows,
        )
    except ViewerError as exc:
        _handle_cli_error(str(exc), code="viewer_error", json_output=json_output, original=exc)

    if json_output:
        console.print_json(data=preview.as_dict())
        return
    _emit_preview(preview)


@cli.command("import")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--json", "json_output", is_flag=True, help="Emit the imported record as JSON.")
@click.pass_context
def import_command(ctx: click.Context, path: Path, json_output: bool) -> None:
    """Copy PATH into the docshelf import directory."""
    config = _load_config(ctx, json_output=json_output)
    library = _build_library(config)
    try:
        record = library.import_file(path)
    except (LibraryError, OSError) as exc:
        _handle_cli_error(str(exc), code="import_error", json_output=json_output, original=exc)

    if json_output:
        console.print_json(data={"record": _record_payload(record)})
        return
    console.print(
        f"[green]Imported {path.name} to {record.absolute_path}.[/green]", highlight=False
    )


@cli.command()
@_root_option
@click.option("--json", "json_output", is_flag=True, help="Emit statistics as JSON.")
@click.pass_context
def stats(ctx: click.Context, roots: tuple[str, ...], json_output: bool) -> None:
    """Summarize the scanned documents."""
    config = _load_config(ctx, roots, json_output=json_output)
    library = _load_library(config)
    records = library.records
    payload = {
        "total": len(records),
        "total_bytes": library.total_bytes(),
        "favorites": len(library.favorites()),
        "recent": len(library.recent()),
        "by_extension": count_by_extension(records),
    }
    if json_output:
        console.print_json(data=payload)
        return

    table = Table(title="Documents by type")
    table.add_column("Type")
    table.add_column("Files", justify="right")
    for tag, count in payload["by_extension"].items():
        table.add_row(f"{file_icon(tag)} {tag.upper()}", str(count))
    console.print(table)
    console.print(
        f"[green]stats summary: total={payload['total']}, "
        f"size={format_file_size(payload['total_bytes'])}, "
        f"favorites={payload['favorites']}.[/green]"
    )


@cli.group()
def config() -> None:
    """Manage docshelf configuration files and overrides."""


@config.command("view")
@click.option("--no-env", is_flag=True, help="Ignore environment overrides when displaying output.")
def config_view(no_env: bool) -> None:
    """Display the effective configuration after applying precedence rules.

    Raises:
        click.ClickException: If configuration cannot be loaded.
    """
    manager = ConfigManager()
    try:
        loaded = manager.load(include_env=not no_env)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    yaml_text = yaml.safe_dump(loaded.model_dump(mode="python"), sort_keys=False)
    console.print(Syntax(yaml_text, "yaml", word_wrap=True))


@config.command("set")
@click.argument("key")
@click.option("--value", required=True, help="Value to assign to KEY.")
def config_set(key: str, value: str) -> None:
    """Persist a configuration value expressed as a dotted KEY.

    Raises:
        click.ClickException: If parsing, assignment, or validation fails.
    """
    manager = ConfigManager()
    manager.ensure_exists()

    segments = [segment.strip() for segment in key.split(".") if segment.strip()]
    if not segments:
        raise click.ClickException(
            "KEY must specify a dotted path such as 'discovery.min_document_size_bytes'."
        )

    try:
        parsed_value = yaml.safe_load(value)
    except yaml.YAMLError as exc:
        raise click.ClickException(f"Unable to parse value: {exc}") from exc

    before = manager.read_text().splitlines()
    try:
        file_data = manager.load_file_overrides()
        node = file_data
        for segment in segments[:-1]:
            child = node.get(segment)
            if child is None:
                child = {}
                node[segment] = child
            elif not isinstance(child, dict):
                raise ConfigError(f"Cannot assign {key}: {segment} is not a section.")
            node = child
        node[segments[-1]] = parsed_value
        resolve_with_precedence(defaults=DocshelfConfig(), file_overrides=file_data)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    manager.save(file_data)
    after = manager.read_text().splitlines()

    diff = list(
        difflib.unified_diff(
            _without_timestamp(before),
            _without_timestamp(after),
            fromfile="config.yaml (before)",
            tofile="config.yaml (after)",
            lineterm="",
        )
    )
    if diff:
        console.print(Syntax("\n".join(diff), "diff", word_wrap=False))
    else:
        console.print("[yellow]No changes applied; value already up to date.[/yellow]")
        return

    console.print(f"[green]Updated {'.'.join(segments)}.[/green]")


def main() -> None:
    """Invoke the Click CLI as the console script entry point."""
    cli()


if __name__ == "__main__":
    main()
