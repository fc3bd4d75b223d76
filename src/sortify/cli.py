"""Command line interface for the Sortify project."""

from __future__ import annotations

import difflib
import functools
import logging
import sys
from importlib import metadata
from pathlib import Path
from typing import Any

import click
import yaml
from click.core import ParameterSource
from rich.console import Console
from rich.markup import escape
from rich.progress import MofNCompleteColumn, Progress, SpinnerColumn, TextColumn
from rich.syntax import Syntax
from rich.table import Table

from sortify.classification import category_for
from sortify.config import (
    ConfigError,
    ConfigManager,
    SortifyConfig,
    flatten_for_env,
    resolve_with_precedence,
)
from sortify.detection import DetectionError, DirectoryScanner, TypeDetector
from sortify.organization import OperationExecutor, OrganizationError, SortPlanner
from sortify.resolution import UNKNOWN_TYPE, ConsolePrompter, ResolutionError, TypeResolver
from sortify.sorting import SortingPipeline, SortResult
from sortify.updater import UpdateCheckError, check_for_updates

console = Console()
err_console = Console(stderr=True)

LOGGER = logging.getLogger(__name__)


def _handle_cli_error(
    message: str,
    *,
    code: str,
    json_output: bool,
    details: Any | None = None,
    original: Exception | None = None,
) -> None:
    """Report ``message`` and stop the command.

    In JSON mode the error is printed as ``{"error": {"code", "message"}}`` on
    stdout and the process exits with status 1. Otherwise a
    `click.ClickException` is raised, chained to ``original``.
    """

    if json_output:
        error: dict[str, Any] = {"code": code, "message": message}
        if details is not None:
            error["details"] = details
        console.print_json(data={"error": error})
        raise SystemExit(1)

    if isinstance(original, click.ClickException):
        raise original
    raise click.ClickException(message) from original


def _emit_message(message: Any, *, mode: str, quiet: bool, summary_only: bool) -> None:
    """Print ``message`` if the active output mode lets ``mode`` through.

    Quiet mode only lets errors through. Summary mode also keeps summary and
    warning lines.
    """

    if quiet and mode != "error":
        return
    if summary_only and mode not in {"summary", "warning", "error"}:
        return
    console.print(message)


def _format_summary_line(command: str, root: Path | str, metrics: dict[str, Any]) -> str:
    counts = ", ".join(f"{name}={count}" for name, count in metrics.items())
    return f"[green]{command} summary for {escape(str(root))}: {counts}.[/green]"


def _assign_nested(target: dict[str, Any], path: list[str], value: Any) -> None:
    """Set ``value`` at ``path`` in ``target``, creating sections as needed.

    Raises:
        ConfigError: If a segment along the path holds a scalar.
    """

    node = target
    for depth, segment in enumerate(path[:-1], start=1):
        child = node.setdefault(segment, {})
        if not isinstance(child, dict):
            raise ConfigError(f"'{'.'.join(path[:depth])}' is a value, not a section.")
        node = child
    node[path[-1]] = value


def _configure_logging(level_name: str) -> None:
    level = logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        raise ConfigError(f"Unknown logging level: {level_name}")
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    logging.getLogger("sortify").setLevel(level)


def _current_version() -> str:
    try:
        return metadata.version("sortify")
    except metadata.PackageNotFoundError:
        return "0.0.0"


def _resolve_output_modes(
    ctx: click.Context, config: SortifyConfig, *, quiet: bool, summary_mode: bool, json_output: bool
) -> tuple[bool, bool]:
    """Combine CLI flags with configured defaults into (quiet, summary_only)."""

    explicit_quiet = ctx.get_parameter_source("quiet") == ParameterSource.COMMANDLINE
    explicit_summary = ctx.get_parameter_source("summary_mode") == ParameterSource.COMMANDLINE

    quiet_enabled = quiet if explicit_quiet else config.cli.quiet_default
    summary_only = summary_mode if explicit_summary else config.cli.summary_default

    if json_output:
        if explicit_quiet and quiet_enabled:
            raise click.ClickException("--json cannot be combined with --quiet.")
        if explicit_summary and summary_only:
            raise click.ClickException("--json cannot be combined with --summary.")
        return False, False

    if quiet_enabled and summary_only:
        raise click.ClickException(
            "Quiet and summary modes cannot both be enabled. Adjust CLI defaults or flags."
        )
    return quiet_enabled, summary_only


def _report_updates(config: SortifyConfig, *, prerelease: bool, quiet: bool) -> None:
    """Print whether a newer release exists; failures only produce a warning."""

    emit = functools.partial(_emit_message, quiet=quiet, summary_only=False)
    emit("[dim]→ Checking for updates...[/dim]", mode="detail")
    try:
        update = check_for_updates(
            _current_version(),
            config.updates.repository,
            prerelease=prerelease,
            timeout=config.updates.timeout_seconds,
        )
    except UpdateCheckError as exc:
        LOGGER.warning("Update check failed: %s", exc)
        emit(f"[red]{escape(str(exc))}[/red]", mode="warning")
        return

    if update is None:
        emit(f"[green]You're on the latest version (v{_current_version()})[/green]", mode="detail")
        return

    emit("[yellow]Update available![/yellow]", mode="warning")
    emit(f"  Current version: v{update.current}", mode="warning")
    emit(f"  Latest version:  v{update.latest}", mode="warning")
    if update.download_url:
        emit(f"  Download: {update.download_url}", mode="warning")
    else:
        emit("  No suitable asset found for this platform.", mode="warning")


def _render_sort_result(
    result: SortResult,
    moves: list[tuple[str, str]],
    root: Path,
    *,
    quiet: bool,
    summary_only: bool,
) -> None:
    emit = functools.partial(_emit_message, quiet=quiet, summary_only=summary_only)
    dry_run = result.dry_run
    emit("[bold green]Sorting completed[/bold green]", mode="detail")

    table = Table(title="Dry run summary" if dry_run else "Moved files")
    table.add_column("File", overflow="fold")
    table.add_column("Destination", overflow="fold")
    for source, destination in moves:
        table.add_row(escape(source), escape(destination))
    emit(table if moves else "  (none)", mode="detail")

    if result.skipped:
        emit("[yellow]Skipped:[/yellow]", mode="detail")
        for path in result.skipped:
            emit(f"  {escape(path.name)}", mode="detail")

    if result.warnings:
        heading = "Dry-run warnings:" if dry_run else "Warnings:"
        emit(f"[bright_yellow]{heading}[/bright_yellow]", mode="warning")
        for warning in result.warnings:
            emit(f"  {escape(warning)}", mode="warning")

    metrics: dict[str, Any] = {
        "processed": len(result.resolutions),
        "would_move" if dry_run else "moved": len(moves),
        "skipped": len(result.skipped),
        "mismatches": len(result.mismatches),
        "warnings": len(result.warnings),
    }
    if dry_run:
        metrics["dry_run"] = True
    emit(_format_summary_line("Sort", root, metrics), mode="summary")


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="sortify")
def cli() -> None:
    """Sortify sorts files into category folders by their real content type."""


@cli.command()
@click.argument(
    "path",
    required=False,
    default=".",
    type=click.Path(exists=True, file_okay=False, path_type=str),
)
@click.option(
    "--ext-only",
    is_flag=True,
    help="Disable signature detection and sort files by extension only.",
)
@click.option("--dry-run", is_flag=True, help="Preview moves without touching any file.")
@click.option("--workers", type=click.IntRange(min=1), help="Threads used to sniff files.")
@click.option("--json", "json_output", is_flag=True, help="Emit JSON describing the run.")
@click.option("--summary", "summary_mode", is_flag=True, help="Only emit summary lines.")
@click.option("--quiet", is_flag=True, help="Suppress non-error output.")
@click.option("--no-check-updates", is_flag=True, help="Skip checking for updates on startup.")
@click.option(
    "--prerelease-channel", is_flag=True, help="Include pre-releases in the update check."
)
@click.pass_context
def sort(
    ctx: click.Context,
    path: str,
    ext_only: bool,
    dry_run: bool,
    workers: int | None,
    json_output: bool,
    summary_mode: bool,
    quiet: bool,
    no_check_updates: bool,
    prerelease_channel: bool,
) -> None:
    """Sort the files directly inside PATH (default: current directory).

    Every file is sniffed, reconciled with its extension, and moved into a
    category folder under PATH. Conflicts between signature and extension and
    binary files are resolved interactively unless --dry-run is given.
    """

    json_enabled = json_output
    try:
        overrides: dict[str, Any] = {}
        if ctx.get_parameter_source("ext_only") == ParameterSource.COMMANDLINE:
            overrides["detection.extension_only"] = ext_only
        if workers is not None:
            overrides["detection.workers"] = workers
        if prerelease_channel:
            overrides["updates.prerelease_channel"] = True

        manager = ConfigManager()
        config = manager.load(cli_overrides=overrides)
        _configure_logging(config.logging.level)
        quiet_enabled, summary_only = _resolve_output_modes(
            ctx, config, quiet=quiet, summary_mode=summary_mode, json_output=json_output
        )

        if config.updates.check_on_startup and not no_check_updates and not json_output:
            _report_updates(
                config,
                prerelease=config.updates.prerelease_channel,
                quiet=quiet_enabled or summary_only,
            )

        root = Path(path).expanduser().resolve()
        scanner = DirectoryScanner(
            include_hidden=config.processing.include_hidden,
            follow_symlinks=config.processing.follow_symlinks,
            exclude=[Path(sys.argv[0])] if sys.argv and sys.argv[0] else [],
        )
        paths = list(scanner.scan(root))
        if not paths:
            if json_output:
                context = {"root": root.as_posix(), "dry_run": dry_run}
                console.print_json(data={"context": context, "files": []})
            else:
                _emit_message(
                    f"[dim]No files found in {escape(str(root))}.[/dim]",
                    mode="summary",
                    quiet=quiet_enabled,
                    summary_only=summary_only,
                )
            return

        progress = Progress(
            SpinnerColumn(),
            TextColumn("[bold dim]{task.description}"),
            MofNCompleteColumn(),
            console=err_console,
            transient=True,
            disable=json_output or quiet_enabled,
        )
        detector = TypeDetector(config.detection.prefix_bytes)
        resolver = TypeResolver(
            detector,
            ConsolePrompter(err_console, progress=progress),
            extension_only=config.detection.extension_only,
            dry_run=dry_run,
        )
        pipeline = SortingPipeline(resolver, workers=config.detection.workers)

        with progress:
            task_id = progress.add_task("Processing files", total=len(paths))

            def _advance(index: int, current: Path) -> None:
                progress.update(task_id, completed=index, description=f"Processing {current.name}")

            result = pipeline.run(paths, on_progress=_advance)
            progress.update(task_id, completed=len(paths))

        plan = SortPlanner().build_plan(
            result.resolutions, root, conflict_strategy=config.organization.conflict_resolution
        )
        events = OperationExecutor().apply(plan, dry_run=dry_run)

        moves = [
            (move.source.name, move.destination.relative_to(root).as_posix()) for move in plan.moves
        ]

        if json_output:
            destinations = {move.source: move.destination for move in plan.moves}
            payload: dict[str, Any] = {
                "context": {
                    "root": root.as_posix(),
                    "dry_run": dry_run,
                    "extension_only": result.extension_only,
                    "policy": result.policy.value,
                },
                "counts": {
                    "processed": len(result.resolutions),
                    "moved": len(plan.moves),
                    "skipped": len(result.skipped),
                    "mismatches": len(result.mismatches),
                    "warnings": len(result.warnings),
                },
                "files": [
                    {
                        **resolution.model_dump(mode="json", exclude={"warnings"}),
                        "category": resolution.category.dir_name if resolution.category else None,
                        "destination": destinations[resolution.path].as_posix()
                        if resolution.path in destinations
                        else None,
                    }
                    for resolution in result.resolutions
                ],
                "warnings": result.warnings,
                "notes": plan.notes,
                "history": [event.model_dump(mode="json") for event in events],
            }
            console.print_json(data=payload)
            return

        _render_sort_result(result, moves, root, quiet=quiet_enabled, summary_only=summary_only)
        for note in plan.notes:
            _emit_message(
                f"[yellow]  - {escape(note)}[/yellow]",
                mode="warning",
                quiet=quiet_enabled,
                summary_only=summary_only,
            )
    except ConfigError as exc:
        _handle_cli_error(str(exc), code="config_error", json_output=json_enabled, original=exc)
    except DetectionError as exc:
        _handle_cli_error(str(exc), code="detection_error", json_output=json_enabled, original=exc)
    except ResolutionError as exc:
        _handle_cli_error(str(exc), code="prompt_error", json_output=json_enabled, original=exc)
    except OrganizationError as exc:
        _handle_cli_error(
            f"failed to move files: {exc}",
            code="organization_error",
            json_output=json_enabled,
            original=exc,
        )
    except click.ClickException as exc:
        _handle_cli_error(str(exc), code="cli_error", json_output=json_enabled, original=exc)
    except Exception as exc:
        _handle_cli_error(
            f"Unexpected error while sorting files: {exc}",
            code="internal_error",
            json_output=json_enabled,
            details={"exception": type(exc).__name__},
            original=exc,
        )


@cli.command()
@click.argument(
    "paths", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False, path_type=str)
)
@click.option("--json", "json_output", is_flag=True, help="Emit JSON instead of a table.")
def detect(paths: tuple[str, ...], json_output: bool) -> None:
    """Show what Sortify detects for PATHS without moving anything."""

    try:
        config = ConfigManager().load(ensure_file=False)
        detector = TypeDetector(config.detection.prefix_bytes)
        sniffs = [detector.sniff(Path(raw)) for raw in paths]
    except ConfigError as exc:
        _handle_cli_error(str(exc), code="config_error", json_output=json_output, original=exc)
        return
    except DetectionError as exc:
        _handle_cli_error(str(exc), code="detection_error", json_output=json_output, original=exc)
        return

    rows = []
    for sniff in sniffs:
        label = sniff.detected or sniff.declared or UNKNOWN_TYPE
        rows.append(
            {
                "path": sniff.path.as_posix(),
                "declared": sniff.declared,
                "detected": sniff.detected,
                "binary": sniff.binary,
                "mismatch": bool(sniff.declared and sniff.detected not in (None, sniff.declared)),
                "category": category_for(label).dir_name,
            }
        )

    if json_output:
        console.print_json(data={"files": rows})
        return

    table = Table(title="Detected types")
    table.add_column("File", overflow="fold")
    table.add_column("Extension")
    table.add_column("Signature")
    table.add_column("Binary")
    table.add_column("Category")
    for row in rows:
        signature = row["detected"] or "-"
        if row["mismatch"]:
            signature = f"[red]{signature}[/red]"
        table.add_row(
            escape(Path(row["path"]).name),
            row["declared"] or "-",
            signature,
            "yes" if row["binary"] else "no",
            row["category"],
        )
    console.print(table)


@cli.command("check-updates")
@click.option("--prerelease", is_flag=True, help="Consider pre-releases as well.")
def check_updates(prerelease: bool) -> None:
    """Check whether a newer Sortify release is available."""

    try:
        config = ConfigManager().load(ensure_file=False)
        update = check_for_updates(
            _current_version(),
            config.updates.repository,
            prerelease=prerelease or config.updates.prerelease_channel,
            timeout=config.updates.timeout_seconds,
        )
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc
    except UpdateCheckError as exc:
        raise click.ClickException(str(exc)) from exc

    if update is None:
        console.print(f"[green]You're using the latest version (v{_current_version()})[/green]")
        return
    console.print(f"[yellow]Update available: v{update.current} → v{update.latest}[/yellow]")
    if update.download_url:
        console.print(f"  Download: {update.download_url}")
    else:
        console.print("  No suitable asset found for this platform.")


@cli.group()
def config() -> None:
    """Manage Sortify configuration files and overrides."""


def _validated(data: dict[str, Any]) -> SortifyConfig:
    try:
        return resolve_with_precedence(defaults=SortifyConfig(), file_overrides=data)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc


def _yaml_body(text: str) -> list[str]:
    """Return config file lines without the comment header."""
    return [line for line in text.splitlines() if not line.startswith("#")]


@config.command("view")
@click.option("--no-env", is_flag=True, help="Show file values without SORTIFY__* overrides.")
@click.option(
    "--env",
    "as_env",
    is_flag=True,
    help="Print SORTIFY__SECTION__KEY=value lines instead of YAML.",
)
def config_view(no_env: bool, as_env: bool) -> None:
    """Print the effective configuration as YAML."""
    try:
        effective = ConfigManager().load(include_env=not no_env)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    if as_env:
        for name, value in flatten_for_env(effective).items():
            click.echo(f"{name}={value}")
        return

    rendered = yaml.safe_dump(effective.model_dump(mode="json"), sort_keys=False)
    console.print(Syntax(rendered, "yaml", word_wrap=True))


@config.command("set")
@click.argument("key")
@click.option("--value", required=True, help="YAML literal stored at KEY.")
def config_set(key: str, value: str) -> None:
    """Store VALUE at the dotted KEY, e.g. `detection.workers`.

    The file is only rewritten when the merged result still validates; a
    diff of the change is printed afterwards.
    """
    path = [part for part in (segment.strip() for segment in key.split(".")) if part]
    if not path:
        raise click.ClickException("KEY must be a dotted path such as 'detection.workers'.")
    try:
        parsed = yaml.safe_load(value)
    except yaml.YAMLError as exc:
        raise click.ClickException(f"VALUE is not valid YAML: {exc}") from exc

    manager = ConfigManager()
    manager.ensure_exists()
    before = manager.read_text()
    try:
        data = manager.load_file_overrides()
        _assign_nested(data, path, parsed)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc
    _validated(data)
    manager.save(data)
    after = manager.read_text()

    if _yaml_body(before) == _yaml_body(after):
        console.print(f"[yellow]{'.'.join(path)} already has that value; nothing changed.[/yellow]")
        return
    diff = difflib.unified_diff(
        _yaml_body(before), _yaml_body(after), fromfile="before", tofile="after", lineterm=""
    )
    console.print(Syntax("\n".join(diff), "diff"))
    console.print(f"[green]Updated {'.'.join(path)}.[/green]")


@config.command("edit")
def config_edit() -> None:
    """Edit the configuration file in $EDITOR; invalid results are rejected."""
    manager = ConfigManager()
    manager.ensure_exists()
    current = manager.read_text()

    edited = click.edit(current, extension=".yaml")
    if edited is None:
        console.print("[yellow]Editor closed without saving; config cancelled.[/yellow]")
        return
    if edited == current:
        console.print("[yellow]Config file unchanged.[/yellow]")
        return

    try:
        data = yaml.safe_load(edited) or {}
    except yaml.YAMLError as exc:
        raise click.ClickException(f"Edited file is not valid YAML: {exc}") from exc
    if not isinstance(data, dict):
        raise click.ClickException("Edited file must be a YAML mapping.")

    _validated(data)
    manager.save(data)
    console.print(f"[green]Config updated at {escape(str(manager.config_path))}.[/green]")


def main() -> None:
    """Invoke the Click CLI as the console script entry point."""
    cli()


if __name__ == "__main__":
    main()
