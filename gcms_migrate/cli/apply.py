"""CLI apply command implementation.

This module implements the `gcms-migrate apply` command: it loads a YAML
migration plan, previews the batch with `--dry-run`, or submits it through the
configured transport and, unless `--background` is given, waits for the
backend to report the outcome.
"""

import asyncio
import json
from pathlib import Path
import sys
import time
import traceback
from typing import Any

from rich.console import Console
from rich.table import Table
import rich_click as click

from ..builder import ChangeItem
from ..config import settings
from ..core import (
    MigrationStatus,
    MigrationValidationError,
    PlanLoadError,
    TransportError,
)
from ..plan import load_plan
from ..transport import MigrationInfo, create_transport

# Create console for rich formatting
console = Console()

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_FILE_ERROR = 2
EXIT_TRANSPORT_ERROR = 3
EXIT_INTERNAL_ERROR = 4

TRANSPORT_HINTS = (
    "Check GCMS_ENDPOINT and GCMS_ENVIRONMENT_ID",
    "Check that GCMS_AUTH_TOKEN has management access",
)


def _should_use_rich_formatting(force_colors: bool = False) -> bool:
    """Determine if we should use rich formatting based on environment."""
    return force_colors or console.is_terminal


def _format_time_duration(seconds: float) -> str:
    """Format duration in human-readable format."""
    SECONDS_PER_MINUTE = 60

    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < SECONDS_PER_MINUTE:
        return f"{seconds:.1f}s"
    else:
        minutes = int(seconds // SECONDS_PER_MINUTE)
        remaining_seconds = seconds % SECONDS_PER_MINUTE
        return f"{minutes}m {remaining_seconds:.1f}s"


def _model_of(item: ChangeItem) -> str:
    """Model a field change belongs to; empty for model and enumeration changes."""
    return getattr(item.payload, "model_api_id", None) or ""


def _output_json_format(result_data: dict[str, Any]) -> None:
    """Output results in JSON format."""
    click.echo(json.dumps(result_data, indent=2, default=str))


def _fail(
    format: str,
    exit_code: int,
    error_type: str,
    message: str,
    file_path: Path,
    status: str = "error",
    hints: tuple[str, ...] = (),
) -> None:
    """Report an error in the requested format and exit."""
    if format == "json":
        _output_json_format(
            {
                "status": status,
                "error_type": error_type,
                "message": message,
                "file": str(file_path),
            }
        )
    elif format == "compact":
        click.echo(f"❌ {file_path}: {error_type.upper()} ({message})")
    else:
        click.echo(f"❌ {message}")
        if hints:
            click.echo("Suggestions:")
            for hint in hints:
                click.echo(f"  • {hint}")
    sys.exit(exit_code)


def _output_dry_run_table_format(
    items: list[ChangeItem],
    skipped: int,
    file_path: str,
    migration_name: str | None,
    verbose: bool,
    force_colors: bool = False,
) -> None:
    """Output dry-run results in table format."""
    if _should_use_rich_formatting(force_colors):
        console.print("🔍 [bold blue]Dry-run results[/bold blue]")
        console.print()

        info_table = Table(show_header=False, box=None, padding=(0, 1))
        info_table.add_row("[bold]File:[/bold]", f"[cyan]{file_path}[/cyan]")
        info_table.add_row(
            "[bold]Migration:[/bold]", f"[cyan]{migration_name or '-'}[/cyan]"
        )
        info_table.add_row(
            "[bold]Mode:[/bold]", "[yellow]Dry-run (nothing submitted)[/yellow]"
        )
        console.print(info_table)
        console.print()

        changes_table = Table(title="Changes to submit")
        changes_table.add_column("#", justify="right", style="dim")
        changes_table.add_column("Action", style="green")
        changes_table.add_column("Model", style="yellow")
        changes_table.add_column("apiId", style="cyan")
        for position, item in enumerate(items, 1):
            changes_table.add_row(
                str(position), item.action, _model_of(item), item.api_id
            )
        console.print(changes_table)

        if verbose:
            console.print()
            for change in (item.generate_change() for item in items):
                console.print_json(json.dumps(change, default=str))

        console.print()
        console.print(
            f"[bold]Summary:[/bold] {len(items)} changes, "
            f"{skipped} updates without effect skipped"
        )

    else:
        # Plain text output for CI/non-interactive
        click.echo("🔍 Dry-run results")
        click.echo()
        click.echo(f"File: {file_path}")
        click.echo(f"Migration: {migration_name or '-'}")
        click.echo("Mode: Dry-run (nothing submitted)")
        click.echo()

        for position, item in enumerate(items, 1):
            model = _model_of(item)
            target = f"{model}.{item.api_id}" if model else item.api_id
            click.echo(f"  {position}. {item.action}: {target}")
            if verbose:
                click.echo(f"     {json.dumps(item.generate_change(), default=str)}")

        click.echo()
        click.echo(
            f"Summary: {len(items)} changes, "
            f"{skipped} updates without effect skipped"
        )


def _output_run_table_format(
    info: MigrationInfo,
    file_path: str,
    change_count: int,
    elapsed_seconds: float,
    verbose: bool,
    force_colors: bool = False,
) -> None:
    """Output the outcome of a submitted migration in table format."""
    if info.status == MigrationStatus.FAILED:
        headline = "❌ Migration failed"
        style = "bold red"
    elif info.status.is_finished:
        headline = "✅ Migration successful"
        style = "bold green"
    else:
        headline = "📤 Migration submitted"
        style = "bold blue"

    if _should_use_rich_formatting(force_colors):
        console.print(f"[{style}]{headline}[/{style}]")
        console.print()

        info_table = Table(show_header=False, box=None, padding=(0, 1))
        info_table.add_row("[bold]File:[/bold]", f"[cyan]{file_path}[/cyan]")
        info_table.add_row("[bold]Migration id:[/bold]", f"[cyan]{info.id}[/cyan]")
        info_table.add_row("[bold]Status:[/bold]", f"[{style}]{info.status.value}[/]")
        info_table.add_row("[bold]Changes:[/bold]", str(change_count))
        if verbose:
            info_table.add_row(
                "[bold]Total time:[/bold]",
                f"[dim]{_format_time_duration(elapsed_seconds)}[/dim]",
            )
        console.print(info_table)

        if info.errors:
            console.print()
            console.print("[bold red]Errors reported by the backend:[/bold red]")
            console.print_json(json.dumps(info.errors, default=str))

    else:
        click.echo(headline)
        click.echo()
        click.echo(f"File: {file_path}")
        click.echo(f"Migration id: {info.id}")
        click.echo(f"Status: {info.status.value}")
        click.echo(f"Changes: {change_count}")
        if verbose:
            click.echo(f"Time: {_format_time_duration(elapsed_seconds)}")
        if info.errors:
            click.echo(f"Errors: {json.dumps(info.errors, default=str)}")


def _output_compact_format(status: str, file_path: str, **kwargs: Any) -> None:
    """Output results in compact format."""
    if status == "dry_run":
        click.echo(
            f"🔍 {file_path}: DRY-RUN (changes={kwargs.get('change_count', 0)}, "
            f"skipped={kwargs.get('skipped', 0)})"
        )
    else:
        icon = "❌" if status == MigrationStatus.FAILED.value else "✅"
        click.echo(
            f"{icon} {file_path}: {status} (id={kwargs.get('migration_id')}, "
            f"changes={kwargs.get('change_count', 0)}, "
            f"time={_format_time_duration(kwargs.get('elapsed_seconds', 0.0))})"
        )


async def _apply_implementation(  # noqa: PLR0912, PLR0915
    file: str,
    dry_run: bool,
    background: bool,
    format: str,
    verbose: bool,
    force_colors: bool = False,
) -> None:
    """Implementation of the apply command."""
    file_path = Path(file)
    start_time = time.perf_counter()

    try:
        if not file_path.exists():
            _fail(
                format,
                EXIT_FILE_ERROR,
                "file_not_found",
                f"File not found: {file}",
                file_path,
            )

        try:
            migration = load_plan(file_path)
        except PlanLoadError as e:
            _fail(
                format,
                EXIT_INVALID,
                "invalid_plan",
                f"Invalid plan: {e}",
                file_path,
                status="failed",
            )
        except OSError as e:
            _fail(
                format,
                EXIT_FILE_ERROR,
                "file_read_error",
                f"Cannot read file: {e}",
                file_path,
            )

        items = [item for item in migration.changes if item.has_changes()]
        skipped = len(migration) - len(items)

        if dry_run:
            if format == "json":
                _output_json_format(
                    {
                        "status": "dry_run",
                        "file": str(file_path),
                        "migration": migration.name,
                        "changes": migration.dry_run(),
                        "summary": {
                            "change_count": len(items),
                            "skipped_count": skipped,
                        },
                    }
                )
            elif format == "compact":
                _output_compact_format(
                    "dry_run",
                    str(file_path),
                    change_count=len(items),
                    skipped=skipped,
                )
            else:
                _output_dry_run_table_format(
                    items,
                    skipped,
                    str(file_path),
                    migration.name,
                    verbose,
                    force_colors,
                )
            sys.exit(EXIT_OK)

        try:
            transport = create_transport(settings.transport)
            async with transport:
                info = await migration.run(
                    transport,
                    foreground=not background,
                    poll_interval=settings.poll_interval_seconds,
                    timeout=settings.run_timeout_seconds,
                )
        except MigrationValidationError as e:
            _fail(
                format,
                EXIT_INVALID,
                "invalid_migration",
                f"Invalid migration: {e}",
                file_path,
                status="failed",
            )
        except TransportError as e:
            _fail(
                format,
                EXIT_TRANSPORT_ERROR,
                "transport_error",
                f"Transport failed: {e}",
                file_path,
                hints=TRANSPORT_HINTS if verbose else (),
            )

        elapsed_seconds = time.perf_counter() - start_time

        if format == "json":
            _output_json_format(
                {
                    "status": info.status.value,
                    "file": str(file_path),
                    "migration": info.model_dump(mode="json", by_alias=True),
                    "summary": {
                        "change_count": len(items),
                        "skipped_count": skipped,
                        "total_time_ms": round(elapsed_seconds * 1000, 1),
                    },
                }
            )
        elif format == "compact":
            _output_compact_format(
                info.status.value,
                str(file_path),
                migration_id=info.id,
                change_count=len(items),
                elapsed_seconds=elapsed_seconds,
            )
        else:
            _output_run_table_format(
                info,
                str(file_path),
                len(items),
                elapsed_seconds,
                verbose,
                force_colors,
            )

        sys.exit(EXIT_INVALID if info.status == MigrationStatus.FAILED else EXIT_OK)

    except KeyboardInterrupt:
        _fail(
            format,
            EXIT_INTERNAL_ERROR,
            "interrupted",
            "Apply operation interrupted by user",
            file_path,
        )

    except Exception as e:
        if verbose and format not in ("json", "compact"):
            click.echo("\nFull traceback:")
            click.echo(traceback.format_exc())
        _fail(
            format,
            EXIT_INTERNAL_ERROR,
            "internal_error",
            f"Internal error: {e}",
            file_path,
        )


@click.command("apply")
@click.argument(
    "file",
    type=click.Path(exists=False),
    required=False,
    default="migration.yaml",
    help="**Path to the YAML migration plan** (default: migration.yaml)",
)
@click.option(
    "--dry-run",
    is_flag=True,
    help="🔍 **Preview the batch** without submitting it",
)
@click.option(
    "--background",
    is_flag=True,
    help="📤 **Do not wait** - return as soon as the backend accepts the batch",
)
@click.option(
    "--format",
    type=click.Choice(["table", "compact", "json"]),
    default="table",
    help="📋 **Output format** for apply results",
    show_default=True,
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="🔍 **Show detailed information** - rendered changes and timing",
)
@click.option(
    "--force-colors",
    is_flag=True,
    help="🎨 **Force colored output** - useful for testing rich formatting",
    hidden=True,
)
def apply_command(
    file: str,
    dry_run: bool,
    background: bool,
    format: str,
    verbose: bool,
    force_colors: bool,
) -> None:
    """🚀 **Apply a migration plan to the content backend**

    Builds the batch described by the plan and submits it through the
    transport configured with `GCMS_*` environment variables.

    **Examples:**

    ```bash
    gcms-migrate apply                          # Apply migration.yaml
    gcms-migrate apply blog.yaml                # Apply a specific plan
    gcms-migrate apply --dry-run                # Show what would be submitted
    gcms-migrate apply --background             # Submit without waiting
    gcms-migrate apply --format json            # JSON output
    ```

    **Exit Codes:**
    - `0`: Migration successful ✅
    - `1`: Invalid plan or migration failed ❌
    - `2`: File not found or unreadable 📁
    - `3`: Transport failure 🌐
    - `4`: Internal error 💥
    """
    asyncio.run(
        _apply_implementation(file, dry_run, background, format, verbose, force_colors)
    )
