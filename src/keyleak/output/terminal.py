"""Rich terminal reporter — findings table and run summary."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.table import Table

from keyleak.findings.models import ScanResult
from keyleak.findings.redactor import display_path, redact


def render(
    result: ScanResult,
    *,
    cwd: Optional[Path] = None,
    absolute: bool = False,
    show_summary: bool = True,
    console: Optional[Console] = None,
) -> None:
    """Print scan results to the terminal using Rich."""
    console = console or Console(stderr=True)

    if not result.findings:
        console.print()
        console.print("[bold green]✅ No secrets detected.[/bold green]")
        if show_summary:
            _print_summary(console, result)
        return

    console.print()
    table = Table(
        title="keyleak findings",
        show_lines=True,
        title_style="bold",
        border_style="dim",
    )
    table.add_column("Rule", style="cyan", min_width=20)
    table.add_column("File", style="magenta")
    table.add_column("Line", justify="right", style="green")
    table.add_column("Span", justify="right", style="dim")
    table.add_column("Match", min_width=15)

    for finding in result.findings:
        table.add_row(
            finding.rule_id,
            display_path(finding, cwd=cwd, absolute=absolute),
            str(finding.line_no),
            f"{finding.start}-{finding.end}",
            redact(finding.matched_text),
        )

    console.print(table)

    if show_summary:
        _print_summary(console, result)

    console.print()
    console.print(
        f"[bold red]❌ {result.total_findings} potential secret(s) found.[/bold red]"
    )


def _print_summary(console: Console, result: ScanResult) -> None:
    console.print()
    console.print(f"[dim]Files scanned:[/dim]  {result.scanned_files}")
    console.print(f"[dim]Findings:[/dim]       {result.total_findings}")
    console.print(f"[dim]Skipped:[/dim]        {len(result.skipped_files)}")
    console.print(f"[dim]Duration:[/dim]       {result.scan_duration_ms:.0f}ms")
