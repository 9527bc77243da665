"""keyleak CLI — Typer application with scan, rules, audit, and init commands."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console

from keyleak import __version__

app = typer.Typer(
    name="keyleak",
    help="Find hard-coded secrets in files, directories, or piped input.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)

logger = logging.getLogger("keyleak")


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )


def _split(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [v.strip() for v in value.split(",") if v.strip()]


def _fail(label: str, exc: Exception) -> None:
    console.print(f"[bold red]{label}:[/bold red] {exc}")
    raise typer.Exit(code=2) from exc


# ── scan ──────────────────────────────────────────────────────────────────────


@app.command()
def scan(
    path: Optional[Path] = typer.Argument(None, help="File or directory to scan"),
    stdin: bool = typer.Option(False, "--stdin", help="Read content from standard input"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: text | json | csv | table"),
    rule: Optional[str] = typer.Option(None, "--rule", "-r", help="Path to a custom rules JSON/YAML file"),
    disable: Optional[str] = typer.Option(None, "--disable", help="Comma-separated rule ids to disable"),
    max_size: Optional[str] = typer.Option(None, "--max-size", help="Skip files larger than n bytes (k/m suffix)"),
    include_name: Optional[str] = typer.Option(None, "--include-name", help="Only scan files whose name matches regex"),
    exclude_name: Optional[str] = typer.Option(None, "--exclude-name", help="Skip files whose name matches regex"),
    ext: Optional[str] = typer.Option(None, "--ext", help="Only scan these extensions (e.g. .js,.ts)"),
    exclude_ext: Optional[str] = typer.Option(None, "--exclude-ext", help="Skip these extensions (e.g. .min.js,.map)"),
    exclude_dir: Optional[str] = typer.Option(None, "--exclude-dir", help="Extra directory names to skip"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .keyleak.toml"),
    debug: bool = typer.Option(False, "--debug", help="Log each scanned file path to stderr"),
    absolute: bool = typer.Option(False, "--absolute", help="Output absolute file paths"),
    fail: bool = typer.Option(False, "--fail", help="Exit with code 1 when any secret is found"),
) -> None:
    """Scan a file, a directory tree, or stdin for secrets."""
    from keyleak.config.loader import ConfigError, load_config
    from keyleak.config.schema import OUTPUT_FORMATS
    from keyleak.output import csv_report, json_report, terminal, text
    from keyleak.rules.registry import build_registry
    from keyleak.scanner.engine import ScanError, scan as run_scan
    from keyleak.scanner.selector import FileFilters, FileSelector, build_exclusions

    _configure_logging(debug)

    if not stdin and path is None:
        console.print("[bold red]Error:[/bold red] give a path to scan or use --stdin")
        raise typer.Exit(code=2)

    cwd = Path.cwd()

    # --- Load config ---
    try:
        cfg = load_config(cwd, config)
    except ConfigError as exc:
        _fail("Config error", exc)

    # --- CLI overrides ---
    if format:
        if format not in OUTPUT_FORMATS:
            console.print(f"[bold red]Invalid format:[/bold red] {format}")
            raise typer.Exit(code=2)
        cfg.output.format = format  # type: ignore[assignment]
    if rule:
        cfg.scan.rules = rule
    cfg.scan.disable.extend(_split(disable))
    if max_size:
        cfg.scan.max_size = max_size
    if include_name:
        cfg.scan.include_name = include_name
    if exclude_name:
        cfg.scan.exclude_name = exclude_name
    if ext:
        cfg.scan.ext = _split(ext)
    if exclude_ext:
        cfg.scan.exclude_ext = _split(exclude_ext)
    cfg.scan.exclude_dirs.extend(_split(exclude_dir))
    cfg.output.absolute = cfg.output.absolute or absolute
    cfg.output.fail = cfg.output.fail or fail

    # --- Build rules and filters (configuration errors are fatal here) ---
    try:
        registry = build_registry(
            Path(cfg.scan.rules) if cfg.scan.rules else None,
            cfg.scan.disable,
            cwd=cwd,
        )
        filters = FileFilters.build(
            max_size=cfg.scan.max_size,
            include_name=cfg.scan.include_name,
            exclude_name=cfg.scan.exclude_name,
            ext=cfg.scan.ext,
            exclude_ext=cfg.scan.exclude_ext,
        )
    except ConfigError as exc:
        _fail("Config error", exc)

    logger.debug("Rules loaded from %s: %d (%d inert)",
                 registry.source, len(registry), len(registry.inert_rules()))

    selector = FileSelector(filters, build_exclusions(cfg.scan.exclude_dirs))

    # --- Run scan ---
    try:
        if stdin:
            content = typer.get_text_stream("stdin").read()
            result = run_scan(None, registry.all_rules, content=content)
        else:
            result = run_scan(path, registry.all_rules, selector)
    except ScanError as exc:
        _fail("Error", exc)

    logger.debug("Scan duration: %.0fms", result.scan_duration_ms)

    # --- Output ---
    fmt = cfg.output.format
    if fmt == "table":
        terminal.render(result, cwd=cwd, absolute=cfg.output.absolute)
    else:
        renderer = {"json": json_report, "csv": csv_report, "text": text}[fmt]
        out = renderer.render(result.findings, cwd=cwd, absolute=cfg.output.absolute)
        if out:
            typer.echo(out)

    # --- Exit code ---
    if cfg.output.fail and result.has_findings:
        raise typer.Exit(code=1)


# ── rules ─────────────────────────────────────────────────────────────────────


@app.command()
def rules(
    rule: Optional[str] = typer.Option(None, "--rule", "-r", help="Path to a custom rules JSON/YAML file"),
    disable: Optional[str] = typer.Option(None, "--disable", help="Comma-separated rule ids to disable"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .keyleak.toml"),
) -> None:
    """List the rule set and whether each rule compiled."""
    from rich.table import Table

    from keyleak.config.loader import ConfigError, load_config
    from keyleak.rules.models import Inert
    from keyleak.rules.registry import build_registry

    cwd = Path.cwd()
    try:
        cfg = load_config(cwd, config)
        rules_path = rule or cfg.scan.rules
        registry = build_registry(
            Path(rules_path) if rules_path else None,
            cfg.scan.disable + _split(disable),
            cwd=cwd,
        )
    except ConfigError as exc:
        _fail("Config error", exc)

    table = Table(title=f"Rules ({registry.source})", border_style="dim", title_style="bold")
    table.add_column("Id", style="cyan")
    table.add_column("Name")
    table.add_column("Keywords", style="dim")
    table.add_column("Entropy", justify="right")
    table.add_column("Status")

    for r in registry:
        if isinstance(r.matcher, Inert):
            status = f"[red]inert[/red] [dim]({r.matcher.reason})[/dim]"
        else:
            status = "[green]active[/green]"
        table.add_row(
            r.id,
            r.name,
            ", ".join(r.rule.keywords),
            "" if r.rule.entropy is None else f"{r.rule.entropy:g}",
            status,
        )

    Console().print(table)


# ── audit ─────────────────────────────────────────────────────────────────────


@app.command()
def audit(
    path: Path = typer.Argument(Path("."), help="File or directory to audit"),
    exclude_dir: Optional[str] = typer.Option(None, "--exclude-dir", help="Extra directory names to skip"),
) -> None:
    """List every line carrying the keyleak:ignore marker (audit trail)."""
    import os

    from keyleak.scanner.content import is_ignored_line, iter_lines
    from keyleak.scanner.engine import iter_candidates
    from keyleak.scanner.selector import FileSelector, build_exclusions

    if not path.exists():
        console.print(f"[bold red]Error:[/bold red] cannot access '{path}'")
        raise typer.Exit(code=2)

    selector = FileSelector(exclusions=build_exclusions(_split(exclude_dir)))
    hits: List[str] = []
    for file_path, content in iter_candidates(path.resolve(), selector):
        if content is None:
            continue
        for line_no, line in enumerate(iter_lines(content), 1):
            if is_ignored_line(line):
                hits.append(f"{os.path.relpath(file_path)}:{line_no}")

    if not hits:
        console.print("[green]No keyleak:ignore markers found.[/green]")
        raise typer.Exit(code=0)

    console.print(f"[bold]Found {len(hits)} suppression marker(s):[/bold]")
    for hit in hits:
        typer.echo(hit)


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init() -> None:
    """Generate a starter .keyleak.toml in the current directory."""
    from keyleak.config.defaults import DEFAULT_TOML
    from keyleak.config.loader import CONFIG_FILENAME

    config_path = Path.cwd() / CONFIG_FILENAME

    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {config_path}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"keyleak {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """keyleak — find hard-coded secrets before they ship."""
