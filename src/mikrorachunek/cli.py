from __future__ import annotations

import sys
import json
import pathlib
from typing import List, Optional

import typer
import structlog
from rich.console import Console

from .config import load_config, MikroConfig
from .validation import (
    ListTrace,
    StructlogTrace,
    Success,
    ValidationResult,
    nrb_check_digits,
    render_lines,
    result_to_dict,
    validate_nip,
    validate_pesel,
)
from .validation.account import AccountValidator
from .validation.checksums import remove_whitespace
from .validation.trace import TeeTrace

console = Console()
log = structlog.get_logger()
app = typer.Typer(add_completion=False, no_args_is_help=True, help="mikrorachunek — Polish tax micro-account validator")


def version_callback(value: bool):
    if value:
        from . import __version__
        console.print(f"mikrorachunek {__version__}")
        raise typer.Exit()


def _configure_logging(cfg: MikroConfig) -> None:
    renderer = (
        structlog.processors.JSONRenderer()
        if cfg.logging.json_logs
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[structlog.processors.add_log_level, renderer],
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def _say(text: str, style: Optional[str] = None) -> None:
    # User input ends up in these lines; never interpret it as rich markup.
    console.print(text, style=style, markup=False, highlight=False, soft_wrap=True)


@app.callback()
def common(
    ctx: typer.Context,
    config: Optional[pathlib.Path] = typer.Option(None, "--config", help="Path to .mikrorachunek.yaml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logs"),
    version: Optional[bool] = typer.Option(None, "--version", callback=version_callback, is_eager=True),
):
    """Global options (config, verbosity)."""
    cfg = load_config(config) if config else MikroConfig()
    _configure_logging(cfg)
    ctx.obj = {"config": cfg}
    if verbose:
        log.info("verbose_enabled", config=str(config) if config else None)


@app.command()
def validate(
    ctx: typer.Context,
    account: List[str] = typer.Argument(..., help="Account number; spaced groups may be passed unquoted"),
    trace: Optional[bool] = typer.Option(None, "--trace/--no-trace", help="Log every validation step"),
    json_out: bool = typer.Option(False, "--json", help="Print the result as JSON"),
    report: Optional[pathlib.Path] = typer.Option(None, "--report", help="Write HTML report to this path"),
):
    """Validate a micro-account number (exit code 1 if it is rejected)."""
    cfg: MikroConfig = ctx.obj["config"]
    raw = " ".join(account)

    if trace is None:
        trace = cfg.trace.enabled

    lines = ListTrace()
    sink = TeeTrace(lines, StructlogTrace(account=raw)) if trace else lines

    result: ValidationResult = AccountValidator().validate(raw, trace=sink)

    if json_out or cfg.output.format == "json":
        payload = result_to_dict(result)
        payload["message"] = render_lines(result)[0]
        payload["trace"] = lines.lines
        typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        _print_result(result)

    if report:
        if cfg.output.report_dir and not report.is_absolute():
            report = cfg.output.report_dir / report
        from .reporting.html import write_report
        write_report(result, lines, report)
        console.print(f"[green]Report written:[/green] {report}")

    if not isinstance(result, Success):
        raise typer.Exit(code=1)


def _print_result(result: ValidationResult) -> None:
    rendered = render_lines(result)
    if isinstance(result, Success):
        _say(f"✓ {rendered[0]}", style="green")
        for line in rendered[1:]:
            _say(line)
    else:
        _say(f"✗ {rendered[0]}", style="red")


@app.command()
def pesel(number: str = typer.Argument(..., help="11-digit PESEL")):
    """Check the control digit of a PESEL."""
    _report_identifier("PESEL", number, validate_pesel(remove_whitespace(number)))


@app.command()
def nip(number: str = typer.Argument(..., help="10-digit NIP (dashes allowed)")):
    """Check the control digit of a NIP."""
    _report_identifier("NIP", number, validate_nip(remove_whitespace(number).replace("-", "")))


def _report_identifier(kind: str, number: str, ok: bool) -> None:
    if ok:
        _say(f"✓ {kind} {number}: suma kontrolna poprawna.", style="green")
        return
    _say(f"✗ {kind} {number}: nieprawidłowa suma kontrolna.", style="red")
    raise typer.Exit(code=1)


@app.command()
def checksum(bban: List[str] = typer.Argument(..., help="24-digit account number without check digits")):
    """Compute the NRB check digits for a 24-digit BBAN."""
    digits = remove_whitespace("".join(bban))
    try:
        cc = nrb_check_digits(digits)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="BBAN")
    _say(cc)
    _say(cc + digits)
