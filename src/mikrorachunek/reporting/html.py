from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional
from jinja2 import Environment, PackageLoader, select_autoescape

from ..validation import Success, ValidationResult, render_lines


def render_report(result: ValidationResult, trace: Optional[Iterable[str]] = None) -> str:
    env = Environment(
        loader=PackageLoader("mikrorachunek.reporting", "templates"),
        autoescape=select_autoescape(("html", "html.j2"))
    )
    tmpl = env.get_template("report.html.j2")
    lines = render_lines(result)
    return tmpl.render(
        success=isinstance(result, Success),
        message=lines[0],
        details=lines[1:],
        trace=list(trace or []),
    )


def write_report(result: ValidationResult, trace: Optional[Iterable[str]], path: Path) -> None:
    html = render_report(result, trace)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(html, encoding="utf-8")
