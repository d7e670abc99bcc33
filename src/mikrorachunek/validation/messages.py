"""
Human-readable messages for validation results.

The catalogue lives in `catalog/pl.yaml` so wording can be reviewed without
touching code. It is read once per process and cached.
"""

from __future__ import annotations

from functools import lru_cache
from importlib import resources
from typing import Any, Dict, List

import yaml

from .results import Failure, Success, ValidationResult

_CATALOG_PKG = "mikrorachunek.validation"
_CATALOG_FILE = "catalog/pl.yaml"


@lru_cache(maxsize=1)
def load_catalog() -> Dict[str, Any]:
    text = resources.files(_CATALOG_PKG).joinpath(_CATALOG_FILE).read_text(encoding="utf-8")
    return yaml.safe_load(text) or {}


def failure_message(failure: Failure) -> str:
    """
    Message for a rejected account.

    Raises:
        KeyError: if the catalogue has no entry for the reason.
    """
    template = load_catalog()["failures"][failure.reason.value]
    if failure.length is not None:
        return template.format(n=failure.length)
    return template


def success_lines(success: Success) -> List[str]:
    """Headline plus the decoded identifier, one line each."""
    msgs = load_catalog()["success"]
    return [
        msgs["headline"],
        msgs["identifier_type"].format(type=success.identifier_type.value),
        msgs["identifier_number"].format(number=success.identifier_number),
    ]


def headline(result: ValidationResult) -> str:
    """Single-line summary: the success headline or the failure message."""
    if isinstance(result, Success):
        return load_catalog()["success"]["headline"]
    return failure_message(result)


def render_lines(result: ValidationResult) -> List[str]:
    if isinstance(result, Success):
        return success_lines(result)
    return [failure_message(result)]
