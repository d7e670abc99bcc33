"""
Trace sinks for the validator's diagnostic side channel.

The validator reports each step it takes (sanitized input, extracted fields,
computed checksums) as a plain string. A sink is any callable taking one
string; these are the ones the CLI and the HTTP endpoint use.
"""

from __future__ import annotations

from typing import Any, Callable, List, Optional

import structlog

TraceSink = Callable[[str], None]


def null_trace(line: str) -> None:
    """Drop the line."""


class ListTrace:
    """Collect trace lines in memory, in emission order."""

    def __init__(self) -> None:
        self.lines: List[str] = []

    def __call__(self, line: str) -> None:
        self.lines.append(line)

    def __iter__(self):
        return iter(self.lines)

    def __len__(self) -> int:
        return len(self.lines)

    def clear(self) -> None:
        self.lines.clear()


class StructlogTrace:
    """Forward each trace line to a structlog logger as a `trace` event."""

    def __init__(self, logger: Optional[Any] = None, **context: Any) -> None:
        self._log = (logger or structlog.get_logger()).bind(**context)
        self._step = 0

    def __call__(self, line: str) -> None:
        self._step += 1
        self._log.info("trace", step=self._step, line=line)


class TeeTrace:
    """Send every line to several sinks."""

    def __init__(self, *sinks: TraceSink) -> None:
        self._sinks = sinks

    def __call__(self, line: str) -> None:
        for sink in self._sinks:
            sink(line)
