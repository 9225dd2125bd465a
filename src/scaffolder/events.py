"""Structured status events emitted while scaffolding, and their console rendering."""

from dataclasses import dataclass

import click

RESOLVE = "resolve source"
CONTEXT = "build context"
PRE_HOOK = "pre-hook"
RENDER = "render"
POST_HOOK = "post-hook"
CLEANUP = "cleanup"

STARTED = "started"
DONE = "done"
SKIPPED = "skipped"
FAILED = "failed"


@dataclass(frozen=True)
class ScaffoldEvent:
    """One status change of one step; ``scaffold`` is None for run-level steps."""

    scaffold: str | None
    step: str
    status: str
    detail: str = ""


class ConsoleReporter:
    """Writes scaffold events as human-readable status lines."""

    def __init__(self, echo=click.echo):
        self._echo = echo

    def emit(self, event: ScaffoldEvent):
        prefix = f"[{event.scaffold}] " if event.scaffold else ""
        line = f"{prefix}{event.step}: {event.status}"
        if event.detail:
            line = f"{line} ({event.detail})"
        if event.status == FAILED:
            self._echo(line, err=True)
        else:
            self._echo(line)
