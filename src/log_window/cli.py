"""CLI command handling.

Provides the ``replay`` command, which pages an in-memory log through a
window and prints a JSON snapshot after every step.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from dataclasses import dataclass

import structlog
from pydantic import ValidationError

from log_window.config import Settings, settings
from log_window.domain.errors import WindowError
from log_window.gateway import InMemoryLogSource, LineBufferSink
from log_window.usecase.sliding_window import SlidingWindow
from log_window.utils.logging import configure_logging

logger = structlog.get_logger()

STEP_NAMES = ("start", "end", "advance", "retreat", "head", "tail", "reset", "move")


class UnknownStepError(ValueError):
    """Raised for a step the replay command does not understand."""


@dataclass(frozen=True)
class ReplayStep:
    """One parsed ``name[:arg[:arg]]`` step."""

    name: str
    args: tuple[int, ...] = ()

    def __str__(self) -> str:
        return ":".join([self.name, *map(str, self.args)])


def parse_steps(raw: str) -> list[ReplayStep]:
    """Parse a comma separated list such as ``end,retreat:20,move:5:40``.

    Raises:
        UnknownStepError: On an unknown name or a non-integer argument.
    """
    steps = []
    for chunk in raw.split(","):
        chunk = chunk.strip()
        if not chunk:
            continue

        name, *params = chunk.split(":")
        if name not in STEP_NAMES:
            raise UnknownStepError(f"unknown step '{name}'")
        try:
            args = tuple(int(p) for p in params)
        except ValueError as e:
            raise UnknownStepError(f"step '{chunk}' has a non-integer argument") from e
        if name in ("head", "tail") and len(args) != 1:
            raise UnknownStepError(f"step '{name}' takes exactly one argument")
        if name == "move" and len(args) != 2:
            raise UnknownStepError("step 'move' takes a low and a high counter")

        steps.append(ReplayStep(name, args))
    return steps


def build_log(records: int, lines_per_record: int, page_size: int) -> InMemoryLogSource:
    source = InMemoryLogSource(page_size=page_size)
    for counter in range(1, records + 1):
        source.append("\n".join(f"event {counter} line {n}" for n in range(1, lines_per_record + 1)))
    return source


def dispatch(window: SlidingWindow, step: ReplayStep) -> asyncio.Task:
    """Queue the window operation named by ``step``."""
    if step.name == "start":
        return window.jump_to_start()
    if step.name == "end":
        return window.jump_to_end()
    if step.name == "advance":
        return window.advance(*step.args[:1])
    if step.name == "retreat":
        return window.retreat(*step.args[:1])
    if step.name == "head":
        return window.shift_head(step.args[0])
    if step.name == "tail":
        return window.shift_tail(step.args[0])
    if step.name == "reset":
        return window.reset()
    return window.move((step.args[0], step.args[1]))


async def run_replay(
    steps: list[ReplayStep],
    records: int,
    lines_per_record: int,
    event_limit: int,
    page_size: int,
) -> list[dict]:
    """Run ``steps`` in order and return one snapshot dict per step."""
    source = build_log(records, lines_per_record, page_size)
    sink = LineBufferSink(line_height=settings.line_height)
    window = SlidingWindow(source, sink, sink.height, event_limit=event_limit, page_size=page_size)

    # Queue everything up front; the window runs the steps one at a time.
    tasks = [(step, dispatch(window, step)) for step in steps]

    results = []
    for step, task in tasks:
        anchor = await task
        snapshot = window.snapshot().to_dict()
        snapshot["step"] = str(step)
        snapshot["anchor_height"] = anchor
        logger.info("Replay step completed", **snapshot)
        results.append(snapshot)
    return results


def cmd_replay(args: argparse.Namespace) -> int:
    """Run the replay command."""
    configure_logging(
        level="DEBUG" if args.verbose else settings.log_level,
        log_format="console" if args.verbose else settings.log_format,
    )

    try:
        steps = parse_steps(args.steps)
    except UnknownStepError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    overrides = {"event_limit": args.event_limit, "page_size": args.page_size}
    try:
        limits = Settings(**{k: v for k, v in overrides.items() if v is not None})
    except ValidationError as e:
        print(f"Error: invalid window limits: {e}", file=sys.stderr)
        return 2
    event_limit = limits.event_limit
    page_size = limits.page_size

    try:
        results = asyncio.run(
            run_replay(steps, args.records, args.lines_per_record, event_limit, page_size)
        )
    except WindowError as e:
        logger.error("Replay failed", error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for snapshot in results:
        print(json.dumps(snapshot, ensure_ascii=False))
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the CLI parser."""
    parser = argparse.ArgumentParser(
        prog="log-window",
        description="Sliding-window cache for counter-numbered log records",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    replay_parser = subparsers.add_parser(
        "replay",
        help="Page through a generated in-memory log and print window snapshots",
    )
    replay_parser.add_argument(
        "--records",
        type=int,
        default=500,
        help="Number of records in the generated log (default: 500)",
    )
    replay_parser.add_argument(
        "--lines-per-record",
        type=int,
        default=1,
        help="Buffer lines per record (default: 1)",
    )
    replay_parser.add_argument(
        "--steps",
        default="end,retreat,start,advance",
        help=f"Comma separated steps: {', '.join(STEP_NAMES)} (e.g. retreat:20, move:5:40)",
    )
    replay_parser.add_argument(
        "--event-limit",
        type=int,
        default=None,
        help="Override LOG_WINDOW_EVENT_LIMIT",
    )
    replay_parser.add_argument(
        "--page-size",
        type=int,
        default=None,
        help="Override LOG_WINDOW_PAGE_SIZE",
    )
    replay_parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logs on the console renderer",
    )

    return parser
