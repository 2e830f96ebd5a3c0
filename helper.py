from __future__ import annotations

import sys
from typing import TextIO

from org_title import Title


def print_event_gray(text: str, file: TextIO | None = None) -> None:
    """
    Print event/debug output in gray using ANSI escape codes.

    Goes to stderr by default so it never mixes with JSON on stdout.
    """
    GRAY = "\033[90m"
    RESET = "\033[0m"
    print(f"{GRAY}{text}{RESET}", file=file or sys.stderr)


def describe_title(title: Title) -> str:
    """One-line summary of a parsed title, e.g. '** TODO [#A] Title :work:'."""
    parts = ["*" * title.level]
    if title.keyword:
        parts.append(title.keyword)
    if title.priority:
        parts.append(f"[#{title.priority}]")
    if title.raw:
        parts.append(title.raw)
    if title.tags:
        parts.append(":" + ":".join(title.tags) + ":")
    summary = " ".join(parts)
    extras = []
    if title.planning is not None:
        extras.append("planning")
    if title.properties:
        extras.append(f"{len(title.properties)} properties")
    return f"{summary} ({', '.join(extras)})" if extras else summary
