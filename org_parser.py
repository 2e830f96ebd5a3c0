#!/usr/bin/env python3
"""
Headline-line parser and the small text primitives shared by the
drawer, planning and title parsers.

Every parser here takes the remaining input and returns a
``(rest, value)`` pair. A parser that does not match raises
OrgParseError and consumes nothing; wrap it with ``optional`` to turn
that into an absent value.
"""
from __future__ import annotations

import re
from typing import Any, Callable, Optional, Sequence

from config_loader import DEFAULT_CONFIG, OrgTitleConfig

# str.isspace() is Unicode-wide; words are split on ASCII whitespace only
_ASCII_WHITESPACE = " \t\n\r\x0c"
_PRIORITY_RE = re.compile(r"\[#([A-Z])\]")


class OrgParseError(ValueError):
    """
    Raised when a parser does not match its input.

    kind:
      - "space"      expected spaces or tabs
      - "word"       expected a non-whitespace word
      - "keyword"    word is not in the keyword vocabulary
      - "tag"        literal or drawer name mismatch
      - "eof"        input ended before the construct was closed
      - "planning"   not a planning line

    This is a recoverable mismatch: callers treat it as "construct
    absent", never as a hard failure.
    """

    def __init__(self, kind: str, remaining: str, message: str | None = None) -> None:
        super().__init__(message or f"{kind} mismatch at {remaining[:20]!r}")
        self.kind = kind
        self.remaining = remaining


# ---------------- Primitives -------------------------------------------------


def take_line(text: str) -> tuple[str, str]:
    """
    Split off the current physical line.

    The newline (``\\n`` or ``\\r\\n``) is consumed but not returned.
    Without a newline the whole input is the line. Never fails.
    """
    idx = text.find("\n")
    if idx == -1:
        return "", text
    line = text[:idx]
    if line.endswith("\r"):
        line = line[:-1]
    return text[idx + 1 :], line


def take_space(text: str) -> tuple[str, str]:
    """Consume one or more spaces/tabs."""
    stripped = text.lstrip(" \t")
    if len(stripped) == len(text):
        raise OrgParseError("space", text)
    return stripped, text[: len(text) - len(stripped)]


def take_one_word(text: str) -> tuple[str, str]:
    """Consume a run of non-whitespace characters (at least one)."""
    end = 0
    while end < len(text) and text[end] not in _ASCII_WHITESPACE:
        end += 1
    if end == 0:
        raise OrgParseError("word", text)
    return text[end:], text[:end]


def count_blank_lines(text: str) -> tuple[str, int]:
    """Consume whitespace-only lines; return the rest and how many were eaten."""
    count = 0
    while text:
        rest, line = take_line(text)
        if line.strip():
            break
        text = rest
        count += 1
    return text, count


def skip_empty_lines(text: str) -> str:
    return count_blank_lines(text)[0]


def optional(
    parser: Callable[..., tuple[str, Any]],
    default: Any = None,
) -> Callable[..., tuple[str, Any]]:
    """
    Wrap ``parser`` so that a mismatch yields ``(text, default)``.

    The input is left untouched on failure; extra positional arguments
    are passed through to ``parser``.
    """

    def attempt(text: str, *args: Any) -> tuple[str, Any]:
        try:
            return parser(text, *args)
        except OrgParseError:
            return text, default

    return attempt


# ---------------- Headline line ---------------------------------------------


def is_keyword(
    word: str,
    todo_keywords: Sequence[str],
    done_keywords: Sequence[str],
) -> bool:
    """Case-sensitive membership test against both vocabularies."""
    return any(k == word for k in todo_keywords) or any(k == word for k in done_keywords)


def calculate_heading_level(text: str) -> int:
    """Length of the leading run of '*'."""
    return len(text) - len(text.lstrip("*"))


def _parse_keyword(text: str, cfg: OrgTitleConfig) -> tuple[str, str]:
    rest, _ = take_space(text)
    rest, word = take_one_word(rest)
    if not is_keyword(word, cfg.todo_keywords, cfg.done_keywords):
        raise OrgParseError("keyword", text)
    return rest, word


def _parse_priority(text: str) -> tuple[str, str]:
    rest, _ = take_space(text)
    rest, word = take_one_word(rest)
    match = _PRIORITY_RE.fullmatch(word)
    if not match:
        raise OrgParseError("tag", text)
    return rest, match.group(1)


def extract_heading_tags(tail: str) -> tuple[str, list[str]]:
    """
    Split trailing tags off a trimmed headline tail.

    Example: 'Title :foo:bar:' -> ('Title', ['foo', 'bar'])

    Only the text after the last space is considered, and it must be at
    least three characters long and start and end with ':'. Anything
    else stays part of the title.
    """
    idx = tail.rfind(" ")
    if idx != -1:
        candidate = tail[idx + 1 :]
        if len(candidate) > 2 and candidate.startswith(":") and candidate.endswith(":"):
            return tail[:idx].strip(), [t for t in candidate.split(":") if t]
    return tail, []


def parse_headline(
    text: str,
    cfg: OrgTitleConfig = DEFAULT_CONFIG,
) -> tuple[str, tuple[int, Optional[str], Optional[str], str, list[str]]]:
    """
    Parse the headline line at the start of ``text``.

    Returns ``(rest, (level, keyword, priority, raw, tags))`` where
    ``rest`` starts on the line after the headline. Unrecognised
    keywords, priority cookies or tag blocks stay in ``raw``.

    ``text`` must start with at least one '*'.
    """
    level = calculate_heading_level(text)
    if level == 0:
        raise ValueError("headline must start with at least one '*'")

    rest = text[level:]
    rest, keyword = optional(_parse_keyword)(rest, cfg)
    # tried even without a keyword: "* [#A] Title" has priority A
    rest, priority = optional(_parse_priority)(rest)
    rest, tail = take_line(rest)
    raw, tags = extract_heading_tags(tail.strip())

    return rest, (level, keyword, priority, raw, tags)
