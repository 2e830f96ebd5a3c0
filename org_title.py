#!/usr/bin/env python3
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from config_loader import DEFAULT_CONFIG, OrgTitleConfig
from org_drawer import parse_drawer
from org_parser import (
    OrgParseError,
    optional,
    parse_headline,
    skip_empty_lines,
    take_line,
)
from org_planning import Planning, parse_planning


@dataclass(frozen=True)
class Title:
    """
    Parsed headline title.

    level:      number of leading stars (>= 1)
    keyword:    TODO/DONE-style keyword from the configured vocabulary
    priority:   single uppercase letter from a [#X] cookie
    tags:       trailing :tags: in written order, duplicates kept
    raw:        remaining title text, trimmed
    planning:   planning line directly below the headline
    properties: contents of the PROPERTIES drawer

    Frozen but not hashable.
    """
    level: int
    raw: str
    keyword: Optional[str] = None
    priority: Optional[str] = None
    tags: list[str] = field(default_factory=list)
    planning: Optional[Planning] = None
    properties: dict[str, str] = field(default_factory=dict)

    # tags and properties are mutable containers
    __hash__ = None  # type: ignore[assignment]

    def is_archived(self) -> bool:
        """Checks if this headline is tagged ARCHIVE."""
        return any(tag == "ARCHIVE" for tag in self.tags)

    def detach(self) -> Title:
        """Deep copy sharing no containers with this title."""
        return Title(
            level=self.level,
            raw=self.raw,
            keyword=self.keyword,
            priority=self.priority,
            tags=list(self.tags),
            planning=self.planning.detach() if self.planning else None,
            properties=dict(self.properties),
        )

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready mapping; absent and empty optional fields are omitted."""
        data: dict[str, Any] = {"level": self.level}
        if self.priority is not None:
            data["priority"] = self.priority
        if self.tags:
            data["tags"] = list(self.tags)
        if self.keyword is not None:
            data["keyword"] = self.keyword
        data["raw"] = self.raw
        if self.planning is not None:
            data["planning"] = self.planning.to_dict()
        if self.properties:
            data["properties"] = dict(self.properties)
        return data


def parse_title(
    text: str,
    cfg: OrgTitleConfig = DEFAULT_CONFIG,
) -> tuple[str, Title, str]:
    """
    Parse a headline plus its optional planning line and PROPERTIES drawer.

    Returns ``(rest, title, raw)``; ``raw`` is the title text as found in
    the headline, for callers that index headlines by it.
    """
    rest, (level, keyword, priority, raw, tags) = parse_headline(text, cfg)
    rest, planning = optional(parse_planning)(rest)
    rest, properties = optional(parse_properties_drawer)(rest, cfg)

    title = Title(
        level=level,
        raw=raw,
        keyword=keyword,
        priority=priority,
        tags=tags,
        planning=planning,
        properties=properties or {},
    )
    return rest, title, raw


def parse_node_property(text: str) -> tuple[str, tuple[str, str]]:
    """
    Parse one ``:NAME: value`` line, skipping blank lines before it.

    A trailing '+' on the name (``:EXPORT_OPTIONS+:``) is dropped.
    """
    text = skip_empty_lines(text).lstrip()
    line_end = text.find("\n")
    first_line = text if line_end == -1 else text[:line_end]

    if not first_line.startswith(":"):
        raise OrgParseError("tag", text)
    close = first_line.find(":", 1)
    if close == -1:
        raise OrgParseError("tag", text)

    name = first_line[1:close].rstrip("+")
    rest, value = take_line(text[close + 1 :])
    return rest, (name, value.strip())


def parse_properties_drawer(
    text: str,
    cfg: OrgTitleConfig = DEFAULT_CONFIG,
) -> tuple[str, dict[str, str]]:
    """
    Parse a PROPERTIES drawer, allowing leading blank lines and indentation.

    Any other drawer raises OrgParseError with kind "tag".
    """
    rest, (drawer, body) = parse_drawer(text.lstrip(), cfg)
    if drawer.name != "PROPERTIES":
        raise OrgParseError("tag", rest, f"expected PROPERTIES drawer, got {drawer.name}")

    properties: dict[str, str] = {}
    while True:
        try:
            body, (name, value) = parse_node_property(body)
        except OrgParseError:
            break
        properties[name] = value

    return rest, properties
