#!/usr/bin/env python3
from __future__ import annotations

from dataclasses import dataclass

from config_loader import DEFAULT_CONFIG, OrgTitleConfig
from org_parser import OrgParseError, count_blank_lines, take_line


@dataclass(frozen=True)
class Drawer:
    """
    A named drawer block:

      :NAME:
      ...
      :END:

    pre_blank counts blank lines at the start of the body, post_blank
    the blank lines following :END:.
    """
    name: str
    pre_blank: int = 0
    post_blank: int = 0


def parse_drawer(
    text: str,
    cfg: OrgTitleConfig = DEFAULT_CONFIG,
) -> tuple[str, tuple[Drawer, str]]:
    """
    Parse a drawer at the very start of ``text``.

    Returns ``(rest, (drawer, body))``. ``body`` excludes the leading
    blank lines and the :END: line. Raises OrgParseError when the first
    line is not a drawer opener or no :END: line follows.
    """
    match = cfg.drawer_begin_re.match(text)
    if not match:
        raise OrgParseError("tag", text)

    name = match.group(1)
    contents = text[match.end() :]

    pos = 0
    while pos < len(contents):
        remaining, line = take_line(contents[pos:])
        if cfg.drawer_end_re.match(line):
            break
        pos = len(contents) - len(remaining)
    else:
        raise OrgParseError("eof", text, f"drawer :{name}: is not closed by :END:")

    body, pre_blank = count_blank_lines(contents[:pos])
    rest, post_blank = count_blank_lines(remaining)

    return rest, (Drawer(name=name, pre_blank=pre_blank, post_blank=post_blank), body)
