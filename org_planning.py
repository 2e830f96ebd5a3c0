#!/usr/bin/env python3
from __future__ import annotations

import datetime
from dataclasses import dataclass, replace
from typing import Any, Optional, Union

from orgparse.date import OrgDate, OrgDateClosed, OrgDateDeadline, OrgDateScheduled

from org_parser import OrgParseError, take_line

DateOrDateTime = Union[datetime.date, datetime.datetime]

_PLANNING_KEYWORDS = ("DEADLINE:", "SCHEDULED:", "CLOSED:")


def _cookie_to_str(cookie: Any) -> Optional[str]:
    """orgparse keeps repeaters/warnings as (prefix, amount, unit) tuples."""
    if not cookie:
        return None
    if isinstance(cookie, tuple):
        return "".join(str(part) for part in cookie)
    return str(cookie)


@dataclass(frozen=True)
class Timestamp:
    """
    A planning timestamp.

    start/end are dates, or datetimes when the timestamp carries a time;
    end is set for time ranges (10:00-11:00). raw is the timestamp as
    orgparse formats it.
    """
    active: bool
    start: DateOrDateTime
    raw: str
    end: Optional[DateOrDateTime] = None
    repeater: Optional[str] = None
    delay: Optional[str] = None

    @classmethod
    def from_orgdate(cls, date: OrgDate) -> Timestamp:
        return cls(
            active=date.is_active(),
            start=date.start,
            raw=str(date),
            end=date.end if date.has_end() else None,
            repeater=_cookie_to_str(getattr(date, "_repeater", None)),
            delay=_cookie_to_str(getattr(date, "_warning", None)),
        )

    def detach(self) -> Timestamp:
        return replace(self)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"active": self.active, "start": self.start.isoformat()}
        if self.end is not None:
            data["end"] = self.end.isoformat()
        if self.repeater is not None:
            data["repeater"] = self.repeater
        if self.delay is not None:
            data["delay"] = self.delay
        data["raw"] = self.raw
        return data


@dataclass(frozen=True)
class Planning:
    """DEADLINE / SCHEDULED / CLOSED timestamps of one planning line."""
    deadline: Optional[Timestamp] = None
    scheduled: Optional[Timestamp] = None
    closed: Optional[Timestamp] = None

    def detach(self) -> Planning:
        return Planning(
            deadline=self.deadline.detach() if self.deadline else None,
            scheduled=self.scheduled.detach() if self.scheduled else None,
            closed=self.closed.detach() if self.closed else None,
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        for key in ("deadline", "scheduled", "closed"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value.to_dict()
        return data


def parse_planning(text: str) -> tuple[str, Planning]:
    """
    Parse a planning line such as

      SCHEDULED: <2019-04-08 Mon> DEADLINE: <2019-04-10 Wed>

    Only the first line of ``text`` is looked at, and it must start with
    one of the planning keywords. The timestamps are read by orgparse;
    a line where none of them parses is not a planning line.
    """
    rest, line = take_line(text)
    stripped = line.strip()
    if not stripped.startswith(_PLANNING_KEYWORDS):
        raise OrgParseError("planning", text)

    scheduled = OrgDateScheduled.from_str(stripped)
    deadline = OrgDateDeadline.from_str(stripped)
    closed = OrgDateClosed.from_str(stripped)
    if not (scheduled or deadline or closed):
        raise OrgParseError("planning", text, f"no timestamp in planning line {stripped!r}")

    return rest, Planning(
        deadline=Timestamp.from_orgdate(deadline) if deadline else None,
        scheduled=Timestamp.from_orgdate(scheduled) if scheduled else None,
        closed=Timestamp.from_orgdate(closed) if closed else None,
    )
