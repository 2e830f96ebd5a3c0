# config_loader.py
from __future__ import annotations

from pathlib import Path
from typing import Any
import re

try:
    import yaml  # PyYAML
except ImportError as e:
    raise SystemExit(
        "Missing dependency: PyYAML\n"
        "Install with: python -m pip install pyyaml"
    ) from e


class OrgTitleConfig:
    """
    Immutable-ish container for headline parsing configuration.

    The keyword vocabularies are ordered and matched case-sensitively.
    Empty vocabularies are valid and disable keyword recognition.
    """

    def __init__(
        self,
        *,
        todo_keywords: tuple[str, ...],
        done_keywords: tuple[str, ...],
        headline_re: re.Pattern,
        drawer_begin_re: re.Pattern,
        drawer_end_re: re.Pattern,
    ):
        self.todo_keywords = todo_keywords
        self.done_keywords = done_keywords
        self.headline_re = headline_re
        self.drawer_begin_re = drawer_begin_re
        self.drawer_end_re = drawer_end_re

    def with_keywords(
        self,
        *,
        todo_keywords: tuple[str, ...] | None = None,
        done_keywords: tuple[str, ...] | None = None,
    ) -> "OrgTitleConfig":
        """Return a copy with one or both vocabularies replaced."""
        return OrgTitleConfig(
            todo_keywords=self.todo_keywords if todo_keywords is None else tuple(todo_keywords),
            done_keywords=self.done_keywords if done_keywords is None else tuple(done_keywords),
            headline_re=self.headline_re,
            drawer_begin_re=self.drawer_begin_re,
            drawer_end_re=self.drawer_end_re,
        )


# ---------------- Defaults ---------------------------------------------------

DEFAULT_CONFIG = OrgTitleConfig(
    todo_keywords=("TODO",),
    done_keywords=("DONE",),
    headline_re=re.compile(r"^\*+(?:[ \t]|\r?$)", re.MULTILINE),
    drawer_begin_re=re.compile(r"^:([A-Za-z_-]+):[ \t]*(?:\r?\n|$)"),
    drawer_end_re=re.compile(r"^\s*:END:\s*$", re.IGNORECASE),
)

# ---------------- Loader -----------------------------------------------------


def _as_keyword_tuple(value: Any, name: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if not isinstance(value, list):
        raise TypeError(f"{name} must be a list of strings")
    # keywords are case-sensitive: no lowercasing here
    return tuple(str(v) for v in value)


def load_config(path: Path) -> OrgTitleConfig:
    """
    Load YAML config and return an OrgTitleConfig instance.

    Missing keys fall back to DEFAULT_CONFIG. An explicit empty list
    (``done_keywords: []``) disables that vocabulary.
    """
    raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise TypeError("Config root must be a mapping")

    regex = raw.get("regex") or {}
    if not isinstance(regex, dict):
        raise TypeError("regex must be a mapping")

    return OrgTitleConfig(
        todo_keywords=_as_keyword_tuple(
            raw.get("todo_keywords", list(DEFAULT_CONFIG.todo_keywords)),
            "todo_keywords",
        ),
        done_keywords=_as_keyword_tuple(
            raw.get("done_keywords", list(DEFAULT_CONFIG.done_keywords)),
            "done_keywords",
        ),
        headline_re=re.compile(
            regex.get("headline_re", DEFAULT_CONFIG.headline_re.pattern),
            re.MULTILINE,
        ),
        drawer_begin_re=re.compile(
            regex.get("drawer_begin_re", DEFAULT_CONFIG.drawer_begin_re.pattern),
        ),
        drawer_end_re=re.compile(
            regex.get("drawer_end_re", DEFAULT_CONFIG.drawer_end_re.pattern),
            re.IGNORECASE,
        ),
    )
