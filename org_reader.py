from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Iterator

from config_loader import DEFAULT_CONFIG, OrgTitleConfig, load_config
from helper import describe_title, print_event_gray
from org_title import Title, parse_title


def safe_input_path(raw: str, *, root: Path | None = None) -> Path:
    """
    Parse and validate a user-supplied path.

    Goals:
    - reject obvious malicious / malformed inputs (NUL, empty)
    - avoid directory traversal surprises when a root is given
    - resolve symlinks and return an absolute path
    """
    if not raw or raw.strip() == "":
        raise ValueError("Empty input path.")

    if "\x00" in raw:
        raise ValueError("NUL byte in path is not allowed.")

    p = Path(raw).expanduser()

    if any(part == ".." for part in p.parts):
        raise ValueError("Path traversal ('..') is not allowed.")

    # strict=False so it can still be resolved even if it doesn't exist (we check after)
    resolved = p.resolve(strict=False)

    if root is not None:
        root_resolved = root.resolve(strict=True)
        try:
            resolved.relative_to(root_resolved)
        except ValueError as e:
            raise ValueError(f"Input path must be within root: {root_resolved}") from e

    if not resolved.exists():
        raise FileNotFoundError(f"File not found: {resolved}")
    if not resolved.is_file():
        raise IsADirectoryError(f"Not a file: {resolved}")

    return resolved


def iter_titles(text: str, cfg: OrgTitleConfig = DEFAULT_CONFIG) -> Iterator[Title]:
    """
    Yield a Title for every headline line in ``text``.

    A headline line starts with one or more '*' followed by a space, a
    tab or the end of the line. No block structure is tracked, so a
    star line inside e.g. a src block is reported too.

    Each headline only sees the text up to the next headline: its
    planning line and drawer cannot extend past it.
    """
    starts = [match.start() for match in cfg.headline_re.finditer(text)]
    for start, end in zip(starts, starts[1:] + [len(text)]):
        _, title, _ = parse_title(text[start:end], cfg)
        yield title


def read_titles(path: Path, cfg: OrgTitleConfig = DEFAULT_CONFIG) -> list[Title]:
    """Read a UTF-8 Org file and return the titles of all its headlines."""
    return list(iter_titles(Path(path).read_text(encoding="utf-8"), cfg))


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="org_reader.py",
        description="Parse the headlines of an Org file and print them as JSON.",
    )
    parser.add_argument(
        "input",
        help="Org file to read",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a config.yml with keyword vocabularies (default: built-in TODO/DONE)",
    )
    parser.add_argument(
        "--root",
        default=None,
        help="Optional root directory: input file must be within this directory.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Echo each parsed headline to stderr.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)

    cfg = DEFAULT_CONFIG
    if args.config:
        try:
            cfg = load_config(Path(args.config))
        except Exception as e:
            print(f"[org_reader] Failed to load config: {e}", file=sys.stderr)
            return 2

    root_dir: Path | None = None
    if args.root:
        try:
            root_dir = Path(args.root).expanduser().resolve(strict=True)
        except OSError as e:
            print(f"[org_reader] Invalid --root: {e}", file=sys.stderr)
            return 2

    try:
        input_path = safe_input_path(args.input, root=root_dir)
    except (ValueError, OSError) as e:
        print(f"[org_reader] Invalid input path: {e}", file=sys.stderr)
        return 2

    try:
        titles = read_titles(input_path, cfg)
    except (OSError, UnicodeDecodeError) as e:
        print(f"[org_reader] Error while reading: {e}", file=sys.stderr)
        return 1

    if args.verbose:
        for title in titles:
            print_event_gray(describe_title(title))

    print(json.dumps([t.to_dict() for t in titles], indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
