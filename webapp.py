#!/usr/bin/env python3
from __future__ import annotations
from pathlib import Path
from typing import Optional

from flask import Flask, abort, jsonify

from config_loader import DEFAULT_CONFIG, load_config
from org_reader import read_titles

BASE_DIR = Path.cwd()
CONFIG_PATH = BASE_DIR / "config.yml"
ORG_DIR = BASE_DIR / "org"
README_PATH = (BASE_DIR / "README.org").resolve()

app = Flask(__name__)
cfg = load_config(CONFIG_PATH) if CONFIG_PATH.is_file() else DEFAULT_CONFIG


def list_org_files(org_dir: Path) -> list[str]:
    """Org files below org_dir as paths relative to BASE_DIR, hidden dirs skipped."""
    if not org_dir.exists():
        return []

    files: list[str] = []
    for p in sorted(org_dir.glob("**/*.org")):
        if any(seg.startswith(".") for seg in p.relative_to(org_dir).parts):
            continue
        files.append(p.relative_to(BASE_DIR).as_posix())
    return files


def resolve_org_path(filename: str) -> Optional[Path]:
    """
    Map a request path to README.org or a file inside ORG_DIR.

    Returns None for anything else (traversal, wrong suffix, missing).
    """
    org_path = (BASE_DIR / filename).resolve()
    try:
        org_path.relative_to(BASE_DIR.resolve())
    except ValueError:
        return None

    if not org_path.is_file() or org_path.suffix.lower() != ".org":
        return None

    if org_path != README_PATH:
        try:
            org_path.relative_to(ORG_DIR.resolve())
        except ValueError:
            return None

    return org_path


@app.route("/")
def index():
    files = list_org_files(ORG_DIR)
    if README_PATH.is_file():
        files.insert(0, "README.org")
    return jsonify(files=files)


@app.route("/titles/<path:filename>")
def titles(filename: str):
    org_path = resolve_org_path(filename)
    if org_path is None:
        abort(404)

    return jsonify([t.to_dict() for t in read_titles(org_path, cfg)])


if __name__ == "__main__":
    # Run in dev mode
    app.run(debug=False)
