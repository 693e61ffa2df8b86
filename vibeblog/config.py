from __future__ import annotations

import datetime as dt
import json
import os
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

import yaml

ENV_VAR = "BLOG_ENV"
PRODUCTION = "production"


@dataclass(frozen=True)
class BuildConfig:
    posts_dir: Path = Path("posts")
    templates_dir: Path = Path("templates")
    output_dir: Path = Path("public")
    static_dir: Path = Path("static")
    base_path: str = ""
    site_name: str = "Vignes.Vibe"
    year: str = ""
    build_workers: int = 1
    highlight_code: bool = False

    @property
    def markdown_extensions(self) -> tuple[str, ...]:
        if self.highlight_code:
            return ("fenced_code", "tables", "codehilite")
        return ("fenced_code", "tables")


def load_config(path: Path) -> dict:
    if not path.exists():
        return {}
    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")
    if suffix == ".toml":
        try:
            data = tomllib.loads(text)
        except tomllib.TOMLDecodeError as exc:
            print(f"Invalid TOML in config file {path}: {exc}", file=sys.stderr)
            sys.exit(1)
        return data
    if suffix in {".yml", ".yaml"}:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            print(f"Invalid YAML in config file {path}: {exc}", file=sys.stderr)
            sys.exit(1)
        if data is None:
            return {}
        if not isinstance(data, dict):
            print(f"YAML config must be a mapping: {path}", file=sys.stderr)
            sys.exit(1)
        return data
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        print(f"Invalid JSON in config file {path}: {exc}", file=sys.stderr)
        sys.exit(1)
    if not isinstance(data, dict):
        print(f"JSON config must be an object: {path}", file=sys.stderr)
        sys.exit(1)
    return data


def parse_bool(value: object) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "y", "on"}
    return False


def parse_int(value: object, default: int) -> int:
    if value is None:
        return default
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return default


def normalize_base_path(value: str) -> str:
    value = (value or "").strip().strip("/")
    if not value:
        return ""
    return f"/{value}"


def resolve_base_path(configured: str, environ: Optional[Mapping[str, str]] = None) -> str:
    """Return the link prefix for this build.

    The configured prefix only applies when ``BLOG_ENV`` is ``production``;
    local builds are always served from the root.
    """
    environ = os.environ if environ is None else environ
    if environ.get(ENV_VAR, "").strip().lower() != PRODUCTION:
        return ""
    base_path = normalize_base_path(configured)
    if not base_path:
        print(f"{ENV_VAR}=production but no base_path is configured; links stay root-relative.", file=sys.stderr)
    return base_path


def resolve_workers(value: object) -> int:
    workers = parse_int(value, 0)
    if workers <= 0:
        workers = os.cpu_count() or 1
    return max(1, min(workers, 32))


def current_year() -> str:
    return str(dt.date.today().year)
