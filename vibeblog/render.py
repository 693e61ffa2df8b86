from __future__ import annotations

import shutil
import sys
from pathlib import Path

from pygments.formatters import HtmlFormatter

from .defaults import STYLESHEET, default_template

STYLESHEET_PATH = Path("css") / "style.css"


def ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def write_text(path: Path, text: str) -> None:
    ensure_dir(path.parent)
    path.write_text(text, encoding="utf-8")


def load_template(templates_dir: Path, name: str) -> str:
    path = templates_dir / name
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        print(f"Error loading template {name}: {exc}; using built-in default.", file=sys.stderr)
        return default_template(name)


def copy_static(static_dir: Path, output_dir: Path) -> None:
    for item in static_dir.iterdir():
        dest = output_dir / item.name
        if item.is_dir():
            if dest.exists():
                shutil.rmtree(dest)
            shutil.copytree(item, dest)
        else:
            shutil.copy2(item, dest)


def default_stylesheet(highlight_code: bool = False) -> str:
    if not highlight_code:
        return STYLESHEET
    return STYLESHEET + "\n" + HtmlFormatter().get_style_defs(".codehilite") + "\n"


def ensure_stylesheet(output_dir: Path, static_dir: Path, highlight_code: bool = False) -> bool:
    """Copy static assets and generate ``css/style.css`` when none was provided.

    Returns True when the default stylesheet was written.
    """
    if static_dir.is_dir():
        copy_static(static_dir, output_dir)
    if (static_dir / STYLESHEET_PATH).is_file():
        return False
    write_text(output_dir / STYLESHEET_PATH, default_stylesheet(highlight_code))
    return True
