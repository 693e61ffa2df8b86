from pathlib import Path

import pytest


def write_post(posts_dir: Path, slug: str, body: str = "Hello world.", **meta) -> Path:
    posts_dir.mkdir(parents=True, exist_ok=True)
    lines = ["---"]
    for key, value in meta.items():
        if isinstance(value, list):
            lines.append(f"{key}: [{', '.join(value)}]")
        else:
            lines.append(f"{key}: {value}")
    lines.append("---")
    path = posts_dir / f"{slug}.md"
    path.write_text("\n".join(lines) + "\n" + body + "\n", encoding="utf-8")
    return path


@pytest.fixture
def site(tmp_path):
    """A project layout with empty posts/ and templates/ directories."""
    (tmp_path / "posts").mkdir()
    (tmp_path / "templates").mkdir()
    return tmp_path


@pytest.fixture
def make_post():
    return write_post
