from __future__ import annotations

import hashlib
from pathlib import Path
from typing import Iterable, Optional


def is_hidden(path: Path, root: Path) -> bool:
    try:
        parts = path.relative_to(root).parts
    except ValueError:
        parts = path.parts
    return any(part.startswith(".") for part in parts)


def list_files(root: Path, pattern: str = "*") -> list[Path]:
    if not root.is_dir():
        return []
    return sorted(
        (path for path in root.rglob(pattern) if path.is_file() and not is_hidden(path, root)),
        key=lambda p: p.as_posix(),
    )


def hash_paths(paths: Iterable[Path], base: Optional[Path] = None) -> str:
    digest = hashlib.sha256()
    for path in sorted(paths, key=lambda p: p.as_posix()):
        rel = path
        if base is not None:
            try:
                rel = path.relative_to(base)
            except ValueError:
                rel = path
        digest.update(rel.as_posix().encode("utf-8"))
        digest.update(b"\0")
        try:
            digest.update(path.read_bytes())
        except OSError:
            # removed between listing and reading
            continue
        digest.update(b"\0")
    return digest.hexdigest()
