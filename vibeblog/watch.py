from __future__ import annotations

import sys
import time
from pathlib import Path
from typing import Callable, Optional

from .cache import hash_paths, list_files
from .config import BuildConfig

POLL_INTERVAL = 1.0


def watched_files(config: BuildConfig, config_path: Optional[Path] = None) -> list[Path]:
    paths = list_files(config.posts_dir, "*.md") + list_files(config.templates_dir, "*.html")
    if config_path is not None and config_path.is_file():
        paths.append(config_path)
    return paths


def snapshot(config: BuildConfig, config_path: Optional[Path] = None) -> str:
    return hash_paths(watched_files(config, config_path))


def run_build(build: Callable[[], object], label: str) -> bool:
    print(f"{label}...")
    try:
        build()
    except Exception as exc:
        print(f"{label} failed: {exc}", file=sys.stderr)
        return False
    print(f"{label} complete.")
    return True


def reload_config(configure: Callable[[], BuildConfig], current: BuildConfig) -> BuildConfig:
    try:
        return configure()
    except SystemExit:
        print("Invalid config; keeping previous settings.", file=sys.stderr)
        return current


def watch(
    configure: Callable[[], BuildConfig],
    build: Callable[[BuildConfig], object],
    config_path: Optional[Path] = None,
    interval: float = POLL_INTERVAL,
    max_polls: Optional[int] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """Build once, then rebuild whenever a watched file changes.

    Rebuilds run one at a time; the snapshot is retaken after each rebuild,
    so edits made while it was running do not queue another one. Settings
    come from ``configure`` and are re-read before every rebuild. Returns the
    number of rebuilds after the initial build.
    """
    config = configure()
    print(f"Watching {config.posts_dir}/ and {config.templates_dir}/ for changes.")
    run_build(lambda: build(config), "Initial build")
    last = snapshot(config, config_path)
    rebuilds = 0
    polls = 0
    try:
        while max_polls is None or polls < max_polls:
            sleep(interval)
            polls += 1
            current = snapshot(config, config_path)
            if current == last:
                continue
            print("Change detected.")
            config = reload_config(configure, config)
            run_build(lambda: build(config), "Rebuild")
            rebuilds += 1
            last = snapshot(config, config_path)
    except KeyboardInterrupt:
        print("Stopped watching.")
    return rebuilds
