from __future__ import annotations

import argparse
import sys
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .config import (
    BuildConfig,
    current_year,
    load_config,
    parse_bool,
    resolve_base_path,
    resolve_workers,
)
from .content import Post, load_posts
from .pages import SiteSettings, build_archive, build_index, build_post_pages
from .render import ensure_dir, ensure_stylesheet, load_template, write_text
from .watch import POLL_INTERVAL, watch


@dataclass(frozen=True)
class BuildResult:
    posts: tuple[Post, ...]
    written: list[Path] = field(default_factory=list)


def build_site(config: BuildConfig) -> BuildResult:
    output_dir = config.output_dir
    ensure_dir(output_dir)
    ensure_dir(output_dir / "posts")

    posts = load_posts(config.posts_dir, config.markdown_extensions, workers=config.build_workers)
    settings = SiteSettings(base_path=config.base_path, site_name=config.site_name, year=config.year)

    def write(rel: Path, text: str) -> None:
        write_text(output_dir / rel, text)

    template = load_template(config.templates_dir, "post.html")
    written = build_post_pages(template, posts, settings, write, workers=config.build_workers)

    write(Path("index.html"), build_index(posts, settings))
    write(Path("archive.html"), build_archive(posts, settings))
    written += [Path("index.html"), Path("archive.html")]

    if ensure_stylesheet(output_dir, config.static_dir, config.highlight_code):
        written.append(Path("css") / "style.css")
    return BuildResult(posts=posts, written=written)


def build_config(args: argparse.Namespace, environ=None) -> BuildConfig:
    return BuildConfig(
        posts_dir=Path(args.posts),
        templates_dir=Path(args.templates),
        output_dir=Path(args.output),
        static_dir=Path(args.static),
        base_path=resolve_base_path(args.base_path, environ),
        site_name=args.site_name,
        year=str(args.year or current_year()),
        build_workers=resolve_workers(args.build_workers),
        highlight_code=parse_bool(args.highlight_code),
    )


def run(config: BuildConfig) -> BuildResult:
    print("Building blog...")
    start = time.perf_counter()
    result = build_site(config)
    elapsed = time.perf_counter() - start
    print(f"Generated {len(result.posts)} posts in {elapsed:.2f}s.")
    print(f"Site generated in: {config.output_dir}")
    return result


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    pre_parser = argparse.ArgumentParser(add_help=False)
    pre_parser.add_argument(
        "--config",
        default="site.toml",
        help="Path to site config file (TOML/YAML/JSON).",
    )
    pre_args, _ = pre_parser.parse_known_args(argv)
    config = load_config(Path(pre_args.config))

    def cfg_str(key: str, default: str) -> str:
        value = config.get(key)
        return default if value is None else str(value)

    def cfg_value(key: str, default: object) -> object:
        value = config.get(key)
        return default if value is None else value

    parser = argparse.ArgumentParser(description="Static Markdown blog generator.")
    parser.add_argument(
        "command",
        nargs="?",
        choices=["build", "watch"],
        default="build",
        help="Build once, or build and rebuild on changes.",
    )
    parser.add_argument("--config", default=pre_args.config, help="Path to site config file (TOML/YAML/JSON).")
    parser.add_argument("--posts", default=cfg_str("posts", "posts"), help="Directory containing Markdown posts.")
    parser.add_argument(
        "--templates",
        default=cfg_str("templates", "templates"),
        help="Directory containing HTML templates.",
    )
    parser.add_argument("--static", default=cfg_str("static", "static"), help="Directory containing static assets.")
    parser.add_argument("--output", default=cfg_str("output", "public"), help="Output directory for the site.")
    parser.add_argument(
        "--base-path",
        default=cfg_str("base_path", ""),
        help="URL prefix used for links when BLOG_ENV=production.",
    )
    parser.add_argument("--site-name", default=cfg_str("site_name", "Vignes.Vibe"), help="Site title.")
    parser.add_argument("--year", default=cfg_str("year", ""), help="Copyright year in the footer.")
    parser.add_argument(
        "--build-workers",
        default=cfg_value("build_workers", 0),
        type=int,
        help="Number of worker threads for parsing/rendering (0 = auto).",
    )
    parser.add_argument(
        "--highlight-code",
        action=argparse.BooleanOptionalAction,
        default=parse_bool(cfg_value("highlight_code", False)),
        help="Highlight fenced code blocks with Pygments.",
    )
    parser.add_argument(
        "--poll-interval",
        default=cfg_value("poll_interval", POLL_INTERVAL),
        type=float,
        help="Seconds between change checks in watch mode.",
    )
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> None:
    args = parse_args(argv)
    if args.command == "watch":
        watch(
            lambda: build_config(parse_args(argv)),
            run,
            config_path=Path(args.config),
            interval=args.poll_interval,
        )
        return
    try:
        run(build_config(args))
    except OSError as exc:
        print(f"Build failed: {exc}", file=sys.stderr)
        sys.exit(1)
