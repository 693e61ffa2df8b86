from __future__ import annotations

import datetime as dt
import re
import sys
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Optional

import markdown
import yaml

POST_SUFFIX = ".md"
EXCERPT_LENGTH = 200
HEADING_MARKER_RE = re.compile(r"#{1,6}\s+")
LIST_MARKER_RE = re.compile(r"^(?P<indent>[ \t]*)(?:[-+*]|\d+[.)])\s+")
FENCE_RE = re.compile(r"^(?P<indent>[ \t]*)(`{3,}|~{3,})")
DEFAULT_EXTENSIONS = ("fenced_code", "tables")


class FrontMatterError(ValueError):
    """The leading metadata block of a post could not be parsed."""


class FrontMatterLoader(yaml.SafeLoader):
    """SafeLoader that keeps timestamps as plain strings."""


FrontMatterLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != "tag:yaml.org,2002:timestamp"]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


@dataclass(frozen=True)
class Post:
    slug: str
    filename: str
    front_matter: Mapping[str, Any] = field(default_factory=dict)
    content: str = ""
    excerpt: str = ""
    published: Optional[dt.datetime] = None

    @property
    def title(self) -> str:
        title = self.front_matter.get("title")
        return str(title) if title not in (None, "") else "Untitled"

    @property
    def date(self) -> str:
        value = self.front_matter.get("date")
        if value is None:
            return ""
        if isinstance(value, (dt.date, dt.datetime)):
            return value.isoformat()
        return str(value)

    @property
    def tags(self) -> list[str]:
        tags = self.front_matter.get("tags")
        if tags is None or tags == "":
            return []
        if isinstance(tags, (list, tuple)):
            return [str(tag) for tag in tags]
        return [str(tags)]

    @property
    def formatted_date(self) -> str:
        if self.published is not None:
            return format_date(self.published)
        return self.date


def parse_front_matter(text: str) -> tuple[dict, str]:
    clean_text = text.lstrip("\ufeff")
    lines = clean_text.splitlines()
    if not lines or lines[0].strip() != "---":
        return {}, clean_text

    end = None
    for i in range(1, len(lines)):
        if lines[i].strip() == "---":
            end = i
            break
    if end is None:
        return {}, clean_text

    try:
        meta = yaml.load("\n".join(lines[1:end]), Loader=FrontMatterLoader)
    except (yaml.YAMLError, ValueError) as exc:
        raise FrontMatterError(f"invalid YAML front matter: {exc}") from exc
    if meta is None:
        meta = {}
    if not isinstance(meta, dict):
        raise FrontMatterError("front matter must be a mapping")
    body = "\n".join(lines[end + 1 :])
    return meta, body


def generate_excerpt(body: str) -> str:
    plain = HEADING_MARKER_RE.sub("", body).replace("**", "").replace("*", "")
    if len(plain) > EXCERPT_LENGTH:
        return plain[:EXCERPT_LENGTH] + "..."
    return plain


def parse_post_date(value: Any) -> Optional[dt.datetime]:
    """Turn a front-matter ``date`` into a naive datetime, or None."""
    if value is None or value == "":
        return None
    if isinstance(value, dt.datetime):
        parsed = value
    elif isinstance(value, dt.date):
        parsed = dt.datetime.combine(value, dt.time())
    else:
        text = str(value).strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = dt.datetime.fromisoformat(text)
        except ValueError:
            return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(dt.timezone.utc).replace(tzinfo=None)
    return parsed


def format_date(value: dt.datetime) -> str:
    return f"{value:%B} {value.day}, {value.year}"


def normalize_list_spacing(text: str) -> str:
    """Insert the blank line Python-Markdown needs before a top-level list."""
    lines = text.splitlines()
    out: list[str] = []
    in_fence = False
    fence_marker = ""
    for line in lines:
        fence_match = FENCE_RE.match(line)
        if fence_match:
            marker = fence_match.group(2)
            if not in_fence:
                in_fence = True
                fence_marker = marker
            elif marker == fence_marker:
                in_fence = False
                fence_marker = ""
            out.append(line)
            continue
        if in_fence:
            out.append(line)
            continue
        list_match = LIST_MARKER_RE.match(line)
        if list_match and not list_match.group("indent"):
            if out and out[-1].strip() and not LIST_MARKER_RE.match(out[-1]):
                out.append("")
        out.append(line)
    return "\n".join(out)


def render_markdown(body: str, extensions=DEFAULT_EXTENSIONS) -> str:
    md = markdown.Markdown(extensions=list(extensions))
    return md.convert(normalize_list_spacing(body))


def load_post(path: Path, extensions=DEFAULT_EXTENSIONS) -> Post:
    raw_text = path.read_text(encoding="utf-8")
    meta, body = parse_front_matter(raw_text)
    published = parse_post_date(meta.get("date"))
    if published is None and meta.get("date") not in (None, ""):
        print(f"Unparseable date {meta.get('date')!r} in {path}; sorting it last.", file=sys.stderr)
    return Post(
        slug=path.name[: -len(POST_SUFFIX)],
        filename=path.name,
        front_matter=MappingProxyType(meta),
        content=render_markdown(body, extensions),
        excerpt=generate_excerpt(body),
        published=published,
    )


def sort_key(post: Post) -> tuple[bool, dt.datetime]:
    if post.published is None:
        return False, dt.datetime.min
    return True, post.published


def list_post_files(posts_dir: Path) -> list[Path]:
    files = []
    for path in sorted(posts_dir.iterdir(), key=lambda p: p.name):
        if not path.name.endswith(POST_SUFFIX) or not path.is_file():
            continue
        if path.name == POST_SUFFIX:
            print(f"Skipping {path}: empty slug.", file=sys.stderr)
            continue
        files.append(path)
    return files


def load_posts(posts_dir: Path, extensions=DEFAULT_EXTENSIONS, workers: int = 1) -> tuple[Post, ...]:
    """Load every post in ``posts_dir``, newest first.

    A missing or unreadable directory yields no posts. A post that cannot be
    read or parsed is reported and skipped.
    """
    try:
        post_files = list_post_files(posts_dir)
    except OSError as exc:
        print(f"Error loading posts from {posts_dir}: {exc}", file=sys.stderr)
        return ()

    def parse_post(path: Path) -> Optional[Post]:
        try:
            return load_post(path, extensions)
        except (OSError, UnicodeDecodeError, FrontMatterError) as exc:
            print(f"Skipping post {path}: {exc}", file=sys.stderr)
            return None

    workers = max(1, int(workers or 1))
    if workers > 1 and len(post_files) > 1:
        with ThreadPoolExecutor(max_workers=min(workers, len(post_files))) as executor:
            parsed = list(executor.map(parse_post, post_files))
    else:
        parsed = [parse_post(path) for path in post_files]

    posts = [post for post in parsed if post is not None]
    posts.sort(key=sort_key, reverse=True)
    return tuple(posts)
