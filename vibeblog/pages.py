from __future__ import annotations

import html
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Sequence

from .content import Post
from .template import render

INDEX_LIMIT = 5
INDEX_EMPTY = "<p>No posts yet. Create your first post in the <code>posts</code> directory!</p>"
ARCHIVE_EMPTY = "<p>No posts yet.</p>"


@dataclass(frozen=True)
class SiteSettings:
    base_path: str = ""
    site_name: str = "Vignes.Vibe"
    year: str = ""


def post_url(post: Post, base_path: str) -> str:
    return f"{base_path}/posts/{post.slug}.html"


def post_output_path(post: Post) -> Path:
    return Path("posts") / f"{post.slug}.html"


def build_tag_spans(tags: Sequence[str]) -> str:
    return "".join(f'<span class="tag">{html.escape(tag)}</span>' for tag in tags)


def build_post_data(post: Post, settings: SiteSettings) -> dict:
    return {
        "title": html.escape(post.title),
        "date": html.escape(post.date),
        "formattedDate": html.escape(post.formatted_date),
        "tags": [html.escape(tag) for tag in post.tags],
        "content": post.content,
        "basePath": settings.base_path,
        "siteName": html.escape(settings.site_name),
        "year": settings.year,
    }


def render_post_page(template: str, post: Post, settings: SiteSettings) -> str:
    return render(template, build_post_data(post, settings))


def build_post_pages(
    template: str,
    posts: Sequence[Post],
    settings: SiteSettings,
    write: Callable[[Path, str], None],
    workers: int = 1,
) -> list[Path]:
    """Render every post page and hand it to ``write``.

    Returns the output paths, relative to the output directory, in post order.
    """

    def render_one(post: Post) -> Path:
        path = post_output_path(post)
        write(path, render_post_page(template, post, settings))
        return path

    workers = max(1, int(workers or 1))
    if workers <= 1 or len(posts) <= 1:
        return [render_one(post) for post in posts]
    with ThreadPoolExecutor(max_workers=min(workers, len(posts))) as executor:
        return list(executor.map(render_one, posts))


def build_preview(post: Post, base_path: str, archive: bool = False) -> str:
    url = post_url(post, base_path)
    title = html.escape(post.title)
    if archive:
        heading = f'<h3><a href="{url}">{title}</a></h3>'
        css_class = "archive-post"
        read_more = ""
    else:
        heading = f'<h2><a href="{url}">{title}</a></h2>'
        css_class = "post-preview"
        read_more = f'\n        <a href="{url}" class="read-more">Read more →</a>'
    return (
        f'\n      <article class="{css_class}">'
        f"\n        {heading}"
        '\n        <div class="post-meta">'
        f'\n          <time datetime="{html.escape(post.date)}">{html.escape(post.formatted_date)}</time>'
        f"\n          {build_tag_spans(post.tags)}"
        "\n        </div>"
        f'\n        <p class="excerpt">{html.escape(post.excerpt)}</p>'
        f"{read_more}"
        "\n      </article>\n    "
    )


def build_layout(title: str, main: str, settings: SiteSettings) -> str:
    root = settings.base_path
    site_name = html.escape(settings.site_name)
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{html.escape(title)}</title>
    <link rel="stylesheet" href="{root}/css/style.css">
</head>
<body>
    <header>
        <nav>
            <a href="{root}/index.html" class="logo">{site_name}</a>
            <div class="nav-links">
                <a href="{root}/index.html">Home</a>
                <a href="{root}/archive.html">Archive</a>
            </div>
        </nav>
    </header>
    <main>
{main}
    </main>
    <footer>
        <p>&copy; {settings.year} {site_name}. All rights reserved.</p>
    </footer>
</body>
</html>"""


def build_index(posts: Sequence[Post], settings: SiteSettings) -> str:
    recent = posts[:INDEX_LIMIT]
    posts_html = "".join(build_preview(post, settings.base_path) for post in recent)
    site_name = html.escape(settings.site_name)
    main = (
        '        <section class="hero">\n'
        f"            <h1>Welcome to {site_name}</h1>\n"
        "            <p>Thoughts, ideas, and insights from my journey</p>\n"
        "        </section>\n"
        '        <section class="recent-posts">\n'
        "            <h2>Recent Posts</h2>\n"
        f"            {posts_html or INDEX_EMPTY}\n"
        "        </section>"
    )
    return build_layout(f"{settings.site_name} - Personal Blog", main, settings)


def build_archive(posts: Sequence[Post], settings: SiteSettings) -> str:
    posts_html = "".join(build_preview(post, settings.base_path, archive=True) for post in posts)
    main = (
        '        <section class="archive">\n'
        "            <h1>All Posts</h1>\n"
        f"            {posts_html or ARCHIVE_EMPTY}\n"
        "        </section>"
    )
    return build_layout(f"Archive - {settings.site_name}", main, settings)
