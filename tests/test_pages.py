import datetime as dt
import re
from pathlib import Path

from vibeblog.content import Post
from vibeblog.defaults import POST_TEMPLATE
from vibeblog.pages import (
    ARCHIVE_EMPTY,
    INDEX_EMPTY,
    SiteSettings,
    build_archive,
    build_index,
    build_post_pages,
    render_post_page,
)


def make_posts(count: int) -> list[Post]:
    posts = []
    for day in range(count, 0, -1):
        posts.append(
            Post(
                slug=f"post-{day}",
                filename=f"post-{day}.md",
                front_matter={"title": f"Post {day}", "date": f"2025-01-{day:02d}", "tags": ["news"]},
                content=f"<p>Body {day}</p>",
                excerpt=f"Excerpt {day}",
                published=dt.datetime(2025, 1, day),
            )
        )
    return posts


def internal_links(document: str) -> list[str]:
    return re.findall(r'(?:href|src)="([^"#][^"]*)"', document)


def test_post_page_fields():
    (post,) = make_posts(1)
    page = render_post_page(POST_TEMPLATE, post, SiteSettings(year="2025"))
    assert "<h1>Post 1</h1>" in page
    assert '<time datetime="2025-01-01">January 1, 2025</time>' in page
    assert '<span class="tag">news</span>' in page
    assert "<p>Body 1</p>" in page
    assert "&copy; 2025 Vignes.Vibe" in page


def test_post_page_untitled_default():
    post = Post(slug="x", filename="x.md", content="<p>hi</p>")
    page = render_post_page("<h1>{{title}}</h1>{{#tags}}<i>{{.}}</i>{{/tags}}{{content}}", post, SiteSettings())
    assert page == "<h1>Untitled</h1><p>hi</p>"


def test_post_page_escapes_front_matter():
    post = Post(slug="x", filename="x.md", front_matter={"title": "<script>", "tags": ["a&b"]})
    page = render_post_page(POST_TEMPLATE, post, SiteSettings())
    assert "<script>" not in page
    assert "&lt;script&gt;" in page
    assert '<span class="tag">a&amp;b</span>' in page


def test_build_post_pages_writes_each_post():
    written = {}
    posts = make_posts(3)
    paths = build_post_pages("{{title}}", posts, SiteSettings(), written.__setitem__, workers=2)
    assert paths == [Path("posts/post-3.html"), Path("posts/post-2.html"), Path("posts/post-1.html")]
    assert written[Path("posts/post-2.html")] == "Post 2"


def test_index_caps_at_five_posts():
    posts = make_posts(7)
    index = build_index(posts, SiteSettings())
    assert index.count('class="post-preview"') == 5
    assert "Post 7" in index
    assert "Post 3" in index
    assert "Post 2<" not in index
    assert index.count('class="read-more"') == 5


def test_archive_includes_all_posts():
    posts = make_posts(7)
    archive = build_archive(posts, SiteSettings())
    assert archive.count('class="archive-post"') == 7
    assert "<h3>" in archive
    assert "read-more" not in archive


def test_empty_pages_use_placeholders():
    assert INDEX_EMPTY in build_index([], SiteSettings())
    assert ARCHIVE_EMPTY in build_archive([], SiteSettings())


def test_preview_contents():
    (post,) = make_posts(1)
    index = build_index([post], SiteSettings())
    assert '<h2><a href="/posts/post-1.html">Post 1</a></h2>' in index
    assert '<p class="excerpt">Excerpt 1</p>' in index
    assert '<a href="/posts/post-1.html" class="read-more">Read more →</a>' in index


def test_base_path_prefixes_every_link():
    settings = SiteSettings(base_path="/sub")
    posts = make_posts(2)
    documents = [
        build_index(posts, settings),
        build_archive(posts, settings),
        render_post_page(POST_TEMPLATE, posts[0], settings),
    ]
    for document in documents:
        links = internal_links(document)
        assert links
        assert all(link.startswith("/sub/") for link in links)
        assert 'href="/sub/css/style.css"' in document
