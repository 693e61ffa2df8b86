from __future__ import annotations

POST_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{{title}} - {{siteName}}</title>
    <link rel="stylesheet" href="{{basePath}}/css/style.css">
</head>
<body>
    <header>
        <nav>
            <a href="{{basePath}}/index.html" class="logo">{{siteName}}</a>
            <div class="nav-links">
                <a href="{{basePath}}/index.html">Home</a>
                <a href="{{basePath}}/archive.html">Archive</a>
            </div>
        </nav>
    </header>
    <main>
        <article class="post">
            <header class="post-header">
                <h1>{{title}}</h1>
                <div class="post-meta">
                    <time datetime="{{date}}">{{formattedDate}}</time>
                    {{#tags}}<span class="tag">{{.}}</span>{{/tags}}
                </div>
            </header>
            <div class="post-content">
                {{content}}
            </div>
        </article>
    </main>
    <footer>
        <p>&copy; {{year}} {{siteName}}. All rights reserved.</p>
    </footer>
</body>
</html>"""

PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{{siteName}}</title>
    <link rel="stylesheet" href="{{basePath}}/css/style.css">
</head>
<body>
    {{content}}
</body>
</html>"""

TEMPLATES = {
    "post.html": POST_TEMPLATE,
}

STYLESHEET = """:root {
  --text: #1f2328;
  --muted: #656d76;
  --accent: #0969da;
  --border: #d0d7de;
  --bg: #ffffff;
  --tag-bg: #ddf4ff;
}

* {
  box-sizing: border-box;
}

body {
  margin: 0;
  font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Helvetica, Arial, sans-serif;
  line-height: 1.6;
  color: var(--text);
  background: var(--bg);
}

header nav {
  display: flex;
  justify-content: space-between;
  align-items: center;
  max-width: 800px;
  margin: 0 auto;
  padding: 1rem;
  border-bottom: 1px solid var(--border);
}

a {
  color: var(--accent);
  text-decoration: none;
}

a:hover {
  text-decoration: underline;
}

.logo {
  font-weight: 700;
  font-size: 1.25rem;
  color: var(--text);
}

.nav-links a {
  margin-left: 1rem;
}

main {
  max-width: 800px;
  margin: 0 auto;
  padding: 1rem;
}

.hero {
  padding: 2rem 0;
  text-align: center;
}

.post-preview,
.archive-post {
  padding: 1rem 0;
  border-bottom: 1px solid var(--border);
}

.post-meta {
  color: var(--muted);
  font-size: 0.9rem;
}

.tag {
  display: inline-block;
  margin-left: 0.5rem;
  padding: 0 0.5rem;
  border-radius: 999px;
  background: var(--tag-bg);
  font-size: 0.8rem;
}

.excerpt {
  color: var(--muted);
}

.post-content pre {
  overflow-x: auto;
  padding: 1rem;
  background: #f6f8fa;
  border-radius: 6px;
}

.post-content table {
  border-collapse: collapse;
}

.post-content th,
.post-content td {
  padding: 0.25rem 0.75rem;
  border: 1px solid var(--border);
}

footer {
  max-width: 800px;
  margin: 2rem auto;
  padding: 1rem;
  color: var(--muted);
  text-align: center;
  border-top: 1px solid var(--border);
}
"""


def default_template(name: str) -> str:
    return TEMPLATES.get(name, PAGE_TEMPLATE)
