"""HTML pages of the web view, rendered from in-memory Jinja templates."""

from __future__ import annotations

from typing import Any

from jinja2 import DictLoader, Environment, StrictUndefined, select_autoescape

_BASE = """<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>{% block title %}sipp{% endblock %}</title>
  <link rel="stylesheet" href="/static/highlight.css">
  <style>
    body { font-family: system-ui, sans-serif; max-width: 60rem; margin: 2rem auto; padding: 0 1rem; }
    nav a { margin-right: 1rem; }
    textarea, input[type=text] { width: 100%; font-family: monospace; }
    textarea { min-height: 20rem; }
    .error { color: #c0392b; }
    .highlight pre { padding: 1rem; overflow-x: auto; }
  </style>
</head>
<body>
  <nav><a href="/">New snippet</a><a href="/about">About</a></nav>
  {% block body %}{% endblock %}
</body>
</html>
"""

_INDEX = """{% extends "base.html" %}
{% block body %}
<h1>New snippet</h1>
{% if error %}<p class="error">{{ error }}</p>{% endif %}
<form method="post" action="/snippets">
  <p><label>Name<br><input type="text" name="name" value="{{ name }}" placeholder="hello.py" required></label></p>
  <p><label>Content<br><textarea name="content">{{ content }}</textarea></label></p>
  <p><button type="submit">Create</button></p>
</form>
{% endblock %}
"""

_SNIPPET = """{% extends "base.html" %}
{% block title %}{{ name }} · sipp{% endblock %}
{% block body %}
<h1>{{ name }}</h1>
{{ highlighted | safe }}
<details><summary>Raw</summary><pre>{{ content }}</pre></details>
{% endblock %}
"""

_ABOUT = """{% extends "base.html" %}
{% block title %}About · sipp{% endblock %}
{% block body %}
<h1>About</h1>
<p>sipp is a small personal snippet store with a terminal client and this web view.</p>
<p>Every snippet gets a short link of the form <code>/s/&lt;id&gt;</code>.</p>
{% endblock %}
"""

_NOT_FOUND = """{% extends "base.html" %}
{% block title %}Not found · sipp{% endblock %}
{% block body %}<h1>Snippet not found</h1>{% endblock %}
"""

TEMPLATES = {
    "base.html": _BASE,
    "index.html": _INDEX,
    "snippet.html": _SNIPPET,
    "about.html": _ABOUT,
    "not_found.html": _NOT_FOUND,
}

_ENV = Environment(
    loader=DictLoader(TEMPLATES),
    autoescape=select_autoescape(["html"]),
    undefined=StrictUndefined,
)


def render(template: str, **context: Any) -> str:
    return _ENV.get_template(template).render(**context)


__all__ = ["TEMPLATES", "render"]
