"""Root test configuration: a sample site source tree shared by integration tests"""

import pytest


NOTEBOOK_TEMPLATE = """\
<html><body>
{{ patterns.page }}</body></html>
{% macro page(name, content) %}
<section id="{{ name }}">{{ content }}</section>
{% endmacro %}
"""

WORDS_LIST_TEMPLATE = """\
<ul>
{{ patterns.words }}</ul>
{% macro words(date, link, title) %}
<li>{{ date }} <a href="{{ link }}">{{ title }}</a></li>
{% endmacro %}
"""

WORDS_POST_TEMPLATE = """\
<title>{{ title }}</title>
<h1>{{ words_title }}</h1>
{{ words_content }}
<footer>{{ original }}</footer>
"""

WORDS_MANIFEST = """\
words:
  - file: older.md
    title: Older
    date: 2021-01-01
  - file: newest.md
    title: Newest
    date: 2023-05-05
    original: https://cohost.org/someone/post/1
  - file: also-older.md
    title: Also Older
    date: 2021-01-01
"""


@pytest.fixture(name="site_root")
def site_root_fixture(tmp_path):
    """A minimal site source tree: static files, a notebook, and three dated posts."""
    root = tmp_path / "site"
    root.mkdir()
    (root / "index.html").write_text("<h1>home</h1>")
    (root / "about.html").write_text("<h1>about</h1>")
    (root / "styles").mkdir()
    (root / "styles" / "main.css").write_text("body {}")

    (root / "notebook.html").write_text(NOTEBOOK_TEMPLATE)
    (root / "notebook").mkdir()
    (root / "notebook" / "first.md").write_text("# First\n\nSee [docs][ref].\n\n[ref]: https://example.com/docs\n")

    (root / "words.html").write_text(WORDS_LIST_TEMPLATE)
    words = root / "words"
    words.mkdir()
    (words / "words.html").write_text(WORDS_POST_TEMPLATE)
    (words / "words.yaml").write_text(WORDS_MANIFEST)
    (words / "older.md").write_text("Older body.\n")
    (words / "newest.md").write_text("Newest body.\n")
    (words / "also-older.md").write_text("Also older body.\n")
    return root
