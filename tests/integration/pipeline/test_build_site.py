"""Integration tests for the site build pipeline"""

import pytest

from nyble.config import Settings
from nyble.core.diagnostics import Diagnostics
from nyble.core.pipeline import run_build, run_render


@pytest.fixture(name="settings")
def settings_fixture(tmp_path):
    return Settings(output_dir=str(tmp_path / "dist"))


def test_run_build_writes_every_output(site_root, settings):
    written = run_build(site_root, settings, Diagnostics())
    out = site_root.parent / "dist"
    names = sorted(p.relative_to(out).as_posix() for p in written)
    assert names == [
        "about.html",
        "index.html",
        "notebook.html",
        "styles/main.css",
        "words/also-older.html",
        "words/index.html",
        "words/newest.html",
        "words/older.html",
    ]


def test_notebook_page_is_rendered(site_root, settings):
    run_build(site_root, settings, Diagnostics())
    html = (site_root.parent / "dist" / "notebook.html").read_text()
    assert '<section id="first"><h1>First</h1><p>See <a href="https://example.com/docs">docs</a>.</p></section>' in html


def test_words_index_is_newest_first_and_stable(site_root, settings):
    """Equal dates keep manifest order below the newer post."""
    run_build(site_root, settings, Diagnostics())
    index = (site_root.parent / "dist" / "words" / "index.html").read_text()
    assert index == (
        "<ul>\n"
        '<li>2023-05-05 <a href="newest.html">Newest</a></li>\n'
        '<li>2021-01-01 <a href="older.html">Older</a></li>\n'
        '<li>2021-01-01 <a href="also-older.html">Also Older</a></li>\n'
        "</ul>\n"
    )


def test_words_post_page(site_root, settings):
    run_build(site_root, settings, Diagnostics())
    post = (site_root.parent / "dist" / "words" / "newest.html").read_text()
    assert "<title>Newest | nyble.dev</title>" in post
    assert "<p>Newest body.</p>" in post
    assert '<footer><a href="https://cohost.org/someone/post/1">on cohost</a></footer>' in post


def test_optional_sections_are_skipped(tmp_path, settings):
    """A root with only static files builds without notebook or words output."""
    root = tmp_path / "bare"
    root.mkdir()
    (root / "index.html").write_text("i")
    (root / "about.html").write_text("a")
    written = run_build(root, settings, Diagnostics())
    assert sorted(p.name for p in written) == ["about.html", "index.html"]


def test_broken_template_is_fatal(site_root, settings):
    (site_root / "notebook.html").write_text("<html>no pattern</html>")
    with pytest.raises(ValueError):
        run_build(site_root, settings, Diagnostics())
    assert not (site_root.parent / "dist" / "notebook.html").exists()


def test_diagnostics_collected_across_pages(site_root, settings):
    (site_root / "notebook" / "second.md").write_text("####### not a heading\n\n{elsewhere}\n")
    diagnostics = Diagnostics()
    run_build(site_root, settings, diagnostics)
    assert len(diagnostics) == 1
    assert diagnostics.messages[0].source.endswith("second.md")


def test_run_render(site_root):
    diagnostics = Diagnostics()
    html = run_render(site_root / "notebook" / "first.md", diagnostics)
    assert html.startswith("<h1>First</h1>")
    assert len(diagnostics) == 0


def test_run_render_missing_file(tmp_path):
    with pytest.raises(RuntimeError, match="Failed to render"):
        run_render(tmp_path / "missing.md", Diagnostics())
