"""Freeform page collection: every notebook file rendered into one page"""

from pathlib import Path
from typing import Optional

from nyble.core.diagnostics import Diagnostics
from nyble.core.models import PageRecord
from nyble.core.parse import parse_file
from nyble.core.render import render_document
from nyble.core.template import Template
from nyble.core.utils.slug import slugify


PAGE_PATTERN = "page"


def page_from_file(path: Path, diagnostics: Diagnostics) -> PageRecord:
    """Render one notebook file. Title comes from frontmatter, else the file stem."""
    try:
        doc = parse_file(path)
    except (OSError, ValueError) as e:
        raise RuntimeError(f"Failed to render {path}: {e}") from e
    content = render_document(doc, diagnostics.for_source(path))
    return PageRecord(
        filename=path.name,
        title=str(doc.frontmatter.get("title") or path.stem),
        content=content,
    )


class Notebook:
    """Fills one 'page' pattern per record, in the order the records were given."""

    def __init__(self, template: Template, pages: list[PageRecord]):
        self.template = template
        self.pages = pages

    @classmethod
    def from_dir(cls, template_path: Path, pages_dir: Path, diagnostics: Optional[Diagnostics] = None) -> "Notebook":
        """Load the template and render every regular file in pages_dir, in listing order."""
        diagnostics = diagnostics if diagnostics is not None else Diagnostics()
        template = Template.from_file(template_path)
        pages = []
        for entry in pages_dir.iterdir():
            if not entry.is_file():
                diagnostics.warn(f"Skipping notebook entry {entry}: not a regular file")
                continue
            pages.append(page_from_file(entry, diagnostics))
        return cls(template, pages)

    def compile(self) -> str:
        """Fill a copy of the template so repeated calls give the same output."""
        template = self.template.copy()
        # Fails here, before any page is filled, when the template has no page pattern.
        template.get_pattern(PAGE_PATTERN)
        for page in self.pages:
            pat = template.get_pattern(PAGE_PATTERN)
            pat.set("content", page.content)
            pat.set("name", slugify(Path(page.filename).stem))
            pat.set("title", page.title)
            template.append(PAGE_PATTERN, pat)
        return template.compile()

    def output(self, path: Path) -> Path:
        content = self.compile()
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path
