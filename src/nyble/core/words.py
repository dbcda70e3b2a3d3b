"""Dated post collection: one standalone page per post plus a newest-first index"""

import datetime
import logging
from enum import Enum
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, ValidationError

from nyble.config import Settings
from nyble.core.diagnostics import Diagnostics
from nyble.core.models import PageRecord
from nyble.core.parse import parse_file
from nyble.core.render import render_document
from nyble.core.template import Template
from nyble.core.utils.escape import htmlspecialchars


logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d"
WORDS_PATTERN = "words"
INDEX_FILE = "index.html"


class Place(str, Enum):
    unknown = "unknown"
    cohost  = "cohost"


class Original(BaseModel):
    """Where a post was first published."""
    link: str

    @property
    def place(self) -> Place:
        return Place.cohost if self.link.startswith("https://cohost.org") else Place.unknown

    def __str__(self) -> str:
        if self.place == Place.cohost:
            return f'<a href="{self.link}">on cohost</a>'
        return f'here: <a href="{self.link}">{htmlspecialchars(self.link)}</a>'


class WordsEntry(BaseModel):
    file:     str
    title:    str
    date:     datetime.date
    original: Optional[str] = None


class WordsManifest(BaseModel):
    words: list[WordsEntry] = []


def load_manifest(path: Path) -> WordsManifest:
    """Read and validate the posts manifest (YAML)."""
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid {path.name}: {e}") from e
    try:
        return WordsManifest.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid {path.name}: {e}") from e


def record_from_entry(entry: WordsEntry, words_dir: Path, diagnostics: Diagnostics) -> PageRecord:
    path = words_dir / entry.file
    try:
        doc = parse_file(path)
    except (OSError, ValueError) as e:
        raise RuntimeError(f"Failed to render {path}: {e}") from e
    return PageRecord(
        filename=entry.file,
        title=entry.title,
        date=entry.date,
        content=render_document(doc, diagnostics.for_source(path)),
        original=entry.original,
    )


def sort_newest_first(records: list[PageRecord]) -> list[PageRecord]:
    """Descending by date; sorted() is stable, so equal dates keep their manifest order."""
    return sorted(records, key=lambda r: r.date, reverse=True)


class Words:
    def __init__(self, list_template: Template, post_template: Template, records: list[PageRecord], site_name: str):
        self.list_template = list_template
        self.post_template = post_template
        self.records = records
        self.site_name = site_name

    @classmethod
    def from_root(cls, root: Path, settings: Settings, diagnostics: Optional[Diagnostics] = None) -> "Words":
        diagnostics = diagnostics if diagnostics is not None else Diagnostics()
        words_dir = root / settings.words_dir
        manifest = load_manifest(words_dir / settings.words_manifest)
        records = [record_from_entry(e, words_dir, diagnostics) for e in manifest.words]
        return cls(
            list_template=Template.from_file(root / settings.words_list_template),
            post_template=Template.from_file(words_dir / settings.words_template),
            records=records,
            site_name=settings.site_name,
        )

    def render_post(self, record: PageRecord) -> str:
        """Compile the standalone page for one post."""
        doc = self.post_template.copy()
        doc.set("title", f"{record.title} | {self.site_name}")
        doc.set("words_title", record.title)
        doc.set("words_content", record.content)
        if record.original is not None:
            doc.set("original", Original(link=record.original))
        return doc.compile()

    def build(self) -> tuple[dict[str, str], str]:
        """Return ({link: post_html}, index_html), both in newest-first order.

        Two posts that map to the same output page are an error.
        """
        index = self.list_template.copy()
        index.get_pattern(WORDS_PATTERN)
        posts = {}
        for record in sort_newest_first(self.records):
            if record.link in posts:
                raise ValueError(f"Duplicate output page {record.link} (from {record.filename})")
            posts[record.link] = self.render_post(record)
            pat = index.get_pattern(WORDS_PATTERN)
            pat.set("date", record.date.strftime(DATE_FORMAT))
            pat.set("link", record.link)
            pat.set("title", record.title)
            index.append(WORDS_PATTERN, pat)
        return posts, index.compile()

    def output(self, out_dir: Path) -> list[Path]:
        """Write every post and the index. Nothing is written if building fails."""
        posts, index_html = self.build()
        out_dir.mkdir(parents=True, exist_ok=True)
        written = []
        for link, html in posts.items():
            (out_dir / link).write_text(html, encoding="utf-8")
            written.append(out_dir / link)
        (out_dir / INDEX_FILE).write_text(index_html, encoding="utf-8")
        written.append(out_dir / INDEX_FILE)
        logger.info("Wrote %d post(s) and index to %s", len(posts), out_dir)
        return written
