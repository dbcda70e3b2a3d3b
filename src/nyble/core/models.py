"""Document tree nodes and page records shared by the parser, renderer, and builders"""

from dataclasses import dataclass, field
import datetime
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict


# --- block tokens ---

@dataclass(frozen=True)
class Heading:
    level: int                      # not clamped; > 5 is rendered as-is with a warning
    inner: list['Inline'] = field(default_factory=list)


@dataclass(frozen=True)
class Paragraph:
    inner: list['Inline'] = field(default_factory=list)


@dataclass(frozen=True)
class CodeBlock:
    lang: Optional[str]             # carried but unused by the renderer
    code: str


# --- inline nodes ---

@dataclass(frozen=True)
class Break:
    pass


@dataclass(frozen=True)
class Text:
    text: str


@dataclass(frozen=True)
class Code:
    code: str


@dataclass(frozen=True)
class Link:
    """A plain link with a literal target."""
    name: Optional[str]
    location: str


@dataclass(frozen=True)
class CrossLink:
    """A link into the wider corpus; no index exists to resolve it yet."""
    name: Optional[str]
    location: str


@dataclass(frozen=True)
class ReferenceLink:
    """A link whose target is looked up by label in the document's reference table."""
    name: Optional[str]
    label: str


Token = Union[Heading, Paragraph, CodeBlock]
Inline = Union[Break, Text, Code, Link, CrossLink, ReferenceLink]
ReferenceTable = Mapping[str, str]


@dataclass
class ParsedDoc:
    """Parser output for one source file; lives only for the duration of its render."""
    path:         Optional[Path]
    frontmatter:  dict[str, Any]
    tokens:       list[Token]
    references:   dict[str, str]    # label as written -> resolved URL


class PageRecord(BaseModel):
    """One rendered source file, handed by value to a collection builder."""
    model_config = ConfigDict(frozen=True)

    filename: str
    title:    str
    date:     Optional[datetime.date] = None
    content:  str                   # rendered HTML
    original: Optional[str] = None  # provenance link, e.g. where the post first appeared

    @property
    def link(self) -> str:
        """Relative output filename for this record (source suffix replaced by .html)."""
        return Path(self.filename).with_suffix('.html').name
