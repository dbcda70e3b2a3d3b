"""Token and inline tree to HTML rendering"""

from pathlib import Path
from typing import Iterable, Optional

from nyble.core.diagnostics import Diagnostics
from nyble.core.models import (
    Break,
    Code,
    CodeBlock,
    CrossLink,
    Heading,
    Inline,
    Link,
    Paragraph,
    ParsedDoc,
    ReferenceLink,
    ReferenceTable,
    Text,
    Token,
)
from nyble.core.parse import parse_file
from nyble.core.utils.escape import htmlspecialchars


MAX_HEADING_LEVEL = 5


def render_tokens(
    tokens: Iterable[Token],
    refs: ReferenceTable,
    diagnostics: Optional[Diagnostics] = None,
    ) -> str:
    """Render block tokens to HTML in input order. Every token produces output."""
    diagnostics = diagnostics if diagnostics is not None else Diagnostics()
    parts = []

    for tok in tokens:
        if isinstance(tok, Heading):
            level = tok.level
            if level > MAX_HEADING_LEVEL:
                diagnostics.warn(
                    f"Heading level {level} is greater than {MAX_HEADING_LEVEL}; emitting <h{level}> anyway"
                )
            parts.append(f"<h{level}>{render_inlines(tok.inner, refs, diagnostics)}</h{level}>")
        elif isinstance(tok, Paragraph):
            parts.append(f"<p>{render_inlines(tok.inner, refs, diagnostics)}</p>")
        elif isinstance(tok, CodeBlock):
            # </pre></code> order is part of the output contract.
            parts.append(f"<pre><code>{tok.code}</pre></code>")
        else:
            raise TypeError(f"Unknown block token: {tok!r}")

    return "".join(parts)


def _render_inline(inl: Inline, refs: ReferenceTable, diagnostics: Diagnostics) -> str:
    """Render a single inline node. Text and code content are trusted as already escaped."""
    if isinstance(inl, Break):
        return "<br>"
    if isinstance(inl, Text):
        return inl.text
    if isinstance(inl, Code):
        return f"<code>{inl.code}</code>"
    if isinstance(inl, Link):
        name = inl.name if inl.name is not None else htmlspecialchars(inl.location)
        return f'<a href="{inl.location}">{name}</a>'
    if isinstance(inl, CrossLink):
        diagnostics.warn(
            f"Cross-document links are not supported: name={inl.name or 'None'} link={inl.location}"
        )
        if inl.name is None:
            return f"{{{inl.location}}}"
        return f"{{{inl.name}|{inl.location}}}"
    if isinstance(inl, ReferenceLink):
        resolved = refs.get(inl.label)
        if resolved is None:
            diagnostics.warn(f"Failed to resolve reference link '{inl.label}'; rendering it as plain text")
            return inl.label
        name = inl.name if inl.name is not None else htmlspecialchars(inl.label)
        return f'<a href="{resolved}">{name}</a>'
    raise TypeError(f"Unknown inline node: {inl!r}")


def render_inlines(
    inlines: Iterable[Inline],
    refs: ReferenceTable,
    diagnostics: Optional[Diagnostics] = None,
    ) -> str:
    """Render inline nodes to an HTML fragment, resolving reference links against refs."""
    diagnostics = diagnostics if diagnostics is not None else Diagnostics()
    return "".join(_render_inline(inl, refs, diagnostics) for inl in inlines)


def render_document(doc: ParsedDoc, diagnostics: Optional[Diagnostics] = None) -> str:
    """Render a parsed document against its own reference table."""
    return render_tokens(doc.tokens, doc.references, diagnostics)


def file_html(path: Path, diagnostics: Optional[Diagnostics] = None) -> str:
    """Parse and render one source file."""
    return render_document(parse_file(path), diagnostics)
