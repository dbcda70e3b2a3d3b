"""Frontmatter extraction and markdown-it tokenization into the document tree"""

import re
from pathlib import Path
from typing import Any, Optional

import yaml
from markdown_it import MarkdownIt
from markdown_it.common.utils import normalizeReference
from markdown_it.helpers import parseLinkLabel
from markdown_it.rules_inline import StateInline

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
    Text,
    Token,
)
from nyble.core.utils.escape import htmlspecialchars


FRONTMATTER_RE = re.compile(r'^---\s*\n(.*?)\n---\s*\n', re.DOTALL)

# Only the markdown-it rules whose output maps onto the node vocabulary.
ENABLED_RULES = [
    'heading', 'lheading', 'fence', 'code', 'reference',
    'backticks', 'newline', 'escape', 'link', 'autolink', 'entity',
]
TEXT_TYPES = {'text', 'text_special'}


def _reference_link_rule(state: StateInline, silent: bool) -> bool:
    """Match [name][label] and [label][] without resolving them."""
    start = state.pos
    if state.src[start] != '[':
        return False
    name_end = parseLinkLabel(state, start)
    if name_end < 0:
        return False
    label_start = name_end + 1
    if label_start >= state.posMax or state.src[label_start] != '[':
        return False
    label_end = state.src.find(']', label_start + 1, state.posMax)
    if label_end < 0 or '[' in state.src[label_start + 1:label_end]:
        return False

    text = state.src[start + 1:name_end]
    label = state.src[label_start + 1:label_end]
    if not silent:
        token = state.push('reference_link', '', 0)
        token.meta = {'name': text if label else None, 'label': label or text}
    state.pos = label_end + 1
    return True


def _cross_link_rule(state: StateInline, silent: bool) -> bool:
    """Match {location} and {name|location}."""
    start = state.pos
    if state.src[start] != '{':
        return False
    end = state.src.find('}', start + 1, state.posMax)
    if end < 0:
        return False
    body = state.src[start + 1:end]
    if not body or '{' in body or '\n' in body:
        return False

    if not silent:
        name, sep, location = body.partition('|')
        token = state.push('cross_link', '', 0)
        token.meta = {'name': name, 'location': location} if sep else {'name': None, 'location': body}
    state.pos = end + 1
    return True


def make_parser() -> MarkdownIt:
    """Build the MarkdownIt instance used for every page."""
    md = MarkdownIt('zero').enable(ENABLED_RULES)
    md.inline.ruler.before('link', 'reference_link', _reference_link_rule)
    md.inline.ruler.before('link', 'cross_link', _cross_link_rule)
    return md


def _strip_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Return (frontmatter_dict, body) with YAML header removed."""
    m = FRONTMATTER_RE.match(text)
    if m:
        try:
            fm = yaml.safe_load(m.group(1)) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML frontmatter: {e}") from e
        if not isinstance(fm, dict):
            raise ValueError(f"Invalid YAML frontmatter: expected a mapping, got {type(fm).__name__}")
        return fm, text[m.end():]
    return {}, text


def _link_name(children: list) -> str:
    parts = []
    for c in children:
        if c.type in TEXT_TYPES:
            parts.append(htmlspecialchars(c.content))
        elif c.type == 'code_inline':
            parts.append(f"<code>{htmlspecialchars(c.content)}</code>")
        elif c.type == 'softbreak':
            parts.append('\n')
        else:
            raise ValueError(f"Unsupported token in link text: {c.type}")
    return ''.join(parts)


def _convert_inlines(children: list, labels: list[str]) -> list[Inline]:
    """Convert markdown-it inline children; reference labels seen are appended to labels."""
    inlines: list[Inline] = []
    i = 0
    while i < len(children):
        child = children[i]
        if child.type in TEXT_TYPES:
            inlines.append(Text(htmlspecialchars(child.content)))
        elif child.type == 'code_inline':
            inlines.append(Code(htmlspecialchars(child.content)))
        elif child.type == 'softbreak':
            inlines.append(Text('\n'))
        elif child.type == 'hardbreak':
            inlines.append(Break())
        elif child.type == 'link_open':
            close = next(j for j in range(i + 1, len(children)) if children[j].type == 'link_close')
            name = None if child.markup == 'autolink' else _link_name(children[i + 1:close])
            inlines.append(Link(name=name, location=child.attrGet('href') or ''))
            i = close
        elif child.type == 'reference_link':
            name = child.meta['name']
            labels.append(child.meta['label'])
            inlines.append(ReferenceLink(
                name=htmlspecialchars(name) if name is not None else None,
                label=child.meta['label'],
            ))
        elif child.type == 'cross_link':
            name = child.meta['name']
            inlines.append(CrossLink(
                name=htmlspecialchars(name) if name is not None else None,
                location=htmlspecialchars(child.meta['location']),
            ))
        else:
            raise ValueError(f"Unsupported inline token: {child.type}")
        i += 1
    return inlines


def _convert_tokens(md_tokens: list, labels: list[str]) -> list[Token]:
    """Convert the flat markdown-it block stream into Heading/Paragraph/CodeBlock tokens."""
    tokens: list[Token] = []
    i = 0
    while i < len(md_tokens):
        tok = md_tokens[i]
        if tok.type == 'heading_open':
            inner = _convert_inlines(md_tokens[i + 1].children or [], labels)
            tokens.append(Heading(level=int(tok.tag[1:]), inner=inner))
            i += 3
        elif tok.type == 'paragraph_open':
            inner = _convert_inlines(md_tokens[i + 1].children or [], labels)
            tokens.append(Paragraph(inner=inner))
            i += 3
        elif tok.type in ('fence', 'code_block'):
            lang = tok.info.strip().split(maxsplit=1)[0] if tok.info.strip() else None
            tokens.append(CodeBlock(lang=lang, code=htmlspecialchars(tok.content)))
            i += 1
        else:
            raise ValueError(f"Unsupported block token: {tok.type}")
    return tokens


def build_reference_table(labels: list[str], env: dict) -> dict[str, str]:
    """Map each label as written to the href of its definition, when one exists."""
    defined = env.get('references', {})
    table = {}
    for label in labels:
        ref = defined.get(normalizeReference(label))
        if ref is not None:
            table[label] = ref['href']
    return table


def parse_text(text: str, path: Optional[Path] = None) -> ParsedDoc:
    """Parse source text (with optional frontmatter) into a ParsedDoc."""
    frontmatter, body = _strip_frontmatter(text)
    env: dict = {}
    md_tokens = make_parser().parse(body, env)
    labels: list[str] = []
    tokens = _convert_tokens(md_tokens, labels)
    return ParsedDoc(
        path=path,
        frontmatter=frontmatter,
        tokens=tokens,
        references=build_reference_table(labels, env),
    )


def parse_file(path: Path) -> ParsedDoc:
    """Parse a single source file into a ParsedDoc."""
    return parse_text(path.read_text(encoding='utf-8'), path)
