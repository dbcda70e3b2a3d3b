"""Slug generation for page anchors"""

import re


def slugify(text: str) -> str:
    """Convert a file stem or title to a lowercase, hyphen-separated anchor id."""
    text = re.sub(r'[^\w\s-]', '', text.lower())
    text = re.sub(r'[\s_]+', '-', text)
    return re.sub(r'-+', '-', text).strip('-')
