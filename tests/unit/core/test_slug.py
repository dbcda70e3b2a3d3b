"""Unit tests for core/utils/slug.py"""

import pytest

from nyble.core.utils.slug import slugify


@pytest.mark.parametrize("text,expected", [
    ("Hello World", "hello-world"),
    ("my_file_name", "my-file-name"),
    ("  leading and trailing  ", "leading-and-trailing"),
    ("multiple---hyphens", "multiple-hyphens"),
    ("Special! Ch@rs#", "special-chrs"),
    ("", ""),
])
def test_slugify_basic(text, expected):
    """slugify converts text to lowercase hyphenated anchor ids."""
    assert slugify(text) == expected


def test_slugify_strips_leading_trailing_hyphens():
    """slugify never starts an anchor id with a hyphen."""
    assert not slugify("!leading").startswith("-")
