"""HTML escaping for link targets and display text"""


_HTML_ESCAPES = str.maketrans({
    '<': '&lt;',
    '>': '&gt;',
    '&': '&amp;',
    "'": '&apos;',
    '"': '&quot;',
})


def htmlspecialchars(raw: str) -> str:
    """Escape the five HTML-significant characters in a single pass.

    Not idempotent: escaping '&amp;' again yields '&amp;amp;'. Apply once per raw string.
    """
    return raw.translate(_HTML_ESCAPES)
