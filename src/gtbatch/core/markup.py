"""Markup wrapping used to keep batch segments apart through the translate service.

The batch endpoint runs in HTML mode and re-segments, trims and sometimes
merges plain text. Wrapping every segment in its own ``<pre>`` block with an
indexed child keeps one translated fragment per input segment, and lets the
decoder tell translated fragments apart from metadata strings in the reply.

    wrap("hello", 0)  ->  '<pre><a i="0">hello</a></pre>'

The service answers with fragments of the same shape, where ``<i>`` children
carry annotations (usually the echoed original) rather than translated text.
"""

from __future__ import annotations

from lxml import etree, html

# Text nodes of every non-annotation child of <pre>
_CONTENT_XPATH = "//pre/*[not(self::i)]//text()"

_ESCAPES = str.maketrans({"&": "&amp;", "<": "&lt;", ">": "&gt;"})


def wrap(text: str, index: int) -> str:
    """Wrap one segment as an indexed markup fragment."""
    return f'<pre><a i="{index}">{text.translate(_ESCAPES)}</a></pre>'


def encode_for_batch(texts: list[str]) -> list[str]:
    """Wrap every segment with its position in the batch."""
    return [wrap(text, i) for i, text in enumerate(texts)]


def unwrap(fragment: str) -> str | None:
    """Extract the translated text from a reply fragment.

    Returns None (not "") when the fragment does not parse or holds no content
    outside annotation nodes, so callers can fall back to the raw value.
    """
    try:
        doc = html.fromstring(fragment)
        nodes = doc.xpath(_CONTENT_XPATH)
    except (etree.ParserError, etree.XPathError, ValueError):
        return None
    if not nodes:
        return None
    return " ".join(str(node) for node in nodes)
