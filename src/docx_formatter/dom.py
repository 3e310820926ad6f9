"""Helpers around the lxml tree built from converted HTML."""

from __future__ import annotations

from typing import Iterator, Optional, Tuple

from lxml import etree, html as lxml_html
from lxml.html import HtmlElement

from .errors import ConversionError


# Marker classes the converter attaches to remapped headings.
PROMOTED_FROM_H1 = "converted-h1"
DEMOTED_FROM_H5 = "converted-h5"
DEMOTED_FROM_H6 = "converted-h6"

HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")
BLOCK_TAGS = frozenset(HEADING_TAGS + ("p", "pre", "div", "li", "td", "th", "blockquote", "dt", "dd"))


def parse_html(markup: str) -> HtmlElement:
    """Parse an HTML fragment into a full document tree (html > body)."""
    try:
        # Images arrive as data URIs that can exceed libxml2's default 10 MB node limit.
        parser = lxml_html.HTMLParser(huge_tree=True)
        return lxml_html.document_fromstring(f"<html><body>{markup}</body></html>", parser=parser)
    except (etree.ParserError, ValueError) as exc:
        raise ConversionError("Failed to parse converted HTML.") from exc


def get_body(root: HtmlElement) -> HtmlElement:
    body = root.find("body")
    return body if body is not None else root


def serialize_body(root: HtmlElement) -> str:
    """Return the inner HTML of the document body."""
    body = get_body(root)
    parts = [body.text or ""]
    for child in body:
        parts.append(lxml_html.tostring(child, encoding="unicode", with_tail=True))
    return "".join(parts)


def _block_texts(el: HtmlElement) -> Iterator[str]:
    for child in el:
        if not isinstance(child.tag, str):
            continue
        if any(isinstance(d.tag, str) and d.tag in BLOCK_TAGS for d in child.iterdescendants()):
            yield child.text or ""
            yield from _block_texts(child)
        else:
            yield child.text_content()


def body_text(root: HtmlElement) -> str:
    """Plain text of the body with block elements separated by blank lines."""
    texts = (text.strip() for text in _block_texts(get_body(root)))
    return "\n\n".join(text for text in texts if text)


def class_names(el: HtmlElement) -> Tuple[str, ...]:
    return tuple((el.get("class") or "").split())


def heading_counter(el: HtmlElement) -> Optional[str]:
    """Name of the heading counter an element contributes to, if any.

    Marker classes take precedence over the tag so a converted heading is
    attributed to its source level.
    """
    if not isinstance(el.tag, str):
        return None
    classes = class_names(el)
    if PROMOTED_FROM_H1 in classes:
        return "h1"
    # h5_plus, not h4: these feed the "H5+ converted to H4" issue.
    if DEMOTED_FROM_H5 in classes or DEMOTED_FROM_H6 in classes:
        return "h5_plus"
    tag = el.tag.lower()
    if tag in ("h5", "h6"):
        return "h5_plus"
    if tag in HEADING_TAGS:
        return tag
    return None


def iter_headings(root: HtmlElement) -> Iterator[Tuple[HtmlElement, str]]:
    """Yield ``(element, counter)`` for heading-bearing elements in document order."""
    for el in get_body(root).iter():
        counter = heading_counter(el)
        if counter is not None:
            yield el, counter


def set_plain_text(el: HtmlElement, text: str) -> None:
    """Drop all child markup of ``el`` and replace it with a single text node."""
    for child in list(el):
        el.remove(child)
    el.text = text


def has_ancestor(el: HtmlElement, tag: str) -> bool:
    return next(el.iterancestors(tag), None) is not None
