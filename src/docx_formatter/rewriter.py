"""In-place rewrite of a converted document tree into its formatted variant."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping, Optional

from lxml.html import HtmlElement

from .dom import get_body, iter_headings, set_plain_text
from .models import FormattingOptions
from .text import identify_code_language, to_sentence_case


logger = logging.getLogger(__name__)

CAPTION_PREFIX = "Fig:"
CODE_LABEL_CLASS = "code-block-label"
CODE_BLOCK_CLASS = "formatted-code-block"


def rewrite_headings(root: HtmlElement, proper_nouns: Optional[Mapping[str, str]] = None) -> int:
    """Strip inline markup from every heading and sentence-case its text."""
    rewritten = 0
    for heading, _counter in list(iter_headings(root)):
        set_plain_text(heading, to_sentence_case(heading.text_content(), proper_nouns))
        rewritten += 1
    return rewritten


def rewrite_captions(root: HtmlElement) -> int:
    """Prefix the paragraph following each image's block with ``Fig:``.

    Only the element directly after the image's parent is considered, and only
    when it is a ``<p>``.
    """
    rewritten = 0
    for img in list(get_body(root).iter("img")):
        parent = img.getparent()
        caption = parent.getnext() if parent is not None else None
        if caption is None or caption.tag != "p":
            continue
        text = caption.text_content()
        if not text or text.startswith(CAPTION_PREFIX):
            continue
        set_plain_text(caption, f"{CAPTION_PREFIX} {text[0].upper()}{text[1:]}")
        rewritten += 1
    return rewritten


def document_title(root: HtmlElement, file_name: str) -> str:
    """Text of the first h1/h2, falling back to the file name without extension."""
    found = root.xpath("(//h1 | //h2)[1]")
    title = found[0].text_content() if found else ""
    if title:
        return title
    name = Path(file_name)
    return name.stem if name.suffix.lower() == ".docx" else file_name


def label_code_blocks(root: HtmlElement, file_name: str) -> int:
    """Insert a ``<title> Code Block <n>`` label before each ``<pre>``.

    Numbering starts at 1 for every call.
    """
    title = document_title(root, file_name)
    index = 0
    for pre in list(get_body(root).iter("pre")):
        index += 1
        label_text = f"{title} Code Block {index}"
        language = identify_code_language(pre.text_content())
        if language != "plain":
            label_text += f" ({language})"
        label = pre.makeelement("div", {"class": CODE_LABEL_CLASS})
        label.text = label_text
        pre.addprevious(label)
        pre.classes.add(CODE_BLOCK_CLASS)
    return index


class DocumentRewriter:
    """Apply the enabled formatting rules to a parsed document."""

    def __init__(
        self,
        options: Optional[FormattingOptions] = None,
        file_name: str = "",
        proper_nouns: Optional[Mapping[str, str]] = None,
    ):
        self.options = options or FormattingOptions()
        self.file_name = file_name
        self.proper_nouns = proper_nouns

    def rewrite(self, root: HtmlElement) -> HtmlElement:
        if self.options.standardize_headings:
            count = rewrite_headings(root, self.proper_nouns)
            logger.debug("Standardized %d headings", count)
        if self.options.add_caption_prefix:
            count = rewrite_captions(root)
            logger.debug("Prefixed %d image captions", count)
        if self.options.preserve_code_blocks:
            count = label_code_blocks(root, self.file_name)
            logger.debug("Labeled %d code blocks", count)
        return root
