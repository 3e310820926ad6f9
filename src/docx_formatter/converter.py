"""DOCX to HTML conversion backed by mammoth."""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from typing import List

import mammoth

from .dom import DEMOTED_FROM_H5, DEMOTED_FROM_H6, PROMOTED_FROM_H1


# Heading 1 becomes a marked h2, Heading 5/6 become marked h4s.
STYLE_MAP = "\n".join(
    [
        f"p[style-name='Heading 1'] => h2.{PROMOTED_FROM_H1}:fresh",
        f"p[style-name='Heading 5'] => h4.{DEMOTED_FROM_H5}:fresh",
        f"p[style-name='Heading 6'] => h4.{DEMOTED_FROM_H6}:fresh",
    ]
)


@dataclass
class ConvertedDocument:
    html: str
    text: str
    messages: List[str] = field(default_factory=list)


class MammothConverter:
    """Convert raw DOCX bytes into HTML plus a raw text extraction."""

    def __init__(self, style_map: str = STYLE_MAP):
        self.style_map = style_map

    def convert(self, data: bytes) -> ConvertedDocument:
        html_result = mammoth.convert_to_html(io.BytesIO(data), style_map=self.style_map)
        text_result = mammoth.extract_raw_text(io.BytesIO(data))
        messages = [f"{m.type}: {m.message}" for m in html_result.messages]
        return ConvertedDocument(html=html_result.value, text=text_result.value, messages=messages)
