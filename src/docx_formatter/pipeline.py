"""End-to-end processing of one uploaded document."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping, Optional, Protocol

from .analyzer import analyze_document
from .converter import ConvertedDocument, MammothConverter
from .dom import body_text, parse_html, serialize_body
from .errors import ConversionError, ValidationError
from .models import DocumentContent, FormattingOptions, ProcessingResult, TextPair
from .rewriter import DocumentRewriter
from .settings import DEFAULT_MAX_FILE_SIZE


logger = logging.getLogger(__name__)

ALLOWED_EXTENSION = ".docx"


class Converter(Protocol):
    def convert(self, data: bytes) -> ConvertedDocument:
        ...


def validate_upload(data: bytes, file_name: Optional[str], max_file_size: int = DEFAULT_MAX_FILE_SIZE) -> None:
    """Reject oversized or non-DOCX uploads before conversion."""
    size = len(data)
    if size > max_file_size:
        raise ValidationError(
            f"File size must be less than {max_file_size / 1024 / 1024:.0f}MB "
            f"(got {size / 1024 / 1024:.1f}MB).",
            error_type="file_too_large",
        )
    if not file_name or not file_name.lower().endswith(ALLOWED_EXTENSION):
        raise ValidationError(
            "Only Word documents (.docx) are currently supported.",
            error_type="invalid_file_type",
        )


def process_document(
    data: bytes,
    file_name: str,
    options: Optional[FormattingOptions] = None,
    converter: Optional[Converter] = None,
    proper_nouns: Optional[Mapping[str, str]] = None,
    max_file_size: int = DEFAULT_MAX_FILE_SIZE,
) -> ProcessingResult:
    """Convert, analyze and rewrite a DOCX upload.

    Either a full ``ProcessingResult`` is returned or an error is raised;
    nothing partial escapes.
    """
    validate_upload(data, file_name, max_file_size)
    options = options or FormattingOptions()
    converter = converter or MammothConverter()

    try:
        converted = converter.convert(data)
    except Exception as exc:
        logger.exception("Conversion of %s failed", file_name)
        raise ConversionError(
            "Failed to process document. The file may be corrupted or not a valid DOCX file."
        ) from exc
    for message in converted.messages:
        logger.warning("%s: %s", file_name, message)

    root = parse_html(converted.html)
    analysis = analyze_document(root)
    DocumentRewriter(options, file_name=file_name, proper_nouns=proper_nouns).rewrite(root)

    content = DocumentContent(
        original=TextPair(html=converted.html, text=converted.text),
        formatted=TextPair(html=serialize_body(root), text=body_text(root)),
        file_name=file_name,
    )
    logger.info(
        "Processed %s: %d headings, %d images, %d code blocks",
        file_name,
        analysis.heading_counts.total(),
        analysis.total_images,
        analysis.code_block_count,
    )
    return ProcessingResult(content=content, analysis=analysis, messages=list(converted.messages))


def load_document(path: str | Path, options: Optional[FormattingOptions] = None, **kwargs) -> ProcessingResult:
    path = Path(path)
    return process_document(path.read_bytes(), path.name, options, **kwargs)
