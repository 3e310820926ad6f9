"""
Convert DOCX files to HTML, normalize their structure (headings, image
captions, code blocks) and report summary statistics about them.
"""

from .analyzer import analyze_document
from .errors import ConversionError, ExportError, FormatterError, ValidationError
from .models import AnalysisResult, DocumentContent, FormattingOptions, HeadingCounts, ProcessingResult
from .pipeline import load_document, process_document
from .rewriter import DocumentRewriter
from .text import identify_code_language, to_sentence_case

__all__ = [
    "AnalysisResult",
    "ConversionError",
    "DocumentContent",
    "DocumentRewriter",
    "ExportError",
    "FormattingOptions",
    "FormatterError",
    "HeadingCounts",
    "ProcessingResult",
    "ValidationError",
    "analyze_document",
    "identify_code_language",
    "load_document",
    "process_document",
    "to_sentence_case",
]
