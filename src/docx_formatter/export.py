"""Standalone HTML export of a formatted document."""

from __future__ import annotations

import logging
from pathlib import Path

from jinja2 import Environment, PackageLoader, select_autoescape

from .errors import ExportError


logger = logging.getLogger(__name__)

EXPORT_STYLESHEET = """\
body { font-family: Arial, sans-serif; line-height: 1.5; }
h2 { font-size: 1.5em; margin-top: 1.5em; margin-bottom: 0.5em; font-weight: normal; }
h3 { font-size: 1.3em; margin-top: 1.3em; margin-bottom: 0.5em; font-weight: normal; }
h4 { font-size: 1.1em; margin-top: 1.1em; margin-bottom: 0.5em; font-weight: normal; }
pre { background-color: #f5f5f5; padding: 1em; border-radius: 4px; overflow: auto; }
.code-block-label { background-color: #e0e0e0; padding: 0.5em; border-top-left-radius: 4px; border-top-right-radius: 4px; font-size: 0.9em; }
img { max-width: 100%; }
"""

FOOTER_TEXT = "Processed with Document Formatter"
EXPORT_MEDIA_TYPE = "text/html"

_env = Environment(
    loader=PackageLoader("docx_formatter", "templates"),
    autoescape=select_autoescape(["html"]),
)


def export_filename(file_name: str) -> str:
    """``report.docx`` -> ``report_formatted.html``."""
    name = Path(file_name).name
    stem = Path(name).stem if name.lower().endswith(".docx") else name
    return f"{stem}_formatted.html"


def render_standalone_html(formatted_html: str, file_name: str) -> str:
    """Wrap formatted HTML in a minimal page with an embedded stylesheet."""
    template = _env.get_template("export.html")
    return template.render(
        title=file_name,
        stylesheet=EXPORT_STYLESHEET,
        body=formatted_html,
        footer=FOOTER_TEXT,
    )


def write_export(formatted_html: str, file_name: str, output_dir: str | Path = ".") -> Path:
    """Write the standalone page into ``output_dir`` and return its path."""
    target = Path(output_dir) / export_filename(file_name)
    try:
        target.write_text(render_standalone_html(formatted_html, file_name), encoding="utf-8")
    except OSError as exc:
        logger.error("Could not write %s: %s", target, exc)
        raise ExportError("Failed to download the formatted document.") from exc
    return target
