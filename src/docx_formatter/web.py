import logging
import time
from functools import lru_cache
from pathlib import Path
from typing import Dict, Optional
from urllib.parse import quote

from fastapi import FastAPI, File, Form, Request, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import HTMLResponse, JSONResponse, Response
from fastapi.templating import Jinja2Templates

from .errors import ExportError, FormatterError, ValidationError
from .export import EXPORT_MEDIA_TYPE, EXPORT_STYLESHEET, export_filename, render_standalone_html
from .models import FormattingOptions, ProcessingResult
from .pipeline import process_document
from .settings import Settings, get_settings
from .text import load_proper_nouns

BASE_DIR = Path(__file__).resolve().parent
TEMPLATES = Jinja2Templates(directory=str(BASE_DIR / "templates"))

logger = logging.getLogger(__name__)

app = FastAPI(title="Document Formatter")


@lru_cache(maxsize=1)
def _settings() -> Settings:
    return get_settings()


@lru_cache(maxsize=1)
def _proper_nouns() -> Optional[Dict[str, str]]:
    path = _settings().proper_nouns_path
    return load_proper_nouns(path) if path else None


def _error_response(exc: FormatterError, status_code: int = 400) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": exc.message, "error_type": exc.error_type},
    )


async def _process_upload(file: UploadFile, options: FormattingOptions) -> ProcessingResult:
    content = await file.read()
    if not file.filename:
        raise ValidationError("Only Word documents (.docx) are currently supported.", "invalid_file_type")
    return await run_in_threadpool(
        process_document,
        content,
        file.filename,
        options,
        proper_nouns=_proper_nouns(),
        max_file_size=_settings().max_file_size,
    )


def _page_context(request: Request, options: FormattingOptions, **extra) -> Dict:
    context = {
        "request": request,
        "result": None,
        "error": None,
        "error_type": None,
        "options": options,
        "stylesheet": EXPORT_STYLESHEET,
    }
    context.update(extra)
    return context


@app.get("/", response_class=HTMLResponse)
async def index(request: Request):
    return TEMPLATES.TemplateResponse(request, "index.html", _page_context(request, FormattingOptions()))


@app.post("/api/format")
async def api_format(
    file: UploadFile = File(...),
    standardize_headings: bool = Form(True),
    add_caption_prefix: bool = Form(True),
    preserve_code_blocks: bool = Form(True),
):
    """JSON API endpoint for formatting and analysis."""
    start_time = time.time()
    options = FormattingOptions(
        standardize_headings=standardize_headings,
        add_caption_prefix=add_caption_prefix,
        preserve_code_blocks=preserve_code_blocks,
    )
    try:
        result = await _process_upload(file, options)
    except FormatterError as exc:
        return _error_response(exc)
    except Exception as exc:
        logger.exception("Unexpected error while formatting %s", file.filename)
        return JSONResponse(
            status_code=500,
            content={"error": f"An unknown error occurred: {exc}", "error_type": "unknown_error"},
        )

    payload = result.to_dict()
    payload.update(
        {
            "success": True,
            "processing_time": f"{time.time() - start_time:.1f}",
            "export_filename": export_filename(result.content.file_name),
        }
    )
    return JSONResponse(content=payload)


@app.post("/format", response_class=HTMLResponse)
async def format_document(
    request: Request,
    file: UploadFile = File(...),
    standardize_headings: bool = Form(False),
    add_caption_prefix: bool = Form(False),
    preserve_code_blocks: bool = Form(False),
):
    # Unchecked checkboxes are not submitted, so absent means off here.
    options = FormattingOptions(
        standardize_headings=standardize_headings,
        add_caption_prefix=add_caption_prefix,
        preserve_code_blocks=preserve_code_blocks,
    )
    error = None
    error_type = None
    result = None
    try:
        result = await _process_upload(file, options)
    except FormatterError as exc:
        error, error_type = exc.message, exc.error_type
    except Exception as exc:  # pragma: no cover - surface to UI
        logger.exception("Unexpected error while formatting %s", file.filename)
        error_type = "unknown_error"
        error = f"An unknown error occurred: {exc}"

    return TEMPLATES.TemplateResponse(
        request,
        "index.html",
        _page_context(request, options, result=result, error=error, error_type=error_type),
    )


@app.post("/api/export")
async def api_export(
    formatted_html: str = Form(...),
    file_name: str = Form(...),
):
    """Download the formatted HTML wrapped in a standalone page."""
    try:
        page = render_standalone_html(formatted_html, file_name)
    except Exception:
        logger.exception("Export of %s failed", file_name)
        return _error_response(ExportError("Failed to download the formatted document."), status_code=500)
    return Response(
        content=page,
        media_type=EXPORT_MEDIA_TYPE,
        headers={"Content-Disposition": f"attachment; filename*=utf-8''{quote(export_filename(file_name))}"},
    )
