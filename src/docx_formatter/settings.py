from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


DEFAULT_MAX_FILE_SIZE = 5 * 1024 * 1024


@dataclass(frozen=True)
class Settings:
    max_file_size: int = DEFAULT_MAX_FILE_SIZE
    proper_nouns_path: Optional[str] = None
    log_level: str = "WARNING"


def get_settings() -> Settings:
    """Read settings from the environment (and a .env file if present)."""
    load_dotenv()
    raw_size = os.getenv("DOCX_FORMATTER_MAX_FILE_SIZE")
    try:
        max_file_size = int(raw_size) if raw_size else DEFAULT_MAX_FILE_SIZE
    except ValueError:
        raise RuntimeError(f"DOCX_FORMATTER_MAX_FILE_SIZE must be an integer, got {raw_size!r}") from None
    return Settings(
        max_file_size=max_file_size,
        proper_nouns_path=os.getenv("DOCX_FORMATTER_PROPER_NOUNS") or None,
        log_level=os.getenv("DOCX_FORMATTER_LOG_LEVEL", "WARNING").upper(),
    )
