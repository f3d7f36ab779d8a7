"""File IO utilities."""

from __future__ import annotations

import logging
import os
import unicodedata
from pathlib import Path

import chardet

logger = logging.getLogger(__name__)


def decode_text(raw: bytes) -> str:
    """Decode ``raw`` as UTF-8, falling back to a detected encoding."""

    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError:
        detection = chardet.detect(raw)
        encoding = detection.get("encoding") or "utf-8"
        logger.warning("Payload is not valid UTF-8; decoding as %s", encoding)
        return raw.decode(encoding, errors="replace")


def safe_filename(filename: str) -> str:
    """Return a filesystem safe filename."""

    normalized = unicodedata.normalize("NFKD", filename)
    sanitized = [c for c in normalized if c.isalnum() or c in {"-", "_", "."}]
    return "".join(sanitized)


def ensure_directory(path: os.PathLike[str] | str) -> Path:
    directory = Path(path)
    directory.mkdir(parents=True, exist_ok=True)
    return directory
