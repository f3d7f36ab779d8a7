"""Utility helpers for the converter."""

from .formatting import format_decimal, is_decimal_text, parse_float
from .io import decode_text, ensure_directory, safe_filename

__all__ = [
    "format_decimal",
    "is_decimal_text",
    "parse_float",
    "decode_text",
    "ensure_directory",
    "safe_filename",
]
