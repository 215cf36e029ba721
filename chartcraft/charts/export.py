"""File naming for PNG/PDF exports of the rendered chart region."""

from __future__ import annotations

import re

from chartcraft.config import EXPORT_DEFAULT_NAME, EXPORT_FORMATS

_WHITESPACE_RE = re.compile(r"\s+")


def export_stem(title: str) -> str:
    """Title with whitespace runs replaced by underscores, or the default name."""
    return _WHITESPACE_RE.sub("_", title) or EXPORT_DEFAULT_NAME


def export_filename(title: str, fmt: str) -> str:
    """
    Download filename for an export.

    >>> export_filename("Ventas 2024", "png")
    'Ventas_2024.png'
    >>> export_filename("", "pdf")
    'grafico.pdf'
    """
    fmt = fmt.lower().lstrip(".")
    if fmt not in EXPORT_FORMATS:
        raise ValueError(f"Unsupported export format: {fmt!r} (expected one of {EXPORT_FORMATS})")
    return f"{export_stem(title)}.{fmt}"
