"""MITL file output."""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

MITL_SUFFIX = ".mitl"


def ensure_mitl_suffix(filename: str | Path) -> Path:
    """Append ``.mitl`` unless the name already ends with it."""
    path = Path(filename)
    if path.name.endswith(MITL_SUFFIX):
        return path
    return path.with_name(path.name + MITL_SUFFIX)


def write_mitl_file(mitl_formula: str, filename: str | Path) -> Path | None:
    """
    Write a MITL formula to ``<filename>.mitl`` as UTF-8 text.

    Failure to open or write the file is logged and swallowed: the formula
    is still valid in memory and the caller carries on.

    Args:
        mitl_formula: Formula to write
        filename: Target file name, with or without the ``.mitl`` suffix

    Returns:
        The written path, or ``None`` if the file could not be written
    """
    path = ensure_mitl_suffix(filename)
    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write(mitl_formula)
    except OSError as e:
        logger.error(f"Unable to write to file {path}: {e}")
        return None
    logger.info(f"MITL formula written to {path}")
    return path
