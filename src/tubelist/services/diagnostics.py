"""
Diagnostic dumps of payloads the extractor could not understand.
"""

from __future__ import annotations

import logging
import secrets
import time
from pathlib import Path

logger = logging.getLogger(__name__)


def dump_payload(content: str, directory: Path) -> Path | None:
    """
    Write a raw response body to ``directory`` for offline inspection.

    The file is named ``<random>-<unix time>.txt``. Failures to write are
    logged and swallowed so a dump never masks the original error.

    Parameters
    ----------
    content : str
        Raw body to save.
    directory : Path
        Target directory, created if missing.

    Returns
    -------
    Path | None
        Path of the written file, or None if it could not be written.
    """
    path = directory / f"{secrets.token_hex(4)}-{int(time.time())}.txt"
    try:
        directory.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        logger.error("Could not write diagnostic dump to %s: %s", path, e)
        return None

    logger.warning("=" * 60)
    logger.warning("Unsupported response saved to %s", path)
    logger.warning("Please report it with the file attached.")
    logger.warning("=" * 60)
    return path
