"""Read-only loading of JSON/JSONC files.

A missing, empty or malformed file is an expected state for host
configuration, so these helpers return None instead of raising.
"""

import json
import logging
from pathlib import Path
from typing import Any

from plugpin.jsonc.stripper import strip_jsonc

logger = logging.getLogger(__name__)


def parse_jsonc(text: str) -> Any:
    """Parse JSONC text.

    Raises:
        json.JSONDecodeError: If the text is not valid after stripping.
    """
    return json.loads(strip_jsonc(text))


def read_jsonc_file(path: Path) -> dict[str, Any] | None:
    """Load a JSONC file into a dictionary.

    Args:
        path: File to read.

    Returns:
        Parsed object, or None if the file is missing, empty, unreadable,
        malformed, or its top level is not an object.
    """
    try:
        if not path.is_file():
            return None
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        logger.debug("Cannot read %s: %s", path, e)
        return None

    if not content.strip():
        return None

    try:
        data = parse_jsonc(content)
    except json.JSONDecodeError as e:
        logger.debug("Skipping malformed config %s: %s", path, e)
        return None

    if not isinstance(data, dict):
        logger.debug("Skipping config %s: top level is not an object", path)
        return None
    return data


def read_config(path: Path) -> dict[str, Any] | None:
    """Load a host config, falling back to the ``.jsonc`` sibling of a ``.json`` path."""
    data = read_jsonc_file(path)
    if data is not None:
        return data

    if path.suffix == ".json":
        return read_jsonc_file(path.with_suffix(".jsonc"))
    return None
