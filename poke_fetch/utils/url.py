"""
URL parsing and construction utilities.

Pure functions over navigation URLs returned by the catalog API. Parsers never
raise on malformed input; they return ``None`` when the URL does not have the
expected shape.
"""

from __future__ import annotations

import re
from typing import Optional
from urllib.parse import urlencode

# Query string containing an offset parameter; value stops at '#', '&' or '?'
_OFFSET_PATTERN = re.compile(r"^.*(\?)(.*offset=)([^#&?]*).*")

# .../api/v2/<kind>/<idOrName>/<suffix>
_RESOURCE_PATH_PATTERN = re.compile(r"api/v2/([^/?#]+)/([^/?#]+)/")

_TRAILING_ID_PATTERN = re.compile(r"[0-9]+")


def extract_offset(url: Optional[str]) -> Optional[str]:
    """
    Extract the ``offset`` query parameter value from a page URL.

    Args:
        url: Absolute page URL, e.g. a page's ``next`` link

    Returns:
        The raw offset value, or None if the URL is empty or has no offset
    """
    if not url:
        return None

    match = _OFFSET_PATTERN.match(url)
    if match is None:
        return None
    return match.group(3)


def extract_kind_segment(url: Optional[str]) -> Optional[str]:
    """Return ``<kind>`` from ``.../api/v2/<kind>/<idOrName>/...``, else None."""
    if not url:
        return None

    match = _RESOURCE_PATH_PATTERN.search(url)
    return match.group(1) if match else None


def extract_id_or_name_segment(url: Optional[str]) -> Optional[str]:
    """Return ``<idOrName>`` from ``.../api/v2/<kind>/<idOrName>/...``, else None."""
    if not url:
        return None

    match = _RESOURCE_PATH_PATTERN.search(url)
    return match.group(2) if match else None


def extract_trailing_id(url: Optional[str]) -> Optional[int]:
    """
    Parse the numeric id from the last path segment of a navigation URL.

    Navigation links always end in ``/<id>/``. Trailing slashes are stripped
    before the last segment is read.

    Args:
        url: Navigation URL

    Returns:
        The integer id, or None if the last segment is not a decimal integer
    """
    if not url:
        return None

    trimmed = url.rstrip("/")
    segment = trimmed[trimmed.rfind("/") + 1 :]
    if not _TRAILING_ID_PATTERN.fullmatch(segment):
        return None
    return int(segment)


def build_paged_url(
    base_path: str, limit: Optional[int] = None, offset: Optional[int] = None
) -> str:
    """
    Append pagination parameters to a collection path.

    Parameters are only added when provided, ``limit`` before ``offset``.

    Args:
        base_path: Collection path or URL, e.g. ``pokemon/``
        limit: Page size
        offset: Index of the first result

    Returns:
        The path with a query string, or ``base_path`` unchanged
    """
    params = []
    if limit is not None:
        params.append(("limit", limit))
    if offset is not None:
        params.append(("offset", offset))

    if not params:
        return base_path

    separator = "&" if "?" in base_path else "?"
    return f"{base_path}{separator}{urlencode(params)}"


def normalize_resource_name(name: str) -> str:
    """
    Convert a display name into the API's slug form.

    Lower-cases the name, replaces spaces with hyphens and drops apostrophes
    and periods, so ``"Mr. Mime"`` becomes ``"mr-mime"`` and ``"Farfetch'd"``
    becomes ``"farfetchd"``. Gendered names such as Nidoran are not mapped.
    """
    return name.replace(" ", "-").replace("'", "").replace(".", "").lower()
