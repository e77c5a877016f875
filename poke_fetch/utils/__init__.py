"""
Utility modules for the poke_fetch library.

This package contains the pure URL helpers used to build and parse catalog
URLs, and the in-flight request de-duplication used by the resolver.
"""

from .deduplication import PendingRequest, RequestDeduplicator, RequestKey
from .url import (
    build_paged_url,
    extract_id_or_name_segment,
    extract_kind_segment,
    extract_offset,
    extract_trailing_id,
    normalize_resource_name,
)

__all__ = [
    # URL utilities
    "build_paged_url",
    "extract_id_or_name_segment",
    "extract_kind_segment",
    "extract_offset",
    "extract_trailing_id",
    "normalize_resource_name",
    # De-duplication
    "PendingRequest",
    "RequestDeduplicator",
    "RequestKey",
]
