from .search import (
    Credentials,
    FileObject,
    SearchRequest,
    SearchResult,
    SlugPayload,
    StoreSettings,
)

__all__ = [
    "Credentials",
    "FileObject",
    "SearchRequest",
    "SearchResult",
    "SlugPayload",
    "StoreSettings",
]
