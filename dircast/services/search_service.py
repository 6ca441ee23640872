"""
Search Service Module

Lists the objects in the configured bucket that match a search, signs a
download URL for each one and returns them in a stable order.

Failures never escape ``search``: a missing bucket setting skips the search,
and a store that cannot be listed yields a failed ``SearchResult``. Both end up
as an empty list at the response boundary (``search_objects``).
"""

import logging
from typing import List

from botocore.exceptions import BotoCoreError, ClientError

from dircast.models import FileObject, SearchResult, StoreSettings
from dircast.util.s3_client import get_s3_client, list_objects, presign_get

logger = logging.getLogger(__name__)


def object_name(key: str) -> str:
    """Display name of an object: the last segment of its key."""
    return key.rstrip("/").rsplit("/", 1)[-1] or key


def _to_file_object(client, obj: dict, settings: StoreSettings) -> FileObject:
    key = obj["Key"]
    signed_url = presign_get(client, settings.bucket, key, expires_in=settings.url_expiry_seconds)
    etag = obj.get("ETag")
    return FileObject(
        name=object_name(key),
        signed_url=signed_url,
        key=key,
        size_bytes=int(obj.get("Size", 0)),
        entity_tag=etag.strip('"') if etag else None,
        mime_type=settings.mime_type,
    )


def search(query: str, settings: StoreSettings, client=None) -> SearchResult:
    """
    Search the bucket for keys containing ``query``.

    Args:
        query: Substring to look for in object keys. An empty query matches everything.
        settings: Store identity and signing settings.
        client: Optional pre-built S3 client; one is created from settings otherwise.

    Returns:
        SearchResult sorted ascending by object name.
    """
    if not settings.bucket:
        logger.warning("No bucket configured, skipping search")
        return SearchResult(status="skipped")

    try:
        if client is None:
            client = get_s3_client(settings)
        listing = [obj for obj in list_objects(client, settings.bucket) if query in obj["Key"]]
    except (BotoCoreError, ClientError, ValueError) as e:
        logger.error("Listing bucket %s failed: %s", settings.bucket, e)
        return SearchResult(status="failed", error=str(e))

    objects = []
    dropped = 0
    for obj in listing:
        try:
            objects.append(_to_file_object(client, obj, settings))
        except (BotoCoreError, ClientError, ValueError) as e:
            dropped += 1
            logger.warning("Signing %s failed, dropping it: %s", obj.get("Key"), e)

    objects.sort(key=FileObject.sort_key)
    logger.info(
        "Search %r in %s: %d objects, %d dropped",
        query, settings.bucket, len(objects), dropped,
    )
    return SearchResult(objects=objects, dropped=dropped)


def search_objects(query: str, settings: StoreSettings, client=None) -> List[FileObject]:
    return search(query, settings, client=client).objects
