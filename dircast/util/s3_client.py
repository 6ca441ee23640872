import logging

import boto3
from botocore.config import Config as BotoConfig

from dircast.models import StoreSettings

logger = logging.getLogger(__name__)


def get_s3_client(settings: StoreSettings):
    """Create a boto3 S3 client for the configured store, with bounded timeouts."""
    kwargs = {
        "region_name": settings.region,
        "config": BotoConfig(
            connect_timeout=settings.connect_timeout,
            read_timeout=settings.read_timeout,
            retries={"max_attempts": settings.max_attempts},
            signature_version="s3v4",
        ),
    }
    if settings.endpoint_url:
        kwargs["endpoint_url"] = settings.endpoint_url
    # Without explicit keys boto3 falls back to env, profile or instance metadata
    if settings.access_key and settings.secret_key:
        kwargs["aws_access_key_id"] = settings.access_key
        kwargs["aws_secret_access_key"] = settings.secret_key
    return boto3.client("s3", **kwargs)


def list_objects(client, bucket):
    """Yield every object in the bucket, following continuation tokens until exhausted."""
    paginator = client.get_paginator("list_objects_v2")
    for page in paginator.paginate(Bucket=bucket):
        for obj in page.get("Contents", []):
            yield obj


def presign_get(client, bucket, key, expires_in=86400):
    return client.generate_presigned_url(
        "get_object",
        Params={"Bucket": bucket, "Key": key},
        ExpiresIn=expires_in,
    )
