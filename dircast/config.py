import os

from dircast.models import StoreSettings

basedir = os.path.abspath(os.path.dirname(__file__))


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "secret-key")

    BUCKET_NAME = os.getenv("DIRCAST_BUCKET_NAME")
    REGION = os.getenv("DIRCAST_REGION", "eu-central-1")
    S3_ENDPOINT_URL = os.getenv("S3_ENDPOINT_URL")
    AWS_ACCESS_KEY_ID = os.getenv("AWS_ACCESS_KEY_ID")
    AWS_SECRET_ACCESS_KEY = os.getenv("AWS_SECRET_ACCESS_KEY")
    S3_CONNECT_TIMEOUT = float(os.getenv("S3_CONNECT_TIMEOUT", "5"))
    S3_READ_TIMEOUT = float(os.getenv("S3_READ_TIMEOUT", "10"))
    S3_MAX_ATTEMPTS = int(os.getenv("S3_MAX_ATTEMPTS", "2"))

    PUBLIC_URL = os.getenv("DIRCAST_PUBLIC_URL", "http://localhost:8080")
    HOST = os.getenv("DIRCAST_HOST", "127.0.0.1")
    PORT = int(os.getenv("DIRCAST_PORT", "8080"))

    HTPASSWD_PATH = os.getenv("DIRCAST_HTPASSWD", ".htpasswd")
    IDENTITY_COOKIE = os.getenv("DIRCAST_COOKIE", "identity")
    SLUG_SIGNING_KEY = os.getenv("DIRCAST_SLUG_KEY")

    # Signed URLs stay valid for a day
    URL_EXPIRY_SECONDS = int(os.getenv("DIRCAST_URL_EXPIRY", "86400"))
    MIME_TYPE = os.getenv("DIRCAST_MIME_TYPE", "audio/mpeg")


def store_settings_from_config(config) -> StoreSettings:
    """Build the immutable store settings from a Flask config mapping."""
    return StoreSettings(
        bucket=config.get("BUCKET_NAME") or None,
        region=config.get("REGION") or "eu-central-1",
        endpoint_url=config.get("S3_ENDPOINT_URL") or None,
        access_key=config.get("AWS_ACCESS_KEY_ID") or None,
        secret_key=config.get("AWS_SECRET_ACCESS_KEY") or None,
        public_url=config.get("PUBLIC_URL") or "http://localhost:8080",
        url_expiry_seconds=config.get("URL_EXPIRY_SECONDS", 86400),
        mime_type=config.get("MIME_TYPE") or "audio/mpeg",
        connect_timeout=config.get("S3_CONNECT_TIMEOUT", 5),
        read_timeout=config.get("S3_READ_TIMEOUT", 10),
        max_attempts=config.get("S3_MAX_ATTEMPTS", 2),
    )
