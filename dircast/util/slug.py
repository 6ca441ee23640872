# dircast/util/slug.py
"""
Slug codec.

A slug carries a saved search together with the credentials that authorize it,
so a feed URL can be served again by any process that only has the URL. There
is no server-side record of a feed.

Every slug therefore contains a password. Anyone holding a feed link can read
it back out, so feed links must be handed out like passwords. Credentials
taken from a slug still have to pass ``dircast.util.auth.verify`` before they
are trusted.

``PlainSlugCodec`` is the default. ``SignedSlugCodec`` adds an HMAC over the
payload and is selected when ``SLUG_SIGNING_KEY`` is configured.
"""

import base64
import binascii
import json
import logging
import re
from typing import Tuple

from itsdangerous import BadData, URLSafeSerializer
from pydantic import ValidationError

from dircast.models import Credentials, SearchRequest, SlugPayload

logger = logging.getLogger(__name__)

_URLSAFE_ALPHABET = re.compile(r"[A-Za-z0-9_-]*")


class SlugError(ValueError):
    """Raised for any slug that cannot be decoded. Carries no detail about the cause."""

    def __init__(self, message: str = "malformed slug"):
        super().__init__(message)


def _canonical_json(payload: SlugPayload) -> bytes:
    data = payload.model_dump(by_alias=True)
    return json.dumps(data, sort_keys=True, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def _parse_payload(data) -> SlugPayload:
    if not isinstance(data, dict):
        raise SlugError()
    try:
        return SlugPayload.model_validate(data)
    except ValidationError:
        raise SlugError()


def b64url_encode(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def b64url_decode(text: str) -> bytes:
    if not _URLSAFE_ALPHABET.fullmatch(text):
        raise SlugError()
    padded = text + "=" * (-len(text) % 4)
    try:
        raw = base64.b64decode(padded, altchars=b"-_", validate=True)
    except (binascii.Error, ValueError):
        raise SlugError()
    # Unused trailing bits must be zero so each byte string has exactly one text form
    if b64url_encode(raw) != text:
        raise SlugError()
    return raw


class SlugCodec:
    """Interface for turning a search plus credentials into a URL-safe token and back."""

    def encode(self, request: SearchRequest, credentials: Credentials) -> str:
        raise NotImplementedError

    def decode(self, slug: str) -> Tuple[SearchRequest, Credentials]:
        raise NotImplementedError


class PlainSlugCodec(SlugCodec):
    """Canonical JSON wrapped in unpadded URL-safe base64."""

    def encode(self, request: SearchRequest, credentials: Credentials) -> str:
        payload = SlugPayload.from_parts(request, credentials)
        return b64url_encode(_canonical_json(payload))

    def decode(self, slug: str) -> Tuple[SearchRequest, Credentials]:
        raw = b64url_decode(slug)
        try:
            data = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError):
            raise SlugError()
        payload = _parse_payload(data)
        try:
            canonical = _canonical_json(payload)
        except UnicodeEncodeError:
            raise SlugError()
        if canonical != raw:
            raise SlugError()
        return payload.to_parts()


class SignedSlugCodec(SlugCodec):
    """Same payload as ``PlainSlugCodec``, signed with an HMAC so edits are detected."""

    salt = "dircast.feed"

    def __init__(self, secret: str):
        self.serializer = URLSafeSerializer(secret, salt=self.salt)

    def encode(self, request: SearchRequest, credentials: Credentials) -> str:
        payload = SlugPayload.from_parts(request, credentials)
        return self.serializer.dumps(payload.model_dump(by_alias=True))

    def decode(self, slug: str) -> Tuple[SearchRequest, Credentials]:
        try:
            data = self.serializer.loads(slug)
        except BadData:
            logger.info("Rejected slug with a bad signature")
            raise SlugError()
        return _parse_payload(data).to_parts()


def get_slug_codec(config) -> SlugCodec:
    secret = config.get("SLUG_SIGNING_KEY")
    if secret:
        return SignedSlugCodec(secret)
    return PlainSlugCodec()


_default_codec = PlainSlugCodec()


def encode(request: SearchRequest, credentials: Credentials) -> str:
    return _default_codec.encode(request, credentials)


def decode(slug: str) -> Tuple[SearchRequest, Credentials]:
    return _default_codec.decode(slug)
