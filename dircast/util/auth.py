# dircast/util/auth.py
"""
Credential gate.

Checks a username/password pair against an htpasswd-style file (one
``user:hash`` entry per line). The file is read on every check so that edits
take effect without a restart. Unknown users and wrong passwords both come
back as ``False``; callers cannot tell them apart.
"""

import logging
from typing import Optional

from passlib.apache import HtpasswdFile
from passlib.context import CryptContext

from dircast.models import Credentials

logger = logging.getLogger(__name__)

# Same schemes as Apache on Unix, without the plaintext fallback
HTPASSWD_CONTEXT = CryptContext(schemes=[
    "bcrypt",
    "sha256_crypt",
    "sha512_crypt",
    "apr_md5_crypt",
    "ldap_sha1",
    "des_crypt",
])


class CredentialStoreError(RuntimeError):
    """The hashed-password file could not be read. This is a deployment error."""
    pass


def load_credential_store(path: str) -> HtpasswdFile:
    try:
        return HtpasswdFile(path, context=HTPASSWD_CONTEXT)
    except (OSError, ValueError) as e:
        logger.critical("Cannot read credential store %s: %s", path, e)
        raise CredentialStoreError(f"Cannot read credential store {path}: {e}") from e


def verify(credentials: Credentials, htpasswd_path: str) -> bool:
    store = load_credential_store(htpasswd_path)
    try:
        # check_password returns None for unknown users
        return bool(store.check_password(credentials.user, credentials.password))
    except ValueError as e:
        logger.warning("Unusable hash entry in credential store %s: %s", htpasswd_path, e)
        return False


def parse_identity_cookie(value: Optional[str]) -> Optional[Credentials]:
    """Parse a ``user:pass`` cookie value. Anything but exactly two fields is rejected."""
    if not value:
        return None
    parts = value.split(":")
    if len(parts) != 2:
        return None
    user, password = parts
    return Credentials(user=user, password=password)


def format_identity_cookie(credentials: Credentials) -> str:
    return f"{credentials.user}:{credentials.password}"


def authenticated_credentials(request, htpasswd_path: str, cookie_name: str = "identity") -> Optional[Credentials]:
    """Return the verified credentials carried by the request's identity cookie, if any."""
    credentials = parse_identity_cookie(request.cookies.get(cookie_name))
    if credentials is None:
        return None
    if not verify(credentials, htpasswd_path):
        logger.info("Identity cookie rejected")
        return None
    return credentials
