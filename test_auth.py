"""
Tests for the credential gate: password file checks and the identity cookie.
"""

import pytest

from dircast.models import Credentials
from dircast.util.auth import (
    CredentialStoreError,
    authenticated_credentials,
    format_identity_cookie,
    parse_identity_cookie,
    verify,
)


class FakeRequest:
    def __init__(self, cookies):
        self.cookies = cookies


def test_verify_accepts_correct_password(htpasswd_path):
    assert verify(Credentials(user="alice", password="correct"), htpasswd_path) is True


def test_verify_rejects_wrong_password(htpasswd_path):
    assert verify(Credentials(user="alice", password="wrong"), htpasswd_path) is False


def test_unknown_user_looks_like_wrong_password(htpasswd_path):
    """Unknown users and bad passwords must be indistinguishable to the caller."""
    unknown = verify(Credentials(user="mallory", password="correct"), htpasswd_path)
    wrong = verify(Credentials(user="alice", password="wrong"), htpasswd_path)
    assert unknown is False
    assert unknown == wrong


def test_verify_rereads_the_file(htpasswd_path):
    from passlib.apache import HtpasswdFile

    ht = HtpasswdFile(htpasswd_path, default_scheme="apr_md5_crypt")
    ht.set_password("carol", "new-pass")
    ht.save()

    assert verify(Credentials(user="carol", password="new-pass"), htpasswd_path)


def test_malformed_hash_is_a_mismatch(tmp_path):
    path = tmp_path / ".htpasswd"
    path.write_text("alice:not-a-real-hash\n")
    assert verify(Credentials(user="alice", password="not-a-real-hash"), str(path)) is False


def test_missing_store_is_fatal(tmp_path):
    with pytest.raises(CredentialStoreError):
        verify(Credentials(user="alice", password="correct"), str(tmp_path / "missing"))


@pytest.mark.parametrize("value, expected", [
    ("alice:correct", ("alice", "correct")),
    ("alice:", ("alice", "")),
    ("alice", None),
    ("a:b:c", None),
    ("", None),
    (None, None),
])
def test_parse_identity_cookie(value, expected):
    credentials = parse_identity_cookie(value)
    if expected is None:
        assert credentials is None
    else:
        assert (credentials.user, credentials.password) == expected


def test_format_identity_cookie():
    assert format_identity_cookie(Credentials(user="alice", password="correct")) == "alice:correct"


def test_authenticated_credentials_from_cookie(htpasswd_path):
    good = FakeRequest({"identity": "alice:correct"})
    bad = FakeRequest({"identity": "alice:wrong"})
    missing = FakeRequest({})

    assert authenticated_credentials(good, htpasswd_path).user == "alice"
    assert authenticated_credentials(bad, htpasswd_path) is None
    assert authenticated_credentials(missing, htpasswd_path) is None


def test_plaintext_entries_are_not_accepted(tmp_path):
    path = tmp_path / ".htpasswd"
    path.write_text("alice:correct\n")
    assert verify(Credentials(user="alice", password="correct"), str(path)) is False


def test_broken_apr1_entry_is_a_mismatch(tmp_path):
    path = tmp_path / ".htpasswd"
    path.write_text("alice:$apr1$broken\n")
    assert verify(Credentials(user="alice", password="$apr1$broken"), str(path)) is False
