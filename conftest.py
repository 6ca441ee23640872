import boto3
import pytest
from botocore.config import Config as BotoConfig
from botocore.exceptions import ClientError
from passlib.apache import HtpasswdFile

from dircast import create_app
from dircast.models import StoreSettings


class FakePaginator:
    def __init__(self, pages):
        self.pages = pages
        self.calls = []

    def paginate(self, **kwargs):
        self.calls.append(kwargs)
        return iter(self.pages)


class FakeS3:
    """Just enough of an S3 client for listing and presigning."""

    def __init__(self, keys=(), fail_keys=(), pages=None):
        if pages is None:
            pages = [{"Contents": [{"Key": key, "Size": size, "ETag": f'"etag-{key}"'} for key, size in keys]}]
        self.paginator = FakePaginator(pages)
        self.fail_keys = set(fail_keys)
        self.signed = []

    def get_paginator(self, name):
        assert name == "list_objects_v2"
        return self.paginator

    def generate_presigned_url(self, client_method, Params, ExpiresIn):
        key = Params["Key"]
        if key in self.fail_keys:
            raise ClientError({"Error": {"Code": "AccessDenied", "Message": "denied"}}, "GetObject")
        self.signed.append(key)
        return f"https://signed.example/{Params['Bucket']}/{key}?expires={ExpiresIn}"


@pytest.fixture
def fake_s3():
    return FakeS3


@pytest.fixture
def s3_client():
    return boto3.client(
        "s3",
        region_name="eu-central-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
        config=BotoConfig(signature_version="s3v4"),
    )


@pytest.fixture
def settings():
    return StoreSettings(bucket="podcasts", public_url="http://x")


@pytest.fixture
def htpasswd_path(tmp_path):
    path = tmp_path / ".htpasswd"
    ht = HtpasswdFile(str(path), new=True, default_scheme="apr_md5_crypt")
    ht.set_password("alice", "correct")
    ht.set_password("bob", "hunter2")
    ht.save()
    return str(path)


@pytest.fixture
def app(htpasswd_path):
    app = create_app(overrides={
        "TESTING": True,
        "HTPASSWD_PATH": htpasswd_path,
        "BUCKET_NAME": "podcasts",
        "PUBLIC_URL": "http://x",
        "SLUG_SIGNING_KEY": None,
        "IDENTITY_COOKIE": "identity",
    })
    return app


@pytest.fixture
def client(app):
    return app.test_client()
