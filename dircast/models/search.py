from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class Credentials(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    user: StrictStr
    password: StrictStr = Field(alias="pass")


class SearchRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    author: StrictStr = ""
    query: StrictStr = ""
    title: StrictStr = ""


class SlugPayload(BaseModel):
    """The five fields carried by a feed slug, all required."""

    model_config = ConfigDict(populate_by_name=True)

    author: StrictStr
    query: StrictStr
    title: StrictStr
    user: StrictStr
    password: StrictStr = Field(alias="pass")

    @classmethod
    def from_parts(cls, request: SearchRequest, credentials: Credentials) -> "SlugPayload":
        return cls(
            author=request.author,
            query=request.query,
            title=request.title,
            user=credentials.user,
            password=credentials.password,
        )

    def to_parts(self):
        return (
            SearchRequest(author=self.author, query=self.query, title=self.title),
            Credentials(user=self.user, password=self.password),
        )


class FileObject(BaseModel):
    name: str
    signed_url: str
    key: str
    size_bytes: int
    entity_tag: Optional[str] = None
    mime_type: Optional[str] = None

    def sort_key(self):
        return (self.name, self.key)


class SearchResult(BaseModel):
    """
    Outcome of a bucket search.

    ``status`` is ``ok`` for a completed listing (possibly with zero matches),
    ``skipped`` when no bucket is configured and ``failed`` when the store could
    not be listed. ``dropped`` counts matches removed because signing failed.
    """

    objects: List[FileObject] = Field(default_factory=list)
    status: Literal["ok", "skipped", "failed"] = "ok"
    dropped: int = 0
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.status == "failed"


class StoreSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    bucket: Optional[str] = None
    region: str = "eu-central-1"
    endpoint_url: Optional[str] = None
    access_key: Optional[str] = None
    secret_key: Optional[str] = None
    public_url: str = "http://localhost:8080"
    url_expiry_seconds: int = 86400
    mime_type: str = "audio/mpeg"
    connect_timeout: float = 5
    read_timeout: float = 10
    max_attempts: int = 2
