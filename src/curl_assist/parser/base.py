"""Data models shared by the tokenizer, the command parser and the editor tooling.

Every model here is a value object: the parser and the editor helpers build a
fresh one on each call and never mutate it afterwards.
"""

import re
from typing import Annotated, Literal, Union
from urllib.parse import parse_qsl, urlsplit

from pydantic import BaseModel, Field

SCHEME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*://")


class Token(BaseModel):
    """A whitespace-delimited run of command text with its source range."""

    value: str
    row: int
    column: int
    end_row: int
    end_column: int


class KeyValue(BaseModel):
    """A header, query or urlencoded entry."""

    key: str
    value: str = ""
    enabled: bool = True


class FormField(KeyValue):
    """A multipart form entry; ``file`` entries hold a path in ``value``."""

    type: Literal["text", "file"] = "text"


class UrlModel(BaseModel):
    """A raw URL plus the parts derived from it.

    ``raw`` is authoritative; the remaining fields are recomputed from it by
    :meth:`from_raw` and exist for consumers that want a Postman-style shape.
    """

    raw: str = ""
    protocol: str = "https"
    host: list[str] = []
    port: str | None = None
    path: list[str] = []
    query: list[KeyValue] = []
    hash: str | None = None

    @classmethod
    def from_raw(cls, raw: str) -> "UrlModel":
        if not raw:
            return cls()

        # Bare hosts such as ``api.test/x``, ``httpbin.org`` or ``localhost:3000``
        # get a scheme so urlsplit puts the host in netloc instead of path.
        target = raw if SCHEME_PATTERN.match(raw) else f"https://{raw}"
        parts = urlsplit(target)
        try:
            port = str(parts.port) if parts.port is not None else None
        except ValueError:
            port = None

        return cls(
            raw=raw,
            protocol=parts.scheme or "https",
            host=[h for h in (parts.hostname or "").split(".") if h],
            port=port,
            path=[p for p in parts.path.split("/") if p],
            query=[
                KeyValue(key=k, value=v)
                for k, v in parse_qsl(parts.query, keep_blank_values=True)
            ],
            hash=parts.fragment or None,
        )


class NoBody(BaseModel):
    mode: Literal["none"] = "none"


class RawBody(BaseModel):
    mode: Literal["raw"] = "raw"
    raw: str = ""
    language: str = "text"  # json / xml / html / text


class FormDataBody(BaseModel):
    mode: Literal["formdata"] = "formdata"
    formdata: list[FormField] = []


class UrlEncodedBody(BaseModel):
    mode: Literal["urlencoded"] = "urlencoded"
    urlencoded: list[KeyValue] = []


RequestBody = Annotated[
    Union[NoBody, RawBody, FormDataBody, UrlEncodedBody],
    Field(discriminator="mode"),
]


class NoAuth(BaseModel):
    type: Literal["none"] = "none"


class BearerAuth(BaseModel):
    type: Literal["bearer"] = "bearer"
    token: str


class BasicAuth(BaseModel):
    type: Literal["basic"] = "basic"
    username: str
    password: str = ""


class ApiKeyAuth(BaseModel):
    type: Literal["apikey"] = "apikey"
    key: str
    value: str
    location: Literal["header", "query"] = Field(default="header", alias="in")

    model_config = {"populate_by_name": True}


Auth = Annotated[
    Union[NoAuth, BearerAuth, BasicAuth, ApiKeyAuth],
    Field(discriminator="type"),
]


class ParsedRequest(BaseModel):
    """A structured request recovered from command text."""

    method: str = "GET"
    url: UrlModel = UrlModel()
    headers: list[KeyValue] = []
    body: RequestBody = NoBody()
    auth: Auth | None = None
