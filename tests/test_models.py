import pytest
from pydantic import TypeAdapter, ValidationError

from curl_assist.parser.base import (
    ApiKeyAuth,
    Auth,
    FormField,
    KeyValue,
    ParsedRequest,
    RequestBody,
    UrlModel,
)


class TestKeyValue:
    def test_enabled_by_default(self):
        kv = KeyValue(key="Accept", value="*/*")
        assert kv.enabled is True

    def test_form_field_type(self):
        assert FormField(key="name", value="John").type == "text"
        with pytest.raises(ValidationError):
            FormField(key="f", value="x", type="binary")


class TestUrlModel:
    def test_empty(self):
        url = UrlModel.from_raw("")
        assert url.raw == ""
        assert url.host == []

    def test_invalid_port_is_ignored(self):
        url = UrlModel.from_raw("https://a.com:abc/x")
        assert url.port is None
        assert url.path == ["x"]

    def test_bare_host_starting_with_http(self):
        url = UrlModel.from_raw("httpbin.org/get")
        assert url.raw == "httpbin.org/get"
        assert url.protocol == "https"
        assert url.host == ["httpbin", "org"]
        assert url.path == ["get"]

        assert UrlModel.from_raw("http-api.internal/x").host == ["http-api", "internal"]

    def test_scheme_only_counts_at_the_start(self):
        url = UrlModel.from_raw("api.test/cb?next=http://x")
        assert url.host == ["api", "test"]
        assert [(q.key, q.value) for q in url.query] == [("next", "http://x")]

    def test_explicit_scheme_is_kept(self):
        url = UrlModel.from_raw("http://a.com/x")
        assert url.protocol == "http"
        assert url.host == ["a", "com"]

    def test_blank_query_values_kept(self):
        url = UrlModel.from_raw("https://a.com/?flag&x=1")
        assert [(q.key, q.value) for q in url.query] == [("flag", ""), ("x", "1")]


class TestTaggedUnions:
    def test_body_selected_by_mode(self):
        body = TypeAdapter(RequestBody).validate_python({"mode": "raw", "raw": "<a/>", "language": "xml"})
        assert body.raw == "<a/>"

    def test_unknown_body_mode(self):
        with pytest.raises(ValidationError):
            TypeAdapter(RequestBody).validate_python({"mode": "graphql"})

    def test_auth_selected_by_type(self):
        auth = TypeAdapter(Auth).validate_python({"type": "bearer", "token": "t"})
        assert auth.token == "t"

    def test_api_key_location_alias(self):
        auth = ApiKeyAuth(key="X-Api-Key", value="k", **{"in": "query"})
        assert auth.location == "query"
        assert auth.model_dump(by_alias=True)["in"] == "query"


class TestParsedRequest:
    def test_defaults(self):
        request = ParsedRequest()
        assert request.method == "GET"
        assert request.body.mode == "none"
        assert request.auth is None

    def test_serialization_roundtrip(self):
        request = ParsedRequest(
            method="POST",
            url=UrlModel.from_raw("https://a.com/users"),
            headers=[KeyValue(key="Accept", value="application/json")],
            body={"mode": "formdata", "formdata": [{"key": "file", "value": "a.png", "type": "file"}]},
            auth={"type": "basic", "username": "u", "password": "p"},
        )
        data = request.model_dump()
        request2 = ParsedRequest(**data)
        assert request2.body.formdata[0].type == "file"
        assert request2.auth.username == "u"
