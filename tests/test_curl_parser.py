from pathlib import Path

from curl_assist.env import Environment, EnvironmentStore, EnvironmentVariable
from curl_assist.parser.curl import curl_to_request, detect_body_language, is_url, validate_curl_input

FIXTURES = Path(__file__).parent / "fixtures"


class TestIsUrl:
    def test_scheme_urls(self):
        assert is_url("https://api.test/x")
        assert is_url("http://a")

    def test_localhost_and_loopback(self):
        assert is_url("localhost:3000/api")
        assert is_url("127.0.0.1:8080")

    def test_bare_domain(self):
        assert is_url("api.example.com/users")

    def test_not_urls(self):
        assert not is_url("-X")
        assert not is_url("--http1.1")
        assert not is_url("POST")
        assert not is_url("Content-Type: application/json")


class TestMethod:
    def test_default_is_get(self):
        assert curl_to_request("https://api.test/x").method == "GET"

    def test_data_forces_post(self):
        assert curl_to_request("https://api.test/x -d '{}'").method == "POST"

    def test_explicit_method_not_overridden_by_data(self):
        assert curl_to_request("https://api.test/x -X GET -d '{}'").method == "GET"

    def test_explicit_method_after_data(self):
        assert curl_to_request("https://api.test/x -d '{}' -X PUT").method == "PUT"

    def test_method_is_uppercased(self):
        assert curl_to_request("https://api.test/x --request patch").method == "PATCH"

    def test_first_method_wins(self):
        assert curl_to_request("https://api.test/x -X PUT -X DELETE").method == "PUT"

    def test_get_flag_forces_get(self):
        assert curl_to_request("https://api.test/x -d a=1 -G").method == "GET"

    def test_head_flag(self):
        assert curl_to_request("https://api.test/x -I").method == "HEAD"


class TestUrl:
    def test_first_url_wins(self):
        request = curl_to_request("curl https://a.com https://b.com")
        assert request.url.raw == "https://a.com"

    def test_url_parts(self):
        request = curl_to_request("curl 'https://api.test:8080/v1/users?page=2&q=x#top'")
        url = request.url
        assert url.protocol == "https"
        assert url.host == ["api", "test"]
        assert url.port == "8080"
        assert url.path == ["v1", "users"]
        assert [(q.key, q.value) for q in url.query] == [("page", "2"), ("q", "x")]
        assert url.hash == "top"

    def test_bare_localhost(self):
        url = curl_to_request("localhost:3000/api").url
        assert url.raw == "localhost:3000/api"
        assert url.host == ["localhost"]
        assert url.port == "3000"

    def test_bare_host_starting_with_http(self):
        url = curl_to_request("curl httpbin.org/get").url
        assert url.host == ["httpbin", "org"]
        assert url.path == ["get"]


class TestHeadersAndAuth:
    def test_headers_accumulate_in_order(self):
        request = curl_to_request("https://a.com -H 'A: 1' -H 'B: x:y' --header 'C:3'")
        assert [(h.key, h.value) for h in request.headers] == [("A", "1"), ("B", "x:y"), ("C", "3")]
        assert all(h.enabled for h in request.headers)

    def test_header_without_colon(self):
        request = curl_to_request("https://a.com -H NoColon")
        assert (request.headers[0].key, request.headers[0].value) == ("NoColon", "")

    def test_bearer_header_becomes_auth(self):
        request = curl_to_request('curl https://a.com -H "Authorization: Bearer abc123"')
        assert request.auth.type == "bearer"
        assert request.auth.token == "abc123"
        assert all(h.key.lower() != "authorization" for h in request.headers)

    def test_basic_header_is_decoded(self):
        request = curl_to_request('https://a.com -H "authorization: basic dXNlcjpwYXNz"')
        assert request.auth.type == "basic"
        assert (request.auth.username, request.auth.password) == ("user", "pass")
        assert request.headers == []

    def test_undecodable_basic_stays_a_header(self):
        request = curl_to_request('https://a.com -H "Authorization: Basic !!!"')
        assert request.auth is None
        assert request.headers[0].value == "Basic !!!"

    def test_other_scheme_stays_a_header(self):
        request = curl_to_request('https://a.com -H "Authorization: ApiKey k1"')
        assert request.auth is None
        assert request.headers[0].key == "Authorization"

    def test_user_flag(self):
        request = curl_to_request("https://a.com -u alice:pa:ss")
        assert request.auth.type == "basic"
        assert (request.auth.username, request.auth.password) == ("alice", "pa:ss")

    def test_user_flag_without_password(self):
        request = curl_to_request("https://a.com --user alice")
        assert (request.auth.username, request.auth.password) == ("alice", "")

    def test_first_credential_wins(self):
        request = curl_to_request('https://a.com -u alice:x -H "Authorization: Bearer t"')
        assert request.auth.type == "basic"
        assert request.headers == []

    def test_basic_credential_resolved_from_environment(self):
        store = EnvironmentStore([
            Environment(name="dev", values=[EnvironmentVariable(key="creds", value="Ym9iOnNlY3JldA==")]),
        ])
        request = curl_to_request('https://a.com -H "Authorization: Basic {{creds}}"', store=store)
        assert (request.auth.username, request.auth.password) == ("bob", "secret")


class TestBody:
    def test_raw_json_body(self):
        request = curl_to_request("""https://a.com -d '{"name": "John"}'""")
        assert request.body.mode == "raw"
        assert request.body.raw == '{"name": "John"}'
        assert request.body.language == "json"

    def test_repeated_data_is_joined(self):
        request = curl_to_request("https://a.com -d a=1 --data b=2")
        assert request.body.raw == "a=1&b=2"

    def test_form_fields(self):
        request = curl_to_request('https://a.com -F "file=@photo.jpg" --form "name=John"')
        assert request.method == "POST"
        assert request.body.mode == "formdata"
        fields = request.body.formdata
        assert (fields[0].key, fields[0].value, fields[0].type) == ("file", "photo.jpg", "file")
        assert (fields[1].key, fields[1].value, fields[1].type) == ("name", "John", "text")

    def test_urlencoded_fields(self):
        request = curl_to_request('https://a.com --data-urlencode "q=hello world" --data-urlencode "x"')
        assert request.method == "POST"
        assert request.body.mode == "urlencoded"
        assert [(f.key, f.value) for f in request.body.urlencoded] == [("q", "hello world"), ("x", "")]

    def test_only_one_body_kind_is_populated(self):
        dumped = curl_to_request("https://a.com -F a=1").body.model_dump()
        assert set(dumped) == {"mode", "formdata"}


class TestLeniency:
    def test_empty_input_gives_default_request(self):
        for text in ("", None, "   "):
            request = curl_to_request(text)
            assert request.method == "GET"
            assert request.url.raw == ""
            assert request.headers == []
            assert request.body.mode == "none"
            assert request.auth is None

    def test_unknown_tokens_are_skipped(self):
        request = curl_to_request("curl --compressed -k https://a.com stray --whatever")
        assert request.url.raw == "https://a.com"
        assert request.method == "GET"

    def test_value_of_ignored_option_can_become_the_url(self):
        assert curl_to_request("curl -o out.json https://a.com").url.raw == "out.json"
        assert curl_to_request("curl https://a.com -o out.json").url.raw == "https://a.com"

    def test_value_flag_at_end(self):
        request = curl_to_request("https://a.com -H")
        assert request.headers == []

    def test_multiline_fixture(self):
        request = curl_to_request((FIXTURES / "create_user.curl").read_text(encoding="utf-8"))
        assert request.method == "POST"
        assert request.url.raw == "https://api.example.com/v1/users"
        assert [h.key for h in request.headers] == ["Content-Type"]
        assert request.auth.token == "abc123"
        assert request.body.language == "json"


class TestDetectBodyLanguage:
    def test_json(self):
        assert detect_body_language('[1, 2]') == "json"

    def test_invalid_json_is_text(self):
        assert detect_body_language("{not json}") == "text"

    def test_xml(self):
        assert detect_body_language("<user><name>a</name></user>") == "xml"

    def test_html(self):
        assert detect_body_language("<!DOCTYPE html><p>hi") == "html"

    def test_empty(self):
        assert detect_body_language("") == "text"


class TestValidateCurlInput:
    def test_empty(self):
        assert validate_curl_input("  ") == (False, "Input is empty")

    def test_no_url(self):
        assert validate_curl_input("curl -X POST") == (False, "No valid URL found")

    def test_valid(self):
        assert validate_curl_input("curl https://a.com") == (True, None)
