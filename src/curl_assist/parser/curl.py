"""cURL command parser.

Converts curl-style command text into a ParsedRequest. The parser is lenient:
tokens it cannot classify are skipped and it never raises for user input, so
the text and structured views of a request can always be switched between.
Strict checking is the editor validator's job.
"""

import base64
import binascii
import json
import logging
import re

from curl_assist.env import EnvironmentStore
from .base import (
    BasicAuth,
    BearerAuth,
    FormDataBody,
    FormField,
    KeyValue,
    NoBody,
    ParsedRequest,
    RawBody,
    UrlEncodedBody,
    UrlModel,
)
from .tokenizer import tokenize

logger = logging.getLogger(__name__)

LOOPBACK_PATTERN = re.compile(r"^127\.0\.0\.\d+")
VARIABLE_REFERENCE = re.compile(r"^\{\{([^}]+)\}\}$")

DATA_FLAGS = ("-d", "--data", "--data-raw", "--data-binary")


def is_url(token: str) -> bool:
    """Return True if a token looks like the request URL."""
    if token.startswith(("http://", "https://")):
        return True
    if token.startswith("localhost") or LOOPBACK_PATTERN.match(token):
        return True
    # Bare domains: api.example.com/users
    return not token.startswith("-") and "." in token and " " not in token


def curl_to_request(text: str | None, store: EnvironmentStore | None = None) -> ParsedRequest:
    """Parse curl command text into a ParsedRequest.

    Handles:
      - An optional leading ``curl`` word and backslash line continuations
      - -X/--request, -G/--get and -I/--head for the method
      - -H/--header, with Authorization Bearer/Basic lifted into ``auth``
      - -u/--user basic credentials
      - -d/--data/--data-raw/--data-binary, --data-urlencode and -F/--form bodies

    The first URL, the first explicit method and the first credential win;
    headers and form/urlencoded fields accumulate in order. Body flags turn
    an implicit GET into POST.

    Args:
        text: The command text.
        store: Optional environment store used to resolve a ``{{var}}``
            reference given as a Basic credential.

    Returns:
        The parsed request; a default GET request for empty input.
    """
    if not text or not isinstance(text, str):
        return ParsedRequest()

    tokens = tokenize(text.strip())
    if tokens and tokens[0].lower() == "curl":
        tokens = tokens[1:]

    method = "GET"
    explicit_method = False
    url = ""
    headers: list[KeyValue] = []
    auth = None
    body_mode = "none"
    raw_parts: list[str] = []
    form_fields: list[FormField] = []
    urlencoded: list[KeyValue] = []

    i = 0
    while i < len(tokens):
        token = tokens[i]
        value = tokens[i + 1] if i + 1 < len(tokens) else None

        # Unknown options are skipped one token at a time, so a value such as
        # ``out.json`` in ``-o out.json`` can become the URL if none came first.
        if is_url(token):
            if not url:
                url = token
            i += 1
            continue

        if token in ("-G", "--get", "-I", "--head"):
            method = "GET" if token in ("-G", "--get") else "HEAD"
            explicit_method = True
            i += 1
            continue

        if value is None:
            # A value flag at the very end of the input has nothing to consume.
            i += 1
            continue

        if token in ("-X", "--request"):
            if not explicit_method:
                method = value.upper()
                explicit_method = True
        elif token in ("-u", "--user"):
            if auth is None:
                username, _, password = value.partition(":")
                auth = BasicAuth(username=username, password=password)
        elif token in ("-H", "--header"):
            header = _parse_header(value)
            credential = _auth_from_header(header, store)
            if credential is not None:
                if auth is None:
                    auth = credential
            else:
                headers.append(header)
        elif token in DATA_FLAGS:
            body_mode = "raw"
            raw_parts.append(value)
        elif token == "--data-urlencode":
            body_mode = "urlencoded"
            field = _parse_form_field(value)
            urlencoded.append(KeyValue(key=field.key, value=field.value))
        elif token in ("-F", "--form"):
            body_mode = "formdata"
            form_fields.append(_parse_form_field(value))
        else:
            i += 1
            continue

        if body_mode != "none" and not explicit_method and method == "GET":
            method = "POST"
        i += 2

    if body_mode == "raw":
        raw = "&".join(raw_parts)
        body = RawBody(raw=raw, language=detect_body_language(raw))
    elif body_mode == "formdata":
        body = FormDataBody(formdata=form_fields)
    elif body_mode == "urlencoded":
        body = UrlEncodedBody(urlencoded=urlencoded)
    else:
        body = NoBody()

    request = ParsedRequest(
        method=method,
        url=UrlModel.from_raw(url),
        headers=headers,
        body=body,
        auth=auth,
    )
    logger.debug(
        "parsed %s %s (%d headers, body=%s, auth=%s)",
        request.method, url or "<no url>", len(headers), body_mode,
        auth.type if auth else None,
    )
    return request


def validate_curl_input(text: str | None) -> tuple[bool, str | None]:
    """Quick pass/fail check used before parsing: is there text, and a URL in it?"""
    if not text or not isinstance(text, str) or not text.strip():
        return False, "Input is empty"

    tokens = tokenize(text.strip())
    if tokens and tokens[0].lower() == "curl":
        tokens = tokens[1:]
    if not any(is_url(token) for token in tokens):
        return False, "No valid URL found"
    return True, None


def detect_body_language(body: str) -> str:
    """Guess the syntax of a raw body: json, xml, html or text."""
    if not body:
        return "text"

    trimmed = body.strip()
    if (trimmed.startswith("{") and trimmed.endswith("}")) or (
        trimmed.startswith("[") and trimmed.endswith("]")
    ):
        try:
            json.loads(trimmed)
            return "json"
        except json.JSONDecodeError:
            pass

    if trimmed.startswith("<") and trimmed.endswith(">"):
        return "xml"

    lowered = trimmed.lower()
    if "<!doctype html" in lowered or "<html" in lowered:
        return "html"

    return "text"


def _parse_header(text: str) -> KeyValue:
    key, sep, value = text.partition(":")
    if not sep:
        return KeyValue(key=text.strip(), value="")
    return KeyValue(key=key.strip(), value=value.strip())


def _parse_form_field(text: str) -> FormField:
    key, sep, value = text.partition("=")
    if not sep:
        return FormField(key=text.strip(), value="")

    value = value.strip()
    if value.startswith("@"):
        return FormField(key=key.strip(), value=value[1:], type="file")
    return FormField(key=key.strip(), value=value)


def _auth_from_header(header: KeyValue, store: EnvironmentStore | None):
    """Turn an Authorization header into an auth model, or None to keep it as a header."""
    if header.key.lower() != "authorization":
        return None

    scheme = header.value.lower()
    if scheme.startswith("bearer "):
        return BearerAuth(token=header.value[7:].strip())

    if scheme.startswith("basic "):
        encoded = header.value[6:].strip()
        reference = VARIABLE_REFERENCE.match(encoded)
        if reference and store is not None:
            encoded = store.resolve(reference.group(1)) or encoded

        decoded = _decode_base64(encoded)
        if decoded:
            username, _, password = decoded.partition(":")
            return BasicAuth(username=username, password=password)

    # Unknown scheme or undecodable credentials stay a regular header.
    return None


def _decode_base64(text: str) -> str | None:
    try:
        return base64.b64decode(text, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError, ValueError):
        return None
