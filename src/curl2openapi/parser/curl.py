"""cURL command parser.

Understands the small subset of curl flags needed to describe a request:
-X/--request, -H/--header, -d/--data/--data-raw and a bare http(s) URL.
Anything else is skipped one token at a time.
"""

import re
from urllib.parse import parse_qsl, urlsplit

from .base import ApiInfo, ParsedRequest
from .endpoint import extract_path_params, origin_of, path_of
from .tokenizer import TokenizeError, tokenize

METHOD_FLAGS = ("-X", "--request")
HEADER_FLAGS = ("-H", "--header")
DATA_FLAGS = ("-d", "--data", "--data-raw")
URL_PREFIXES = ("http://", "https://")

_CURL_PREFIX = re.compile(r"^curl\s+")


class ParseError(ValueError):
    """Raised when a cURL command cannot be turned into a request."""


def parse_curl(raw_curl: str) -> ParsedRequest:
    """Parse a raw cURL command into a ParsedRequest."""
    command = _CURL_PREFIX.sub("", raw_curl.strip(), count=1)
    try:
        tokens = tokenize(command)
    except TokenizeError as e:
        raise ParseError(f"Failed to parse cURL command: {e}") from e

    method = None
    url = None
    headers: dict[str, str] = {}
    body = None

    i = 0
    while i < len(tokens):
        token = tokens[i]
        has_arg = i + 1 < len(tokens)

        if token in METHOD_FLAGS and has_arg:
            method = tokens[i + 1].upper()
            i += 2
        elif token in HEADER_FLAGS and has_arg:
            name, sep, value = tokens[i + 1].partition(":")
            if sep and name.strip():
                headers[name.strip()] = value.strip()
            i += 2
        elif token in DATA_FLAGS and has_arg:
            body = tokens[i + 1]
            i += 2
        elif token.startswith(URL_PREFIXES):
            if url is None:
                url = token
            i += 1
        else:
            # Unknown flags are not paired with their argument.
            i += 1

    if url is None:
        raise ParseError("Failed to parse cURL command: No URL found in cURL command")

    if method is None:
        method = "POST" if body is not None else "GET"

    return ParsedRequest(
        method=method,
        url=url,
        headers=headers,
        body=body,
        query=_parse_query(url),
    )


def validate_curl(raw_curl: str) -> bool:
    """Return True if the command parses."""
    try:
        parse_curl(raw_curl)
    except ParseError:
        return False
    return True


def extract_api_info(parsed: ParsedRequest) -> ApiInfo:
    """Describe where a parsed request points and what it carries."""
    path = path_of(parsed.url)
    return ApiInfo(
        base_url=origin_of(parsed.url),
        path=path,
        path_params=extract_path_params(path),
        query_params=parsed.query,
        content_type=parsed.headers.get("Content-Type") or parsed.headers.get("content-type"),
    )


def _parse_query(url: str) -> dict[str, str] | None:
    try:
        pairs = parse_qsl(urlsplit(url).query, keep_blank_values=True)
    except ValueError:
        return None
    query = dict(pairs)
    return query or None
