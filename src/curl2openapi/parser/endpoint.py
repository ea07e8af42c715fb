"""URL normalization: endpoint grouping keys and path-parameter labels.

Two templating passes live here. normalize_endpoint() produces uniform
{id}/{uuid} placeholders used to group captures; extract_path_params()
produces human-readable labels named after the surrounding path.
"""

import re
from typing import NamedTuple
from urllib.parse import urlsplit

NUMERIC_SEGMENT = re.compile(r"^\d+$")
UUID_SEGMENT = re.compile(r"^[a-f0-9-]{36}$")
TOKEN_SEGMENT = re.compile(r"^[a-zA-Z0-9_-]{10,}$")


class MalformedURLInCapture(ValueError):
    """A capture URL that cannot be split into origin and path."""


class EndpointKey(NamedTuple):
    method: str
    path: str

    def __str__(self) -> str:
        return f"{self.method.upper()} {self.path}"


def _split(url: str):
    try:
        parts = urlsplit(url)
    except ValueError as e:
        raise MalformedURLInCapture(f"Invalid URL in capture: {url} ({e})") from e
    if not parts.scheme or not parts.netloc:
        raise MalformedURLInCapture(f"Invalid URL in capture: {url}")
    return parts


def origin_of(url: str) -> str:
    """Return the scheme://host[:port] origin of a URL."""
    parts = _split(url)
    return f"{parts.scheme}://{parts.netloc}"


def path_of(url: str) -> str:
    """Return the URL path without query or fragment, never empty."""
    return _split(url).path or "/"


def _template_segment(segment: str) -> str:
    if NUMERIC_SEGMENT.match(segment):
        return "{id}"
    if UUID_SEGMENT.match(segment):
        return "{uuid}"
    return segment


def normalize_endpoint(url: str, method: str) -> EndpointKey:
    """Map a URL and method to the key used to group captures.

    Numeric segments become {id} and UUID-shaped segments become {uuid},
    so /users/1 and /users/2 land in the same group.
    """
    segments = path_of(url).split("/")
    path = "/".join(_template_segment(s) for s in segments)
    return EndpointKey(method=method.lower(), path=path)


def _looks_like_identifier(segment: str) -> bool:
    return bool(
        NUMERIC_SEGMENT.match(segment)
        or UUID_SEGMENT.match(segment)
        or TOKEN_SEGMENT.match(segment)
    )


def extract_path_params(path: str) -> list[str]:
    """Label identifier-like segments after the literal segment before them.

    /users/123/posts/abcdef123456 -> ["{users}", "{posts}"]. An identifier
    with no literal segment before it is labelled {id}.
    """
    segments = [s for s in path.split("/") if s]
    params = []
    for index, segment in enumerate(segments):
        if not _looks_like_identifier(segment):
            continue
        previous = segments[index - 1] if index > 0 else ""
        if previous and not _looks_like_identifier(previous):
            params.append("{" + previous + "}")
        else:
            params.append("{id}")
    return params
