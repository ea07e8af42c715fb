import pytest

from curl2openapi.parser.base import Capture
from curl2openapi.parser.curl import parse_curl


@pytest.fixture
def user_captures() -> list[Capture]:
    commands = [
        "curl -H 'Authorization: Bearer x' https://api.example.com/users/1",
        "curl -H 'Authorization: Bearer x' https://api.example.com/users/2",
    ]
    return [Capture.from_parsed(parse_curl(c), c) for c in commands]
