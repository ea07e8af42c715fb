import pytest

from curl2openapi.parser.curl import ParseError, extract_api_info, parse_curl, validate_curl


class TestParseCurl:
    @pytest.mark.parametrize("url", [
        "https://api.example.com/users",
        "http://localhost:8080/",
        "https://api.example.com/v1/orders/42",
    ])
    def test_bare_url_is_get(self, url):
        parsed = parse_curl("curl " + url)
        assert parsed.method == "GET"
        assert parsed.url == url
        assert parsed.headers == {}
        assert parsed.body is None
        assert parsed.query is None

    @pytest.mark.parametrize("command", [
        "curl -X POST https://api.example.com/users",
        "curl https://api.example.com/users -X POST",
        "curl -H 'Accept: application/json' -X POST https://api.example.com/users",
        "curl --request post https://api.example.com/users",
    ])
    def test_explicit_method_any_position(self, command):
        assert parse_curl(command).method == "POST"

    def test_data_without_method_promotes_to_post(self):
        parsed = parse_curl("""curl -d '{"name":"a"}' https://api.example.com/users""")
        assert parsed.method == "POST"
        assert parsed.body == '{"name":"a"}'

    def test_data_with_explicit_put_keeps_put(self):
        parsed = parse_curl("curl -X PUT --data-raw 'x=1' https://api.example.com/users/1")
        assert parsed.method == "PUT"
        assert parsed.body == "x=1"

    def test_explicit_get_with_body_stays_get(self):
        parsed = parse_curl("curl -X GET -d 'q' https://api.example.com/search")
        assert parsed.method == "GET"

    def test_headers_split_on_first_colon_and_trimmed(self):
        parsed = parse_curl(
            'curl -H "Authorization:  Bearer abc def " --header "X-Url: http://x.io" https://a.io'
        )
        assert parsed.headers == {"Authorization": "Bearer abc def", "X-Url": "http://x.io"}

    def test_duplicate_header_overwrites(self):
        parsed = parse_curl("curl -H 'Accept: a' -H 'Accept: b' https://a.io")
        assert parsed.headers == {"Accept": "b"}

    def test_header_case_preserved(self):
        parsed = parse_curl("curl -H 'authorization: x' https://a.io")
        assert "authorization" in parsed.headers

    def test_header_without_colon_ignored(self):
        parsed = parse_curl("curl -H 'garbage' https://a.io")
        assert parsed.headers == {}

    def test_first_url_wins(self):
        parsed = parse_curl("curl https://first.io/a https://second.io/b")
        assert parsed.url == "https://first.io/a"

    def test_flag_argument_is_not_taken_as_url(self):
        parsed = parse_curl("curl -d https://not-the-url.io https://real.io/x")
        assert parsed.url == "https://real.io/x"
        assert parsed.body == "https://not-the-url.io"

    def test_unknown_flags_skipped_one_token_at_a_time(self):
        parsed = parse_curl("curl -k -L -u user:pass --compressed https://a.io/x")
        assert parsed.url == "https://a.io/x"
        assert parsed.method == "GET"

    def test_query_extracted_and_decoded(self):
        parsed = parse_curl("curl 'https://a.io/search?q=hello%20world&page=2&flag='")
        assert parsed.query == {"q": "hello world", "page": "2", "flag": ""}

    def test_repeated_query_key_keeps_last(self):
        parsed = parse_curl("curl 'https://a.io/x?tag=a&tag=b'")
        assert parsed.query == {"tag": "b"}

    def test_malformed_url_skips_query(self):
        parsed = parse_curl("curl 'http://[::1/path?x=1'")
        assert parsed.url == "http://[::1/path?x=1"
        assert parsed.query is None

    def test_curl_prefix_is_case_sensitive(self):
        with pytest.raises(ParseError):
            parse_curl("CURL")

    def test_no_url_raises(self):
        with pytest.raises(ParseError, match="No URL found"):
            parse_curl("curl -X POST -d '{}'")

    def test_not_a_curl_command(self):
        with pytest.raises(ParseError):
            parse_curl("not a curl command")

    def test_unterminated_quote_raises_parse_error(self):
        with pytest.raises(ParseError):
            parse_curl("curl -H 'Accept: x https://a.io")

    def test_trailing_flag_without_argument(self):
        parsed = parse_curl("curl https://a.io -X")
        assert parsed.method == "GET"

    def test_parsed_request_is_immutable(self):
        parsed = parse_curl("curl https://a.io")
        with pytest.raises(Exception):
            parsed.method = "POST"


class TestValidateCurl:
    def test_valid(self):
        assert validate_curl("curl https://a.io") is True

    def test_invalid(self):
        assert validate_curl("curl -X GET") is False


class TestExtractApiInfo:
    def test_info_fields(self):
        parsed = parse_curl(
            "curl -H 'content-type: application/json' 'https://api.example.com:8443/users/123?x=1'"
        )
        info = extract_api_info(parsed)
        assert info.base_url == "https://api.example.com:8443"
        assert info.path == "/users/123"
        assert info.path_params == ["{users}"]
        assert info.query_params == {"x": "1"}
        assert info.content_type == "application/json"
