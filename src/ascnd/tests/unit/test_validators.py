import pytest

from ascnd.validators import parse_endpoint


class TestParseEndpoint:
    def test_https_default_port(self):
        endpoint = parse_endpoint("https://api.ascnd.gg")

        assert endpoint.host == "api.ascnd.gg"
        assert endpoint.port == 443
        assert endpoint.secure is True
        assert endpoint.target == "api.ascnd.gg:443"

    def test_http_default_port(self):
        endpoint = parse_endpoint("http://localhost")

        assert endpoint.port == 80
        assert endpoint.secure is False

    def test_explicit_port(self):
        assert parse_endpoint("https://api.example.com:8080").target == "api.example.com:8080"

    def test_scheme_is_case_insensitive(self):
        assert parse_endpoint("HTTPS://api.example.com").secure is True

    def test_ipv6_host_is_bracketed(self):
        assert parse_endpoint("http://[::1]:50051").target == "[::1]:50051"

    def test_surrounding_whitespace_ignored(self):
        assert parse_endpoint("  http://localhost:50051  ").target == "localhost:50051"

    @pytest.mark.parametrize(
        "url",
        ["not-a-url", "ftp://invalid-scheme.com", "file:///local/path", "https://", "http://host:notaport"],
    )
    def test_invalid_urls(self, url):
        with pytest.raises(ValueError, match="must be a valid HTTP or HTTPS URL"):
            parse_endpoint(url)

    def test_blank_url(self):
        with pytest.raises(ValueError, match="base_url is required"):
            parse_endpoint("   ")
