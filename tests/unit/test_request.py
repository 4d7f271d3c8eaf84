"""
Unit tests for HTTP request parsing.
"""

import pytest

from staticserver.http.methods import HTTPMethod
from staticserver.http.request import HTTPRequest, parse_request


class TestParseRequest:
    """Tests for parse_request()."""

    def test_parse_simple_get(self):
        """Test parsing a typical browser request."""
        raw = (
            b"GET /index.html HTTP/1.1\r\n"
            b"Host: localhost:1024\r\n"
            b"User-Agent: pytest\r\n"
            b"\r\n"
        )
        request = parse_request(raw)

        assert request == HTTPRequest(method=HTTPMethod.GET, resource="/index.html")

    @pytest.mark.parametrize("method", list(HTTPMethod))
    def test_parse_every_method(self, method):
        """Test that each known method parses."""
        raw = f"{method.value} / HTTP/1.1\r\n\r\n".encode()
        assert parse_request(raw).method is method

    def test_unknown_method(self):
        """Test that an unknown method yields None."""
        assert parse_request(b"FOO / HTTP/1.1\r\n\r\n") is None

    def test_lowercase_method(self):
        """Test that methods are case-sensitive."""
        assert parse_request(b"get / HTTP/1.1\r\n\r\n") is None

    def test_invalid_utf8_method(self):
        """Test that a garbled method token is rejected, not an error."""
        assert parse_request(b"G\xffT / HTTP/1.1\r\n\r\n") is None

    @pytest.mark.parametrize("raw", [
        b"",
        b"GET",
        b"GET\r\n\r\n",
        b"/index.html",
    ])
    def test_fewer_than_two_tokens(self, raw):
        """Test that a buffer without a space yields None."""
        assert parse_request(raw) is None

    def test_invalid_utf8_resource(self):
        """Test that the resource must be strict UTF-8."""
        assert parse_request(b"GET /caf\xe9 HTTP/1.1\r\n\r\n") is None

    def test_utf8_resource(self):
        """Test that non-ASCII UTF-8 resources are kept."""
        request = parse_request("GET /café.html HTTP/1.1\r\n\r\n".encode("utf-8"))
        assert request.resource == "/café.html"

    def test_resource_not_url_decoded(self):
        """Test that percent escapes are left alone."""
        request = parse_request(b"GET /a%20b.txt HTTP/1.1\r\n\r\n")
        assert request.resource == "/a%20b.txt"

    def test_query_string_kept(self):
        """Test that the query string stays part of the resource."""
        request = parse_request(b"GET /page.html?v=2 HTTP/1.1\r\n\r\n")
        assert request.resource == "/page.html?v=2"

    def test_resource_without_version(self):
        """Test that the second token runs to the end of the buffer."""
        request = parse_request(b"GET /index.html")
        assert request.resource == "/index.html"

        request = parse_request(b"GET /index.html\r\n\r\n")
        assert request.resource == "/index.html\r\n\r\n"

    def test_empty_resource(self):
        """Test two consecutive spaces: an empty resource."""
        request = parse_request(b"GET  HTTP/1.1\r\n\r\n")
        assert request.resource == ""

    def test_headers_ignored(self):
        """Test that garbage after the request line doesn't matter."""
        request = parse_request(b"HEAD /x HTTP/1.1\r\n\xff\xfe binary junk \x00")
        assert request == HTTPRequest(method=HTTPMethod.HEAD, resource="/x")


class TestHTTPRequest:
    """Tests for HTTPRequest dataclass."""

    def test_wants_directory(self):
        """Test trailing-slash detection."""
        assert HTTPRequest(HTTPMethod.GET, "/sub/").wants_directory
        assert not HTTPRequest(HTTPMethod.GET, "/sub").wants_directory

    def test_str(self):
        """Test the form used in the access log."""
        assert str(HTTPRequest(HTTPMethod.GET, "/a.css")) == "GET /a.css"

    def test_immutable(self):
        """Test that requests are frozen."""
        request = HTTPRequest(HTTPMethod.GET, "/")
        with pytest.raises(AttributeError):
            request.resource = "/other"
