import pytest

from validators import is_valid_code, is_valid_url


@pytest.mark.parametrize("url", [
    "http://example.com",
    "https://example.com/some/path?q=1#frag",
    "HTTPS://EXAMPLE.COM",
    "http://localhost:8080",
    "https://user:pw@example.com/",
])
def test_accepts_http_and_https(url):
    assert is_valid_url(url)


@pytest.mark.parametrize("url", [
    "",
    None,
    "example.com",
    "ftp://example.com/file",
    "javascript:alert(1)",
    "mailto:someone@example.com",
    "http://",
    "http://exa mple.com",
    "http://:80",
    "http://@",
    "https://<script>/x",
    "http://example.com:99999",
    "http://[::1",
])
def test_rejects_everything_else(url):
    assert not is_valid_url(url)


def test_custom_codes():
    assert is_valid_code("my-link_1")
    assert not is_valid_code("")
    assert not is_valid_code("has space")
    assert not is_valid_code("slash/inside")
    assert not is_valid_code("x" * 65)
    assert not is_valid_code("health")
    assert not is_valid_code("static")
