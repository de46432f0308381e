# tests/core/test_url_utils.py
import pytest

from pagespec.utils.text_utils import normalize_whitespace, truncate
from pagespec.utils.url_utils import UrlUtils


@pytest.mark.parametrize("href, expected", [
    ("/about", True),
    ("https://other.com", True),
    ("#top", False),
    ("javascript:void(0)", False),
    ("mailto:a@b.c", False),
    ("tel:123", False),
    ("", False),
    (None, False),
])
def test_is_navigable_href(href, expected):
    assert UrlUtils.is_navigable_href(href) is expected


def test_resolve():
    assert UrlUtils.resolve("https://example.com/blog/", "post-1") == "https://example.com/blog/post-1"
    assert UrlUtils.resolve("", "/about") is None
    assert UrlUtils.resolve("https://example.com", "http://[::1") is None


@pytest.mark.parametrize("url, expected", [
    ("https://example.com/a", True),
    ("https://EXAMPLE.com:443/b", True),
    ("http://example.com/a", False),
    ("https://www.example.com/a", False),
    ("https://example.com:8443/a", False),
])
def test_is_internal_url(url, expected):
    assert UrlUtils.is_internal_url(url, "https://example.com") is expected


def test_normalize_whitespace():
    assert normalize_whitespace("  a\n\t b\u200b c  ") == "a b c"
    assert normalize_whitespace("") == ""


def test_truncate():
    assert truncate("short", 10) == "short"
    assert truncate("a" * 20, 10) == "aaaaaaa..."
