# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

"""Unit tests for the URL and size helpers of the icon pipeline."""

from typing import Any

import pytest

from iconfinder.icons.utils import (
    bare_domain,
    domain_from_url,
    get_directory,
    get_origin,
    has_origin,
    infer_size_from_url,
    parse_sizes,
    resolve_url,
)

PAGE_URL = "https://ex.com/sub/page.html"


@pytest.mark.parametrize(
    ("href", "expected"),
    [
        ("icons/a.png", "https://ex.com/sub/icons/a.png"),
        ("/a.png", "https://ex.com/a.png"),
        ("//cdn.ex.com/a.png", "https://cdn.ex.com/a.png"),
        ("https://other.com/a.png", "https://other.com/a.png"),
        ("http://other.com/a.png", "http://other.com/a.png"),
        ("  /padded.png ", "https://ex.com/padded.png"),
    ],
    ids=["relative", "root-relative", "protocol-relative", "https", "http", "whitespace"],
)
def test_resolve_url(href: str, expected: str) -> None:
    """Test that hrefs resolve against the page origin or directory."""
    assert resolve_url(href, PAGE_URL) == expected


def test_resolve_url_page_without_path() -> None:
    """Test that relative hrefs on a bare origin resolve to the root directory."""
    assert resolve_url("a.png", "https://ex.com") == "https://ex.com/a.png"


def test_has_origin() -> None:
    """Test detecting URLs that carry both a scheme and a host."""
    assert has_origin("https://ex.com/page")
    assert has_origin("http://ex.com:8080")
    assert not has_origin("ex.com")
    assert not has_origin("/relative/path")


def test_get_origin_and_directory() -> None:
    """Test origin and directory extraction."""
    assert get_origin("https://ex.com:8443/a/b/c.html?q=1") == "https://ex.com:8443"
    assert get_directory("https://ex.com/a/b/c.html") == "/a/b/"
    assert get_directory("https://ex.com/a/b/") == "/a/b/"
    assert get_directory("https://ex.com") == "/"


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("https://ex.com/favicon-96x96.png", 96),
        ("https://ex.com/icons/192x192/icon.png", 192),
        ("https://ex.com/icon-64.png", 64),
        ("https://ex.com/icon_128.ico", 128),
        ("https://ex.com/favicon.ico", None),
        ("https://ex.com/icon-1.png", None),
        ("https://ex.com/icon2020.png", None),
    ],
)
def test_infer_size_from_url(url: str, expected: int | None) -> None:
    """Test that sizes embedded in icon paths are recognized."""
    assert infer_size_from_url(url) == expected


@pytest.mark.parametrize(
    ("sizes", "expected"),
    [
        ("32x32", 32),
        ("16x16 32x32 192x192", 192),
        ("180X180", 180),
        ("any", None),
        ("", None),
        (None, None),
        ("48", 48),
        (192, 192),
        (0, None),
        (True, None),
        (["192x192"], None),
        ({"width": 192}, None),
    ],
)
def test_parse_sizes(sizes: Any, expected: int | None) -> None:
    """Test parsing of `sizes` attributes."""
    assert parse_sizes(sizes) == expected


def test_bare_domain_strips_www() -> None:
    """Test that the www. prefix is removed for icon service lookups."""
    assert bare_domain("www.example.com") == "example.com"
    assert bare_domain("WWW.Example.com ") == "example.com"
    assert bare_domain("docs.example.com") == "docs.example.com"


def test_domain_from_url() -> None:
    """Test host extraction from URLs and bare domains."""
    assert domain_from_url("https://www.example.com/path") == "www.example.com"
    assert domain_from_url("example.com") == "example.com"
