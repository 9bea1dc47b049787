import pytest

from stellar_snaps.link_utils import (
    absolutize,
    candidate_urls,
    extract_domain,
    extract_path,
    extract_urls_from_text,
    is_navigable_href,
    is_shortener_url,
    normalize_domain,
    origin_for_domain,
    url_from_link_text,
)


def test_extract_urls_from_text_trims_trailing_punctuation_and_dedupes():
    text = "Pay me at https://stellar-snaps.vercel.app/s/abc123. Or (https://t.co/xyz)! https://t.co/xyz"

    assert extract_urls_from_text(text) == [
        "https://stellar-snaps.vercel.app/s/abc123",
        "https://t.co/xyz",
    ]
    assert extract_urls_from_text(None) == []


@pytest.mark.parametrize(
    "url, expected",
    [
        ("https://t.co/abc", True),
        ("https://bit.ly/abc", True),
        ("https://www.bit.ly/abc", True),
        ("https://RB.GY/abc", True),
        ("https://notbit.ly/abc", False),
        ("https://stellar-snaps.vercel.app/s/abc", False),
        ("not a url", False),
    ],
)
def test_is_shortener_url(url, expected):
    assert is_shortener_url(url) is expected


@pytest.mark.parametrize(
    "url, expected",
    [
        ("https://Stellar-Snaps.Vercel.App/s/abc", "stellar-snaps.vercel.app"),
        ("http://localhost:3000/s/abc", "localhost:3000"),
        ("https://example.com:443/x", "example.com"),
        ("http://example.com:80/x", "example.com"),
        ("https://example.com:8443/x", "example.com:8443"),
        ("/s/abc", ""),
        ("http://[::1", ""),
    ],
)
def test_extract_domain(url, expected):
    assert extract_domain(url) == expected


def test_normalize_domain_strips_www_and_case():
    assert normalize_domain(" WWW.Example.com ") == "example.com"
    assert normalize_domain("localhost:3000") == "localhost:3000"


def test_extract_path():
    assert extract_path("https://example.com/s/abc?x=1#y") == "/s/abc"
    assert extract_path("https://example.com") == ""


def test_origin_for_domain_uses_http_only_for_localhost():
    assert origin_for_domain("localhost:3000") == "http://localhost:3000"
    assert origin_for_domain("stellar-snaps.vercel.app") == "https://stellar-snaps.vercel.app"


@pytest.mark.parametrize(
    "href, expected",
    [
        ("https://example.com", True),
        ("/s/abc", True),
        ("", False),
        (None, False),
        ("#top", False),
        ("javascript:void(0)", False),
        ("JavaScript:alert(1)", False),
        ("mailto:someone@example.com", False),
    ],
)
def test_is_navigable_href(href, expected):
    assert is_navigable_href(href) is expected


def test_absolutize_resolves_relative_and_drops_other_schemes():
    assert absolutize("/s/abc", "https://example.com/feed") == "https://example.com/s/abc"
    assert absolutize("https://t.co/x", "https://example.com/") == "https://t.co/x"
    assert absolutize("/s/abc", None) is None
    assert absolutize("ftp://example.com/x", None) is None


def test_url_from_link_text():
    assert url_from_link_text("stellar-snaps.vercel.app/s/abc123") == "https://stellar-snaps.vercel.app/s/abc123"
    assert url_from_link_text("see https://example.com/s/abc") == "https://example.com/s/abc"
    assert url_from_link_text("stellar-snaps.vercel.app/s/ab…") is None
    assert url_from_link_text("https://stellar-snaps.vercel.app/s/ab...") is None
    assert url_from_link_text("Click here") is None
    assert url_from_link_text(None) is None


def test_candidate_urls_href_first_then_text():
    urls = candidate_urls("https://t.co/xyz", "stellar-snaps.vercel.app/s/abc123", "https://x.com/home")

    assert urls == ["https://t.co/xyz", "https://stellar-snaps.vercel.app/s/abc123"]


def test_candidate_urls_does_not_repeat_href_from_text():
    urls = candidate_urls("/s/abc123", "stellar-snaps.vercel.app/s/abc123", "https://stellar-snaps.vercel.app/")

    assert urls == ["https://stellar-snaps.vercel.app/s/abc123"]


def test_candidate_urls_skips_non_navigable_href_even_with_url_text():
    assert candidate_urls("#", "https://stellar-snaps.vercel.app/s/abc123", None) == []
