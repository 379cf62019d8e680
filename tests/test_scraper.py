from datetime import timedelta

import pytest
import requests

import scraper
from scraper import ScrapeError, extract_technical_signals, is_external_link, parse_page


def test_parse_page_extracts_basic_fields(page_data):
    assert page_data["title"] == "Gardening for Beginners"
    assert page_data["meta_description"] == "Simple gardening tips for new growers."
    assert page_data["headings"]["h1"] == ["Gardening for Beginners"]
    assert page_data["headings"]["h2"] == ["Choosing plants", "Watering schedule"]
    assert page_data["headings"]["h3"] == ["Tomatoes"]
    assert page_data["status_code"] == 200
    assert page_data["load_time"] == 420
    assert "<title>" in page_data["html"]


def test_parse_page_content_skips_page_chrome(page_data):
    content = page_data["content"]
    assert "Gardening rewards patience." in content
    assert "Copyright footer" not in content
    assert "Home" not in content
    assert "tracking" not in content
    assert "  " not in content


def test_parse_page_images(page_data):
    assert page_data["images"] == [
        {"src": "/img/herbs.png", "alt": "Fresh herbs"},
        {"src": "/img/soil.png", "alt": ""},
    ]


def test_parse_page_links_are_resolved_and_classified(page_data):
    links = {link["href"]: link for link in page_data["links"]}
    assert set(links) == {
        "https://example.com/about",
        "https://seeds.example.org/catalog",
        "https://example.com/blog/guides/soil",
    }
    assert links["https://seeds.example.org/catalog"]["is_external"] is True
    assert links["https://example.com/blog/guides/soil"]["is_external"] is False
    assert links["https://example.com/about"]["text"] == "About us"


def test_parse_page_ignores_links_and_images_in_page_chrome():
    html = (
        "<html><body>"
        '<nav><a href="/home">Home</a><img src="logo.png" alt="Logo"></nav>'
        '<aside><a href="https://ads.example.net/">Ad</a></aside>'
        '<main><a href="/about">About</a><img src="hero.png" alt="Hero"></main>'
        '<footer><a href="https://twitter.com/x">Twitter</a></footer>'
        "</body></html>"
    )
    page = parse_page("https://example.com/", html)

    assert [link["href"] for link in page["links"]] == ["https://example.com/about"]
    assert page["images"] == [{"src": "hero.png", "alt": "Hero"}]


def test_meta_description_falls_back_to_open_graph():
    html = '<html><head><meta property="og:description" content="From OG"></head><body></body></html>'
    assert parse_page("https://example.com/", html)["meta_description"] == "From OG"


def test_parse_page_handles_empty_markup():
    page = parse_page("https://example.com/", "")
    assert page["title"] == ""
    assert page["content"] == ""
    assert page["links"] == []


@pytest.mark.parametrize(
    "href, expected",
    [
        ("/pricing", False),
        ("pricing", False),
        ("https://example.com/pricing", False),
        ("HTTPS://EXAMPLE.COM/pricing", False),
        ("https://cdn.example.com/app.js", True),
        ("//other.org/page", True),
        ("https://other.org/", True),
    ],
)
def test_is_external_link(href, expected):
    assert is_external_link("https://example.com/blog/post", href) is expected


def test_extract_technical_signals(page_data):
    signals = extract_technical_signals(page_data)
    assert signals["has_https"] is True
    assert signals["has_viewport"] is True
    assert signals["has_canonical"] is True
    assert signals["canonical_url"] == "https://example.com/blog/post"
    assert signals["has_json_ld"] is True
    assert signals["schema_types"] == ["Article"]
    assert signals["has_open_graph"] is False
    assert signals["internal_links"] == 2
    assert signals["external_links"] == 1


class FakeResponse:
    def __init__(self, text: str, status_code: int = 200):
        self.text = text
        self.status_code = status_code
        self.elapsed = timedelta(milliseconds=250)
        self.encoding = "utf-8"
        self.apparent_encoding = "utf-8"


def test_scrape_page_records_status_and_load_time(monkeypatch, sample_html):
    calls = []

    def fake_get(url, **kwargs):
        calls.append(url)
        return FakeResponse(sample_html, status_code=404)

    monkeypatch.setattr(scraper.requests, "get", fake_get)
    page = scraper.scrape_page("https://example.com/blog/post")

    assert calls == ["https://example.com/blog/post"]
    assert page["status_code"] == 404
    assert page["load_time"] == 250
    assert page["title"] == "Gardening for Beginners"


def test_scrape_page_wraps_network_errors(monkeypatch):
    def fake_get(url, **kwargs):
        raise requests.ConnectionError("connection refused")

    monkeypatch.setattr(scraper.requests, "get", fake_get)
    with pytest.raises(ScrapeError) as excinfo:
        scraper.scrape_page("https://unreachable.test/")

    assert "Failed to scrape https://unreachable.test/" in str(excinfo.value)
    assert "connection refused" in str(excinfo.value)
