"""Page scraper: fetch one URL and extract the on-page SEO signals.

Extracts title, meta description, headings, visible content, images and
the link profile. Does NOT crawl: links are classified, never followed.
"""

import json as _json
import os
from pathlib import Path
import re
from urllib.parse import urljoin, urlparse

import requests
from bs4 import BeautifulSoup
from dotenv import load_dotenv

from models import ImageItem, LinkItem, PageData, TechnicalSignals

load_dotenv(dotenv_path=Path(__file__).resolve().parent / ".env")

_REQUEST_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/122.0.0.0 Safari/537.36 SEOAgentBot/1.0"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
}

SCRAPER_TIMEOUT_SECONDS = float(os.getenv("SCRAPER_TIMEOUT_SECONDS", "12"))

_SKIPPED_HREF_PREFIXES = ("javascript:", "mailto:", "tel:")
_NON_CONTENT_TAGS = ["script", "style", "nav", "footer", "header", "aside"]


class ScrapeError(Exception):
    """Raised when a page cannot be fetched or parsed."""


def _hostname(url: str) -> str:
    return (urlparse(url).hostname or "").lower()


def is_external_link(page_url: str, href: str) -> bool:
    """Relative hrefs resolve against `page_url`; external means another hostname."""
    return _hostname(urljoin(page_url, href)) != _hostname(page_url)


def _extract_links(soup: BeautifulSoup, url: str) -> list[LinkItem]:
    links: list[LinkItem] = []
    for a in soup.find_all("a", href=True):
        href = (a["href"] or "").strip()
        if not href or href.startswith("#") or href.lower().startswith(_SKIPPED_HREF_PREFIXES):
            continue
        try:
            resolved = urljoin(url, href)
        except ValueError:
            continue
        if urlparse(resolved).scheme not in {"http", "https"}:
            continue
        links.append(
            {
                "href": resolved,
                "text": a.get_text(" ", strip=True),
                "is_external": is_external_link(url, resolved),
            }
        )
    return links


def _extract_images(soup: BeautifulSoup) -> list[ImageItem]:
    return [
        {"src": str(img.get("src") or ""), "alt": str(img.get("alt") or "")}
        for img in soup.find_all("img")
    ]


def parse_page(url: str, html: str, status_code: int = 200, load_time: int = 0) -> PageData:
    """Extract PageData from already-fetched markup."""
    soup = BeautifulSoup(html or "", "html.parser")

    title = soup.title.get_text(strip=True) if soup.title else ""

    meta_description = ""
    for attrs in ({"name": re.compile(r"^description$", re.I)}, {"property": "og:description"}):
        tag = soup.find("meta", attrs=attrs)
        if tag and tag.get("content"):
            meta_description = (tag["content"] or "").strip()
            break

    headings = {
        level: [h.get_text(" ", strip=True) for h in soup.find_all(level)]
        for level in ("h1", "h2", "h3")
    }

    # Remove chrome before reading text, images and links
    for tag in soup.find_all(_NON_CONTENT_TAGS):
        if not tag.decomposed:
            tag.decompose()
    images = _extract_images(soup)
    links = _extract_links(soup, url)
    body = soup.body or soup
    content = re.sub(r"\s+", " ", body.get_text(" ")).strip()

    return {
        "url": url,
        "html": html or "",
        "title": title,
        "meta_description": meta_description,
        "headings": headings,
        "content": content,
        "images": images,
        "links": links,
        "status_code": status_code,
        "load_time": load_time,
    }


def scrape_page(url: str) -> PageData:
    """
    Fetch `url` and return its PageData.
    Non-2xx statuses are recorded, not raised. Network or parse failures
    raise ScrapeError naming the URL.
    """
    try:
        response = requests.get(url, timeout=SCRAPER_TIMEOUT_SECONDS, headers=_REQUEST_HEADERS)
        load_time = int(response.elapsed.total_seconds() * 1000)
        if not response.encoding or response.encoding.lower() == "iso-8859-1":
            response.encoding = response.apparent_encoding or "utf-8"
        html = response.text
    except (requests.RequestException, ValueError, OSError) as exc:
        print(f"SCRAPER ERROR: url={url} error={exc}")
        raise ScrapeError(f"Failed to scrape {url}: {exc}") from exc

    try:
        return parse_page(url, html, status_code=response.status_code, load_time=load_time)
    except Exception as exc:
        print(f"SCRAPER ERROR: url={url} parse error={exc}")
        raise ScrapeError(f"Failed to scrape {url}: {exc}") from exc


def extract_technical_signals(page: PageData) -> TechnicalSignals:
    """Read technical SEO markers from the stored markup of a scraped page."""
    soup = BeautifulSoup(page["html"], "html.parser")

    # --- Structured data ---
    schema_types: list[str] = []
    ld_scripts = soup.find_all("script", attrs={"type": "application/ld+json"})
    for script_tag in ld_scripts:
        try:
            ld = _json.loads(script_tag.string or "")
        except ValueError:
            continue
        items = ld if isinstance(ld, list) else [ld]
        for item in items:
            if not isinstance(item, dict):
                continue
            sd_type = item.get("@type", "")
            if isinstance(sd_type, list):
                schema_types.extend(str(t) for t in sd_type if t)
            elif sd_type:
                schema_types.append(str(sd_type))
    schema_types = list(dict.fromkeys(schema_types))[:10]

    # --- Canonical URL ---
    canonical_url = ""
    canonical_tag = soup.find("link", attrs={"rel": "canonical"})
    if canonical_tag and canonical_tag.get("href"):
        canonical_url = (canonical_tag["href"] or "").strip()

    # --- Robots / viewport / Open Graph ---
    robots_meta = ""
    robots_tag = soup.find("meta", attrs={"name": re.compile(r"^robots$", re.I)})
    if robots_tag and robots_tag.get("content"):
        robots_meta = (robots_tag["content"] or "").strip()

    viewport_tag = soup.find("meta", attrs={"name": re.compile(r"^viewport$", re.I)})
    og_tag = soup.find("meta", attrs={"property": re.compile(r"^og:", re.I)})

    internal = sum(1 for link in page["links"] if not link["is_external"])

    return {
        "has_https": page["url"].lower().startswith("https://"),
        "has_viewport": viewport_tag is not None,
        "has_canonical": canonical_tag is not None,
        "canonical_url": canonical_url,
        "robots_meta": robots_meta,
        "has_json_ld": len(ld_scripts) > 0,
        "schema_types": schema_types,
        "has_open_graph": og_tag is not None,
        "internal_links": internal,
        "external_links": len(page["links"]) - internal,
    }
