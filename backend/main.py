"""SEO Agent Team API – FastAPI app serving the audit endpoints and the browser UI."""

from datetime import datetime, timezone
from pathlib import Path

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse

from keyword_agent import analyze_keywords
from orchestrator import run_seo_analysis
from scraper import scrape_page
from schemas import (
    AnalyzeRequest,
    KeywordRequest,
    KeywordResponse,
    UsageResponse,
    is_valid_url,
)

STATIC_DIR = Path(__file__).resolve().parent / "static"

app = FastAPI(
    title="SEO Agent Team API",
    description="Multi-agent AI SEO audit",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _require_url(url: str) -> str:
    if not url:
        raise HTTPException(status_code=400, detail="URL is required")
    if not is_valid_url(url):
        raise HTTPException(status_code=400, detail="Invalid URL format")
    return url


@app.get("/", include_in_schema=False)
def index() -> FileResponse:
    """Browser UI."""
    return FileResponse(STATIC_DIR / "index.html")


@app.post("/api/analyze")
def analyze(body: AnalyzeRequest) -> dict:
    """
    Pipeline: scrape page -> category agents in parallel -> synthesis -> report.
    """
    url = _require_url(body.url)
    try:
        return run_seo_analysis(
            {
                "url": url,
                "include_content": body.include_content,
                "include_technical": body.include_technical,
                "include_keywords": body.include_keywords,
                "include_backlinks": body.include_backlinks,
                "include_competitors": body.include_competitors,
            }
        )
    except Exception as e:
        print("ANALYSIS ERROR:", str(e))
        raise HTTPException(status_code=500, detail=f"Analysis failed: {e}") from e


@app.get("/api/analyze", response_model=UsageResponse)
def analyze_usage() -> UsageResponse:
    return UsageResponse(
        message="SEO Analysis API",
        usage='POST with { "url": "https://example.com" }',
        options={
            "include_content": "boolean (default: true)",
            "include_technical": "boolean (default: true)",
            "include_keywords": "boolean (default: true)",
            "include_backlinks": "boolean (default: true)",
            "include_competitors": "boolean (default: true)",
        },
    )


@app.post("/api/keywords", response_model=KeywordResponse)
def keywords(body: KeywordRequest) -> KeywordResponse:
    """Scrape the page and run only the keyword agent."""
    url = _require_url(body.url)
    try:
        page = scrape_page(url)
        result = analyze_keywords(page)
    except Exception as e:
        print("KEYWORD ANALYSIS ERROR:", str(e))
        raise HTTPException(status_code=500, detail=f"Keyword analysis failed: {e}") from e

    if not result.get("success"):
        raise HTTPException(status_code=500, detail=result.get("error") or "Keyword analysis failed")

    return KeywordResponse(
        url=url,
        timestamp=datetime.now(timezone.utc).isoformat(),
        keywords=result["data"],
    )


@app.get("/api/keywords", response_model=UsageResponse)
def keywords_usage() -> UsageResponse:
    return UsageResponse(
        message="Keyword Research API",
        usage='POST with { "url": "https://example.com" }',
    )


@app.get("/health")
def health() -> dict:
    """Health check for deployment."""
    return {"status": "ok"}
