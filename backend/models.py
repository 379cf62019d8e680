"""Data models and types used across the backend.

Types for scraped pages, agent output and the final report live here.
Category analyses are shaped by convention in each agent prompt; nothing
validates them beyond "is a JSON object".
"""

from typing import Literal, TypedDict


class ImageItem(TypedDict):
    src: str
    alt: str


class LinkItem(TypedDict):
    href: str
    text: str
    is_external: bool


class Headings(TypedDict):
    h1: list[str]
    h2: list[str]
    h3: list[str]


class PageData(TypedDict):
    """Structured output from the page scraper."""

    url: str
    html: str
    title: str
    meta_description: str
    headings: Headings
    content: str
    images: list[ImageItem]
    links: list[LinkItem]
    status_code: int
    load_time: int


class TechnicalSignals(TypedDict):
    """Markup-level markers pre-computed for the technical agent."""

    has_https: bool
    has_viewport: bool
    has_canonical: bool
    canonical_url: str
    robots_meta: str
    has_json_ld: bool
    schema_types: list[str]
    has_open_graph: bool
    internal_links: int
    external_links: int


# Category payloads returned by the model. Keys follow the JSON shape each
# prompt asks for; values are whatever the model returned.
ContentAnalysis = dict
TechnicalAnalysis = dict
KeywordAnalysis = dict
BacklinkAnalysis = dict
CompetitorAnalysis = dict

Priority = Literal["high", "medium", "low"]
Category = Literal["content", "technical", "keywords", "backlinks", "competitor"]


class Recommendation(TypedDict):
    priority: Priority
    category: Category
    title: str
    description: str
    impact: str


class ReportSynthesis(TypedDict):
    overall_score: int
    recommendations: list[Recommendation]


class AgentResponse(TypedDict, total=False):
    """Result of a single agent call. Agents never raise past this shape."""

    success: bool
    data: dict
    error: str


class SEOReport(TypedDict, total=False):
    """Final report. Category keys are absent when not analyzed."""

    id: str
    url: str
    timestamp: str
    overall_score: int
    content: ContentAnalysis
    technical: TechnicalAnalysis
    keywords: KeywordAnalysis
    backlinks: BacklinkAnalysis
    competitors: CompetitorAnalysis
    recommendations: list[Recommendation]


class AnalysisOptions(TypedDict, total=False):
    url: str
    include_content: bool
    include_technical: bool
    include_keywords: bool
    include_backlinks: bool
    include_competitors: bool


class OrchestratorProgress(TypedDict):
    stage: str
    progress: int
    message: str
