"""Reporting agent: fold category analyses into a score and prioritized recommendations."""

import json
import math
import time
from datetime import datetime, timezone

from ai_service import call_agent_with_json
from models import (
    AgentResponse,
    BacklinkAnalysis,
    CompetitorAnalysis,
    ContentAnalysis,
    KeywordAnalysis,
    Recommendation,
    ReportSynthesis,
    SEOReport,
    TechnicalAnalysis,
)

SYSTEM_PROMPT = """You are an expert SEO Report Generator agent. Your job is to synthesize all SEO analysis data into actionable recommendations prioritized by impact.

Analyze all the provided SEO data and generate prioritized recommendations.

Return a JSON response with this structure:
{
  "overall_score": 0-100,
  "recommendations": [
    {
      "priority": "high/medium/low",
      "category": "content/technical/keywords/backlinks/competitor",
      "title": "Short recommendation title",
      "description": "Detailed explanation of what to do and why",
      "impact": "Expected impact description"
    }
  ]
}

Scoring guidelines:
- 90-100: Excellent SEO, minor optimizations only
- 70-89: Good SEO, some improvements needed
- 50-69: Average SEO, significant improvements needed
- 30-49: Poor SEO, major issues to address
- 0-29: Critical SEO issues, immediate action required

Prioritization:
- High: Issues affecting rankings or user experience significantly
- Medium: Optimizations that would improve performance
- Low: Nice-to-have improvements

Provide 5-10 specific, actionable recommendations sorted by priority.

Return ONLY the JSON, no additional text."""

USER_TEMPLATE = """Generate an SEO report with prioritized recommendations based on this analysis:

URL: {url}

=== CONTENT ANALYSIS ===
{content}

=== TECHNICAL ANALYSIS ===
{technical}

=== KEYWORD ANALYSIS ===
{keywords}

=== BACKLINK ANALYSIS ===
{backlinks}

=== COMPETITOR ANALYSIS ===
{competitors}

Based on all this data:
1. Calculate an overall SEO score (0-100)
2. Generate 5-10 prioritized recommendations
3. Focus on the highest-impact improvements first
4. Make recommendations specific and actionable"""

PRIORITY_ORDER = {"high": 0, "medium": 1, "low": 2}
CATEGORIES = {"content", "technical", "keywords", "backlinks", "competitor"}
_CATEGORY_ALIASES = {"keyword": "keywords", "backlink": "backlinks", "competitors": "competitor"}


def _section(data: dict | None) -> str:
    return json.dumps(data, indent=2) if data else "Not analyzed"


def build_user_message(
    url: str,
    content: ContentAnalysis | None = None,
    technical: TechnicalAnalysis | None = None,
    keywords: KeywordAnalysis | None = None,
    backlinks: BacklinkAnalysis | None = None,
    competitors: CompetitorAnalysis | None = None,
) -> str:
    return USER_TEMPLATE.format(
        url=url,
        content=_section(content),
        technical=_section(technical),
        keywords=_section(keywords),
        backlinks=_section(backlinks),
        competitors=_section(competitors),
    )


def _normalize_synthesis(raw: dict) -> ReportSynthesis:
    """Coerce the model's answer into a clamped score and a sorted recommendation list."""
    def score(v) -> int:
        try:
            value = float(v)
        except (TypeError, ValueError):
            return 0
        return int(math.floor(min(100.0, max(0.0, value)) + 0.5))

    def recommendation_list(v) -> list[Recommendation]:
        if not isinstance(v, list):
            return []
        out: list[Recommendation] = []
        for item in v:
            if not isinstance(item, dict):
                continue
            title = str(item.get("title") or "").strip()
            if not title:
                continue
            priority = str(item.get("priority") or "").strip().lower()
            category = str(item.get("category") or "").strip().lower()
            category = _CATEGORY_ALIASES.get(category, category)
            out.append(
                {
                    "priority": priority if priority in PRIORITY_ORDER else "medium",
                    "category": category if category in CATEGORIES else "technical",
                    "title": title,
                    "description": str(item.get("description") or "").strip(),
                    "impact": str(item.get("impact") or "").strip(),
                }
            )
        out.sort(key=lambda rec: PRIORITY_ORDER[rec["priority"]])
        return out

    return {
        "overall_score": score(raw.get("overall_score", raw.get("overallScore"))),
        "recommendations": recommendation_list(raw.get("recommendations")),
    }


def generate_report(
    url: str,
    content: ContentAnalysis | None = None,
    technical: TechnicalAnalysis | None = None,
    keywords: KeywordAnalysis | None = None,
    backlinks: BacklinkAnalysis | None = None,
    competitors: CompetitorAnalysis | None = None,
) -> AgentResponse:
    try:
        user_message = build_user_message(url, content, technical, keywords, backlinks, competitors)
        parsed = call_agent_with_json(SYSTEM_PROMPT, user_message)
        return {"success": True, "data": _normalize_synthesis(parsed)}
    except Exception as e:
        return {"success": False, "error": f"Report generation failed: {e}"}


def create_full_report(
    url: str,
    overall_score: int,
    recommendations: list[Recommendation],
    content: ContentAnalysis | None = None,
    technical: TechnicalAnalysis | None = None,
    keywords: KeywordAnalysis | None = None,
    backlinks: BacklinkAnalysis | None = None,
    competitors: CompetitorAnalysis | None = None,
) -> SEOReport:
    """Assemble the final report. Categories that were not analyzed are left out."""
    report: SEOReport = {
        "id": f"report-{int(time.time() * 1000)}",
        "url": url,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "overall_score": overall_score,
    }
    categories = {
        "content": content,
        "technical": technical,
        "keywords": keywords,
        "backlinks": backlinks,
        "competitors": competitors,
    }
    for key, value in categories.items():
        if value is not None:
            report[key] = value
    report["recommendations"] = list(recommendations)
    return report
