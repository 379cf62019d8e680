"""Content agent: on-page copy, headings and image alt coverage."""

import json

from ai_service import call_agent_with_json
from models import AgentResponse, PageData
from text_metrics import calculate_readability, count_words, extract_keywords

SYSTEM_PROMPT = """You are an expert SEO Content Analyst agent. Your job is to analyze web page content and provide actionable SEO recommendations.

Analyze the provided page data and return a JSON response with the following structure:
{
  "title": {
    "text": "the page title",
    "length": number,
    "score": 0-100,
    "suggestions": ["suggestion 1", "suggestion 2"]
  },
  "meta_description": {
    "text": "the meta description",
    "length": number,
    "score": 0-100,
    "suggestions": ["suggestion 1", "suggestion 2"]
  },
  "headings": {
    "h1": ["h1 texts"],
    "h2": ["h2 texts"],
    "h3": ["h3 texts"],
    "structure": "description of heading structure",
    "score": 0-100,
    "suggestions": ["suggestion 1"]
  },
  "content": {
    "word_count": number,
    "readability_score": 0-100,
    "keyword_density": {"keyword": density},
    "suggestions": ["suggestion 1"]
  },
  "images": {
    "total": number,
    "with_alt": number,
    "without_alt": number,
    "suggestions": ["suggestion 1"]
  }
}

Key SEO best practices to check:
- Title should be 50-60 characters
- Meta description should be 150-160 characters
- Should have exactly one H1 tag
- Headings should follow hierarchy (H1 > H2 > H3)
- Content should be at least 300 words for most pages
- All images should have descriptive alt text
- Keyword density should be 1-3% for primary keywords

Return ONLY the JSON, no additional text."""

USER_TEMPLATE = """Analyze this page for SEO content optimization:

URL: {url}
Title: {title}
Meta Description: {meta_description}

Headings:
- H1: {h1}
- H2: {h2}
- H3: {h3}

Content Stats:
- Word Count: {word_count}
- Readability Score: {readability}/100
- Top Keywords: {keywords}

Images:
- Total: {total_images}
- With Alt Text: {with_alt}
- Without Alt Text: {without_alt}

Content Sample (first 1000 chars):
{sample}"""


def _join_or_none(values: list[str]) -> str:
    return ", ".join(values) or "None found"


def build_user_message(page: PageData) -> str:
    headings = page["headings"]
    with_alt = sum(1 for img in page["images"] if img["alt"].strip())

    return USER_TEMPLATE.format(
        url=page["url"],
        title=page["title"],
        meta_description=page["meta_description"],
        h1=_join_or_none(headings["h1"]),
        h2=_join_or_none(headings["h2"][:10]),
        h3=_join_or_none(headings["h3"][:10]),
        word_count=count_words(page["content"]),
        readability=calculate_readability(page["content"]),
        keywords=json.dumps(extract_keywords(page["content"])),
        total_images=len(page["images"]),
        with_alt=with_alt,
        without_alt=len(page["images"]) - with_alt,
        sample=page["content"][:1000],
    )


def analyze_content(page: PageData) -> AgentResponse:
    try:
        analysis = call_agent_with_json(SYSTEM_PROMPT, build_user_message(page))
        return {"success": True, "data": analysis}
    except Exception as e:
        return {"success": False, "error": f"Content analysis failed: {e}"}
