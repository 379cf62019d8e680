"""Keyword agent."""

from ai_service import call_agent_with_json
from models import AgentResponse, PageData
from text_metrics import extract_keywords

SYSTEM_PROMPT = """You are an expert SEO Keyword Research agent. Your job is to analyze page content and provide comprehensive keyword recommendations.

Analyze the provided page data and return a JSON response with this structure:
{
  "primary_keywords": [
    {
      "keyword": "main keyword",
      "volume": "high/medium/low",
      "difficulty": "easy/medium/hard",
      "opportunity": "description of opportunity"
    }
  ],
  "secondary_keywords": [
    {
      "keyword": "secondary keyword",
      "volume": "high/medium/low",
      "difficulty": "easy/medium/hard",
      "opportunity": "description"
    }
  ],
  "long_tail_suggestions": [
    "long tail keyword phrase 1",
    "long tail keyword phrase 2"
  ],
  "content_gaps": [
    "topic or keyword the page should cover but doesn't"
  ],
  "competitor_keywords": [
    "keywords competitors likely target"
  ]
}

Keyword research best practices:
- Primary keywords should match page intent
- Long-tail keywords often have less competition
- Identify content gaps for expansion opportunities
- Consider user search intent (informational, transactional, navigational)
- Suggest LSI (Latent Semantic Indexing) keywords

Return ONLY the JSON, no additional text."""

USER_TEMPLATE = """Analyze keywords and provide recommendations for this page:

URL: {url}
Title: {title}
Meta Description: {meta_description}

Current Top Keywords (by frequency):
{keyword_lines}

H1 Headings: {h1}
H2 Headings: {h2}

Content Sample:
{sample}

Based on this content, identify:
1. Primary keywords the page is targeting or should target
2. Secondary keywords to strengthen the content
3. Long-tail keyword opportunities
4. Content gaps and missing topics
5. Keywords competitors in this niche likely target"""


def build_user_message(page: PageData) -> str:
    keywords = list(extract_keywords(page["content"]).items())[:15]
    keyword_lines = "\n".join(f'- "{word}": {count} occurrences' for word, count in keywords)

    return USER_TEMPLATE.format(
        url=page["url"],
        title=page["title"],
        meta_description=page["meta_description"],
        keyword_lines=keyword_lines or "- None found",
        h1=", ".join(page["headings"]["h1"]) or "None",
        h2=", ".join(page["headings"]["h2"][:5]) or "None",
        sample=page["content"][:1500],
    )


def analyze_keywords(page: PageData) -> AgentResponse:
    try:
        analysis = call_agent_with_json(SYSTEM_PROMPT, build_user_message(page))
        return {"success": True, "data": analysis}
    except Exception as e:
        return {"success": False, "error": f"Keyword analysis failed: {e}"}
