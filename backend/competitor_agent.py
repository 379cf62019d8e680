"""Competitor agent: likely competitors, their strengths and the gaps to exploit."""

from urllib.parse import urlparse

from ai_service import call_agent_with_json
from models import AgentResponse, PageData
from text_metrics import count_words

SYSTEM_PROMPT = """You are an expert SEO Competitor Analysis agent. Your job is to analyze a page and provide competitive insights and recommendations.

Based on the content type and industry, identify likely competitors and provide strategic recommendations.

Return a JSON response with this structure:
{
  "competitors": [
    {
      "url": "competitor-domain.com",
      "strengths": ["strength 1", "strength 2"],
      "weaknesses": ["potential weakness 1"],
      "keywords_ranking": ["keyword they likely rank for"]
    }
  ],
  "gaps": [
    "Content or feature gap to exploit"
  ],
  "opportunities": [
    "Strategic opportunity to outrank competitors"
  ]
}

Competitor analysis best practices:
- Identify direct and indirect competitors
- Analyze content depth and quality differences
- Look for underserved keywords and topics
- Identify unique value propositions
- Find content formats competitors are missing
- Spot technical SEO advantages to leverage

Provide 3-5 likely competitors based on the industry/niche.

Return ONLY the JSON, no additional text."""

USER_TEMPLATE = """Analyze competitive landscape for this page:

URL: {url}
Domain: {domain}
Title: {title}
Meta Description: {meta_description}

Page Topics (from headings):
H1: {h1}
H2: {h2}

Content Type Analysis:
- Word Count: {word_count}
- Has Images: {has_images}
- External Links: {external_links}

Content Sample:
{sample}

Based on this content:
1. Identify 3-5 likely competitors in this space (use general industry knowledge)
2. What are their likely strengths and weaknesses?
3. What content gaps could this page exploit?
4. What strategic opportunities exist to outperform competitors?
5. What keywords might competitors be targeting?"""


def build_user_message(page: PageData) -> str:
    return USER_TEMPLATE.format(
        url=page["url"],
        domain=urlparse(page["url"]).hostname or page["url"],
        title=page["title"],
        meta_description=page["meta_description"],
        h1=", ".join(page["headings"]["h1"]) or "None",
        h2=", ".join(page["headings"]["h2"][:8]) or "None",
        word_count=count_words(page["content"]),
        has_images=len(page["images"]) > 0,
        external_links=sum(1 for link in page["links"] if link["is_external"]),
        sample=page["content"][:1500],
    )


def analyze_competitors(page: PageData) -> AgentResponse:
    try:
        analysis = call_agent_with_json(SYSTEM_PROMPT, build_user_message(page))
        return {"success": True, "data": analysis}
    except Exception as e:
        return {"success": False, "error": f"Competitor analysis failed: {e}"}
