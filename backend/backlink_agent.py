"""Backlink agent.

There is no link-graph data behind this: the model estimates a plausible
profile and link building strategy from the page's own content.
"""

from ai_service import call_agent_with_json
from models import AgentResponse, PageData

SYSTEM_PROMPT = """You are an expert SEO Backlink Analyst agent. Your job is to analyze a page's link profile and provide link building recommendations.

Since we cannot access actual backlink data without external APIs, analyze the page content and provide strategic recommendations based on the content type and industry.

Return a JSON response with this structure:
{
  "total_backlinks": 0,
  "unique_domains": 0,
  "top_referrers": [
    {
      "domain": "example.com",
      "authority": "high/medium/low",
      "link_count": 1
    }
  ],
  "anchor_text_distribution": {
    "branded": 30,
    "exact match": 20,
    "partial match": 25,
    "generic": 15,
    "url": 10
  },
  "link_building_opportunities": [
    "Specific link building strategy 1",
    "Specific link building strategy 2"
  ],
  "toxic_links": []
}

Link building best practices:
- Diversify anchor text (avoid over-optimization)
- Focus on high-authority, relevant domains
- Guest posting on industry blogs
- Create linkable assets (infographics, studies, tools)
- Broken link building
- HARO (Help A Reporter Out) for PR links
- Resource page link building

Provide specific, actionable link building strategies based on the page content and industry.

Return ONLY the JSON, no additional text."""

USER_TEMPLATE = """Analyze and provide backlink/link building recommendations for this page:

URL: {url}
Title: {title}
Meta Description: {meta_description}

Current External Links on Page:
{external_links}

Page Topics (from headings):
{topics}

Content Summary:
{sample}

Based on this content:
1. What types of sites would be good backlink targets?
2. What link building strategies would work for this type of content?
3. What linkable assets could be created?
4. Recommend ideal anchor text distribution
5. Identify potential outreach opportunities"""


def build_user_message(page: PageData) -> str:
    external = [link for link in page["links"] if link["is_external"]][:10]
    external_lines = "\n".join(f'- {link["href"]} (anchor: "{link["text"]}")' for link in external)
    topics = page["headings"]["h1"] + page["headings"]["h2"][:5]

    return USER_TEMPLATE.format(
        url=page["url"],
        title=page["title"],
        meta_description=page["meta_description"],
        external_links=external_lines or "No external links found",
        topics="\n".join(topics) or "No headings found",
        sample=page["content"][:1000],
    )


def analyze_backlinks(page: PageData) -> AgentResponse:
    try:
        analysis = call_agent_with_json(SYSTEM_PROMPT, build_user_message(page))
        return {"success": True, "data": analysis}
    except Exception as e:
        return {"success": False, "error": f"Backlink analysis failed: {e}"}
