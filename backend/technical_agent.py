"""Technical agent: speed, mobile, security, crawlability, schema and links."""

from ai_service import call_agent_with_json
from models import AgentResponse, PageData
from scraper import extract_technical_signals

SYSTEM_PROMPT = """You are an expert Technical SEO Analyst agent. Your job is to analyze web pages for technical SEO issues and provide actionable recommendations.

Analyze the provided page data and return a JSON response with this structure:
{
  "performance": {
    "load_time": number (in ms),
    "score": 0-100,
    "suggestions": ["suggestion 1"]
  },
  "mobile": {
    "is_mobile_friendly": boolean,
    "viewport_set": boolean,
    "score": 0-100,
    "suggestions": ["suggestion 1"]
  },
  "security": {
    "has_https": boolean,
    "has_security_headers": boolean,
    "score": 0-100,
    "suggestions": ["suggestion 1"]
  },
  "crawlability": {
    "robots_txt": boolean,
    "sitemap": boolean,
    "canonical_url": "url or null",
    "score": 0-100,
    "suggestions": ["suggestion 1"]
  },
  "schema": {
    "has_structured_data": boolean,
    "types": ["schema types found"],
    "suggestions": ["suggestion 1"]
  },
  "links": {
    "internal": number,
    "external": number,
    "broken": ["broken link urls"],
    "suggestions": ["suggestion 1"]
  }
}

Technical SEO best practices:
- Page should load in under 3 seconds
- Must have viewport meta tag for mobile
- Should use HTTPS
- Should have canonical URL defined
- Should implement structured data (JSON-LD)
- Internal links help with crawlability
- External links should be relevant and working

Return ONLY the JSON, no additional text."""

USER_TEMPLATE = """Analyze this page for technical SEO:

URL: {url}
Status Code: {status_code}
Load Time: {load_time}ms

Technical Details:
- HTTPS: {has_https}
- Has Viewport Meta: {has_viewport}
- Has Canonical Tag: {has_canonical}
- Canonical URL: {canonical_url}
- Robots Meta: {robots_meta}
- Has Open Graph Tags: {has_open_graph}
- Has JSON-LD Schema: {has_json_ld}
- Schema Types Found: {schema_types}

Links:
- Internal Links: {internal_links}
- External Links: {external_links}
- Sample External Links: {external_sample}

HTML Sample (meta section):
{html_sample}"""


def build_user_message(page: PageData) -> str:
    signals = extract_technical_signals(page)
    external_sample = [link["href"] for link in page["links"] if link["is_external"]][:5]

    return USER_TEMPLATE.format(
        url=page["url"],
        status_code=page["status_code"],
        load_time=page["load_time"],
        has_https=signals["has_https"],
        has_viewport=signals["has_viewport"],
        has_canonical=signals["has_canonical"],
        canonical_url=signals["canonical_url"] or "Not set",
        robots_meta=signals["robots_meta"] or "Not set",
        has_open_graph=signals["has_open_graph"],
        has_json_ld=signals["has_json_ld"],
        schema_types=", ".join(signals["schema_types"]) or "None",
        internal_links=signals["internal_links"],
        external_links=signals["external_links"],
        external_sample=", ".join(external_sample) or "None",
        html_sample=page["html"][:2000],
    )


def analyze_technical(page: PageData) -> AgentResponse:
    try:
        analysis = call_agent_with_json(SYSTEM_PROMPT, build_user_message(page))
        return {"success": True, "data": analysis}
    except Exception as e:
        return {"success": False, "error": f"Technical analysis failed: {e}"}
