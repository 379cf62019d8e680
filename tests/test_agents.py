import pytest

import backlink_agent
import competitor_agent
import content_agent
import keyword_agent
import reporting_agent
import technical_agent

AGENTS = [
    (content_agent, content_agent.analyze_content, "Content"),
    (technical_agent, technical_agent.analyze_technical, "Technical"),
    (keyword_agent, keyword_agent.analyze_keywords, "Keyword"),
    (backlink_agent, backlink_agent.analyze_backlinks, "Backlink"),
    (competitor_agent, competitor_agent.analyze_competitors, "Competitor"),
]


@pytest.mark.parametrize("module, analyze, label", AGENTS)
def test_agent_returns_parsed_data(monkeypatch, page_data, module, analyze, label):
    prompts = []

    def fake_call(system_prompt, user_message, max_tokens=None):
        prompts.append((system_prompt, user_message))
        return {"score": 80}

    monkeypatch.setattr(module, "call_agent_with_json", fake_call)
    result = analyze(page_data)

    assert result == {"success": True, "data": {"score": 80}}
    system_prompt, user_message = prompts[0]
    assert system_prompt == module.SYSTEM_PROMPT
    assert "https://example.com/blog/post" in user_message


@pytest.mark.parametrize("module, analyze, label", AGENTS)
def test_agent_wraps_failures(monkeypatch, page_data, module, analyze, label):
    def fake_call(system_prompt, user_message, max_tokens=None):
        raise ValueError("model unavailable")

    monkeypatch.setattr(module, "call_agent_with_json", fake_call)
    result = analyze(page_data)

    assert result["success"] is False
    assert result["error"] == f"{label} analysis failed: model unavailable"
    assert "data" not in result


def test_content_prompt_includes_local_metrics(page_data):
    message = content_agent.build_user_message(page_data)
    assert "- H1: Gardening for Beginners" in message
    assert "- Total: 2" in message
    assert "- With Alt Text: 1" in message
    assert "- Without Alt Text: 1" in message
    assert '"gardening": 2' in message
    assert "Readability Score: " in message


def test_technical_prompt_includes_markup_signals(page_data):
    message = technical_agent.build_user_message(page_data)
    assert "Load Time: 420ms" in message
    assert "- Has Viewport Meta: True" in message
    assert "- Canonical URL: https://example.com/blog/post" in message
    assert "- Schema Types Found: Article" in message
    assert "- External Links: 1" in message
    assert "https://seeds.example.org/catalog" in message


def test_backlink_prompt_lists_external_anchors(page_data):
    message = backlink_agent.build_user_message(page_data)
    assert '- https://seeds.example.org/catalog (anchor: "Seed catalog")' in message


def test_competitor_prompt_names_domain(page_data):
    message = competitor_agent.build_user_message(page_data)
    assert "Domain: example.com" in message


def test_report_synthesis_is_normalized(monkeypatch):
    def fake_call(system_prompt, user_message, max_tokens=None):
        return {
            "overall_score": 140,
            "recommendations": [
                {"priority": "low", "category": "content", "title": "Add FAQ", "description": "d", "impact": "i"},
                {"priority": "urgent", "category": "keyword", "title": "Target long tail"},
                {"priority": "high", "category": "technical", "title": "Add canonical"},
                {"priority": "high", "category": "content", "title": ""},
                "not a dict",
            ],
        }

    monkeypatch.setattr(reporting_agent, "call_agent_with_json", fake_call)
    result = reporting_agent.generate_report("https://example.com/", content={"title": {}})

    assert result["success"] is True
    data = result["data"]
    assert data["overall_score"] == 100
    assert [rec["title"] for rec in data["recommendations"]] == [
        "Add canonical",
        "Target long tail",
        "Add FAQ",
    ]
    assert data["recommendations"][1]["priority"] == "medium"
    assert data["recommendations"][1]["category"] == "keywords"


@pytest.mark.parametrize(
    "raw, expected",
    [(-5, 0), ("63.6", 64), (50.5, 51), (62.5, 63), ("n/a", 0), (None, 0)],
)
def test_report_score_is_clamped(monkeypatch, raw, expected):
    monkeypatch.setattr(
        reporting_agent,
        "call_agent_with_json",
        lambda system_prompt, user_message, max_tokens=None: {"overall_score": raw},
    )
    result = reporting_agent.generate_report("https://example.com/")
    assert result["data"]["overall_score"] == expected
    assert result["data"]["recommendations"] == []


def test_report_prompt_marks_missing_categories():
    message = reporting_agent.build_user_message("https://example.com/", technical={"links": {"internal": 3}})
    assert "=== CONTENT ANALYSIS ===\nNot analyzed" in message
    assert '"internal": 3' in message


def test_generate_report_wraps_failures(monkeypatch):
    def fake_call(system_prompt, user_message, max_tokens=None):
        raise RuntimeError("bad gateway")

    monkeypatch.setattr(reporting_agent, "call_agent_with_json", fake_call)
    result = reporting_agent.generate_report("https://example.com/")
    assert result == {"success": False, "error": "Report generation failed: bad gateway"}


def test_create_full_report_omits_missing_categories():
    report = reporting_agent.create_full_report(
        "https://example.com/",
        55,
        [],
        content={"title": {"text": "x"}},
        keywords={"primary_keywords": []},
    )
    assert report["id"].startswith("report-")
    assert report["url"] == "https://example.com/"
    assert report["overall_score"] == 55
    assert report["content"] == {"title": {"text": "x"}}
    assert report["keywords"] == {"primary_keywords": []}
    for key in ("technical", "backlinks", "competitors"):
        assert key not in report
    assert report["recommendations"] == []
    assert report["timestamp"].endswith("+00:00")
