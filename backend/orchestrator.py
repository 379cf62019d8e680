"""Orchestrator: scrape once, fan out the category agents, then synthesize.

Pipeline: scrape -> run enabled agents in parallel -> keep the ones that
succeeded -> reporting agent -> final report.
"""

from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor

from backlink_agent import analyze_backlinks
from competitor_agent import analyze_competitors
from content_agent import analyze_content
from keyword_agent import analyze_keywords
from models import AgentResponse, AnalysisOptions, OrchestratorProgress, PageData, SEOReport
from reporting_agent import create_full_report, generate_report
from scraper import scrape_page
from technical_agent import analyze_technical

MAX_PARALLEL_AGENTS = 5

ProgressListener = Callable[[OrchestratorProgress], None]

# Flag name -> report key. Defaults match a quick analysis.
_CATEGORY_FLAGS = {
    "include_content": ("content", True),
    "include_technical": ("technical", True),
    "include_keywords": ("keywords", False),
    "include_backlinks": ("backlinks", False),
    "include_competitors": ("competitors", False),
}


def _agents() -> dict[str, Callable[[PageData], AgentResponse]]:
    # Resolved per call so the module-level names can be swapped out.
    return {
        "content": analyze_content,
        "technical": analyze_technical,
        "keywords": analyze_keywords,
        "backlinks": analyze_backlinks,
        "competitors": analyze_competitors,
    }


def _settle(name: str, future: Future) -> AgentResponse:
    try:
        result = future.result()
    except Exception as e:
        return {"success": False, "error": f"{name.capitalize()} analysis failed: {e}"}
    if not isinstance(result, dict):
        return {"success": False, "error": f"{name.capitalize()} analysis returned no result"}
    return result


def run_seo_analysis(
    request: AnalysisOptions,
    on_progress: ProgressListener | None = None,
) -> SEOReport:
    """
    Run a full audit for request["url"].
    Scrape failures propagate as ScrapeError. Individual agent failures only
    drop their category from the report. A failed synthesis yields score 0
    and no recommendations.
    """
    url = request["url"]
    enabled = [
        key for flag, (key, default) in _CATEGORY_FLAGS.items() if request.get(flag, default)
    ]

    def report(stage: str, progress: int, message: str) -> None:
        if on_progress is not None:
            on_progress({"stage": stage, "progress": progress, "message": message})

    # 1. Scrape the page
    report("scraping", 10, "Fetching page content...")
    page = scrape_page(url)
    report("scraping", 20, "Page content fetched successfully")

    # 2. Run enabled agents in parallel
    report("analyzing", 25, "Starting AI agent analysis...")
    print(f"ORCHESTRATOR: url={url} agents={','.join(enabled) or 'none'}")

    agents = _agents()
    results: dict[str, AgentResponse] = {}
    if enabled:
        with ThreadPoolExecutor(max_workers=min(MAX_PARALLEL_AGENTS, len(enabled))) as pool:
            futures = {key: pool.submit(agents[key], page) for key in enabled}
            for key, future in futures.items():
                results[key] = _settle(key, future)

    category_data: dict[str, dict] = {}
    for key, result in results.items():
        if result.get("success") and isinstance(result.get("data"), dict):
            category_data[key] = result["data"]
        else:
            print(f"ORCHESTRATOR: {key} skipped: {result.get('error', 'no data')}")
    report("analyzing", 70, "All agents completed analysis")

    # 3. Synthesize
    report("reporting", 80, "Generating comprehensive report...")
    synthesis = generate_report(url, **category_data)
    if synthesis.get("success"):
        overall_score = synthesis["data"]["overall_score"]
        recommendations = synthesis["data"]["recommendations"]
    else:
        print(f"ORCHESTRATOR: synthesis failed: {synthesis.get('error')}")
        overall_score = 0
        recommendations = []
    report("reporting", 95, "Report generated successfully")

    # 4. Final report
    final_report = create_full_report(url, overall_score, recommendations, **category_data)
    report("complete", 100, "Analysis complete!")
    return final_report


def run_quick_analysis(url: str, on_progress: ProgressListener | None = None) -> SEOReport:
    return run_seo_analysis(
        {
            "url": url,
            "include_content": True,
            "include_technical": True,
            "include_keywords": False,
            "include_backlinks": False,
            "include_competitors": False,
        },
        on_progress,
    )


def run_full_analysis(url: str, on_progress: ProgressListener | None = None) -> SEOReport:
    return run_seo_analysis(
        {
            "url": url,
            "include_content": True,
            "include_technical": True,
            "include_keywords": True,
            "include_backlinks": True,
            "include_competitors": True,
        },
        on_progress,
    )
