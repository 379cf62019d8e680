"""
Claude API key must be defined in a .env file in the backend root:

ANTHROPIC_API_KEY=your_real_key_here

The app loads environment variables automatically using python-dotenv.
Every agent goes through `call_agent` / `call_agent_with_json` here.
"""

from dotenv import load_dotenv
import json
import os
from pathlib import Path
import random
import re
import time

load_dotenv(dotenv_path=Path(__file__).resolve().parent / ".env")

from anthropic import Anthropic


def _dedupe_models(values: list[str]) -> list[str]:
    out: list[str] = []
    seen: set[str] = set()
    for value in values:
        model = value.strip()
        if not model or model in seen:
            continue
        out.append(model)
        seen.add(model)
    return out


DEFAULT_MODEL = "claude-3-5-haiku-20241022"
MODEL_CANDIDATES = _dedupe_models(
    [os.getenv("CLAUDE_MODEL", "").strip() or DEFAULT_MODEL]
    + os.getenv("CLAUDE_FALLBACK_MODELS", "").split(",")
)
TEMPERATURE = float(os.getenv("CLAUDE_TEMPERATURE", "0.2"))
MAX_TOKENS = int(os.getenv("CLAUDE_MAX_TOKENS", "4096"))
MAX_RETRIES = max(1, int(os.getenv("CLAUDE_MAX_RETRIES", "1")))
RETRY_BASE_SECONDS = float(os.getenv("CLAUDE_RETRY_BASE_SECONDS", "1.0"))

_FENCED_BLOCK = re.compile(r"```(?:json)?\s*\n?([\s\S]*?)\n?\s*```", re.IGNORECASE)


class AgentError(Exception):
    """Raised when the model call fails or its answer holds no JSON object."""


def _escape_inner_quotes(value: str) -> str:
    """
    Escape likely unescaped quotes inside JSON strings.
    Keeps closing quotes intact by checking the next non-space token.
    """
    out: list[str] = []
    in_string = False
    escaped = False
    length = len(value)
    i = 0

    while i < length:
        ch = value[i]
        if escaped:
            out.append(ch)
            escaped = False
            i += 1
            continue

        if ch == "\\":
            out.append(ch)
            escaped = True
            i += 1
            continue

        if ch == '"':
            if not in_string:
                in_string = True
                out.append(ch)
                i += 1
                continue

            j = i + 1
            while j < length and value[j].isspace():
                j += 1
            next_char = value[j] if j < length else ""

            # Valid string-close chars in JSON: key close before ":", value close before ",", "}", "]"
            if next_char in {":", ",", "}", "]", ""}:
                in_string = False
                out.append(ch)
            else:
                out.append('\\"')
            i += 1
            continue

        out.append(ch)
        i += 1

    return "".join(out)


def _json_candidates(text: str) -> list[str]:
    """Fenced block first, then the outermost brace span of the whole text."""
    candidates: list[str] = []
    fenced = _FENCED_BLOCK.search(text)
    if fenced and fenced.group(1).strip():
        candidates.append(fenced.group(1).strip())

    start = text.find("{")
    end = text.rfind("}")
    if start != -1 and end > start:
        span = text[start : end + 1]
        if span not in candidates:
            candidates.append(span)
    return candidates


def _decode(json_str: str) -> object:
    try:
        return json.loads(json_str)
    except ValueError:
        repaired = (
            json_str
            .replace("“", '"')
            .replace("”", '"')
            .replace("‘", "'")
            .replace("’", "'")
        )
        return json.loads(_escape_inner_quotes(repaired))


def extract_json(text: str) -> dict:
    """
    Pull a JSON object out of free-text model output.
    Tries the first fenced block, then the outermost brace span; each
    candidate gets a quote-repair pass before it is given up on.
    """
    candidates = _json_candidates((text or "").strip())
    if not candidates:
        raise AgentError("Failed to parse JSON from agent response")

    last_error: ValueError | None = None
    for json_str in candidates:
        try:
            parsed = _decode(json_str)
        except ValueError as e:
            last_error = e
            continue
        if isinstance(parsed, dict):
            return parsed

    if last_error is None:
        raise AgentError("Agent response JSON is not an object")
    print("JSON PARSE ERROR:", candidates[-1][:500])
    raise AgentError(f"Failed to parse JSON from agent response: {last_error}") from last_error


def _extract_response_text(response: object) -> str:
    content = ""
    for block in getattr(response, "content", []) or []:
        if getattr(block, "type", "text") != "text":
            continue
        text = getattr(block, "text", None)
        if text:
            content += text
    return content.strip()


def _is_retryable_error(exc: Exception) -> bool:
    msg = str(exc).lower()
    retry_tokens = (
        "overloaded",
        "529",
        "rate limit",
        "rate_limit",
        "429",
        "500",
        "502",
        "503",
        "504",
        "timeout",
    )
    return any(token in msg for token in retry_tokens)


def get_client() -> Anthropic:
    api_key = os.getenv("ANTHROPIC_API_KEY", "").strip()
    if not api_key:
        print("ERROR: ANTHROPIC_API_KEY not found in environment.")
        raise AgentError("ANTHROPIC_API_KEY not found in environment.")
    return Anthropic(api_key=api_key)


def call_agent(system_prompt: str, user_message: str, max_tokens: int | None = None) -> str:
    """
    Send one system+user exchange to Claude and return the text answer.
    Walks MODEL_CANDIDATES in order; transient errors back off and retry only
    when CLAUDE_MAX_RETRIES > 1.
    """
    client = get_client()
    token_budget = max_tokens or MAX_TOKENS
    last_error: Exception | None = None

    for model in MODEL_CANDIDATES:
        for attempt in range(MAX_RETRIES):
            try:
                response = client.messages.create(
                    model=model,
                    max_tokens=token_budget,
                    system=system_prompt,
                    messages=[{"role": "user", "content": user_message}],
                    temperature=TEMPERATURE,
                )
                content = _extract_response_text(response)
                if getattr(response, "stop_reason", None) == "max_tokens":
                    print(f"CLAUDE WARNING: output hit max_tokens for model={model}.")
                if content:
                    return content

                last_error = AgentError("Empty Claude response content.")
                if attempt < MAX_RETRIES - 1:
                    delay = RETRY_BASE_SECONDS * (2 ** attempt) + random.uniform(0, 0.35)
                    print(f"CLAUDE RETRY: model={model} empty-content wait={delay:.2f}s")
                    time.sleep(delay)
                    continue
            except Exception as e:
                last_error = e
                print(f"CLAUDE ERROR: model={model} attempt={attempt + 1}:", str(e))
                if _is_retryable_error(e) and attempt < MAX_RETRIES - 1:
                    delay = RETRY_BASE_SECONDS * (2 ** attempt) + random.uniform(0, 0.35)
                    print(f"CLAUDE RETRY: model={model} attempt={attempt + 1} wait={delay:.2f}s")
                    time.sleep(delay)
                    continue
            break

    if last_error is not None:
        raise last_error
    raise AgentError("No Claude model configured.")


def call_agent_with_json(system_prompt: str, user_message: str, max_tokens: int | None = None) -> dict:
    """Call Claude and parse its answer as a JSON object. Raises AgentError on bad JSON."""
    return extract_json(call_agent(system_prompt, user_message, max_tokens))
