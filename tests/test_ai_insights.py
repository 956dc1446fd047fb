import asyncio
import json

import pytest
from virality_scorer import ai_insights, config
from virality_scorer.ai_insights import (
    analyze_with_ai,
    extract_json_object,
    generate_ai_suggestions,
    generate_hooks,
    optimize_post,
)
from virality_scorer.errors import ParseError, ProviderError
from virality_scorer.providers.base import LLMProvider
from virality_scorer.suggestions import MAX_MERGED_SUGGESTIONS, generate_suggestions

POST = "I learned 3 lessons from my first year as a manager. What would you add?"


class FakeProvider(LLMProvider):
    def __init__(self, response="", error=None, delay=0.0):
        self.response = response
        self.error = error
        self.delay = delay
        self.calls = []

    async def generate(self, prompt, system="", json_mode=False):
        self.calls.append({"prompt": prompt, "system": system, "json_mode": json_mode})
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return self.response


@pytest.fixture
def ai_payload():
    return {
        "engagementScore": 72,
        "reachScore": 64.5,
        "viralityScore": 58,
        "suggestions": [
            {"title": "Open with the number", "description": "Lead with '3 lessons'."},
            {"title": "Add a story", "description": "Share one moment."},
        ],
        "recommendedHashtags": ["#Leadership", "management"],
        "analysis": {
            "strengths": ["clear"],
            "weaknesses": ["short"],
            "tone": "professional",
            "readability": "high",
            "callToAction": "strong",
        },
    }


def test_extract_json_object_ignores_surrounding_text():
    raw = 'Sure! Here is the analysis:\n```json\n{"a": {"b": 1}}\n```\nHope it helps.'
    assert extract_json_object(raw) == {"a": {"b": 1}}


@pytest.mark.parametrize("raw", ["", "no json here", "} backwards {", "{not: valid}", "[1, 2]"])
def test_extract_json_object_rejects_garbage(raw):
    with pytest.raises(ParseError):
        extract_json_object(raw)


def test_analyze_with_ai_parses_valid_response(ai_payload):
    provider = FakeProvider("Analysis follows " + json.dumps(ai_payload))
    result = asyncio.run(analyze_with_ai(POST, industry="Technology", provider=provider))

    assert result is not None
    assert result.engagementScore == 72
    assert result.reachScore == 64.5
    assert [s.title for s in result.suggestions] == ["Open with the number", "Add a story"]
    assert result.recommendedHashtags == ["#Leadership", "#management"]
    assert result.analysis.tone == "professional"

    call = provider.calls[0]
    assert call["json_mode"] is True
    assert "Industry: Technology" in call["prompt"]
    assert POST in call["prompt"]


def test_analyze_with_ai_clamps_scores(ai_payload):
    ai_payload.update(engagementScore=140, reachScore=-12, viralityScore=100)
    result = asyncio.run(analyze_with_ai(POST, provider=FakeProvider(json.dumps(ai_payload))))
    assert result.engagementScore == 100
    assert result.reachScore == 0
    assert result.viralityScore == 100


def test_analyze_with_ai_accepts_plain_string_suggestions(ai_payload):
    ai_payload["suggestions"] = ["Add a question", "  ", {"description": "no title"}]
    result = asyncio.run(analyze_with_ai(POST, provider=FakeProvider(json.dumps(ai_payload))))
    assert [s.title for s in result.suggestions] == ["Add a question"]


def test_analyze_with_ai_coerces_loose_analysis_block(ai_payload):
    ai_payload["analysis"] = {"strengths": "clear hook", "weaknesses": None, "tone": 3}
    result = asyncio.run(analyze_with_ai(POST, provider=FakeProvider(json.dumps(ai_payload))))
    assert result is not None
    assert result.engagementScore == 72
    assert result.analysis.strengths == ["clear hook"]
    assert result.analysis.weaknesses == []
    assert result.analysis.tone == ""


@pytest.mark.parametrize("block", ["looks good", ["a", "b"], 7])
def test_analyze_with_ai_drops_unusable_analysis_block(ai_payload, block):
    ai_payload["analysis"] = block
    result = asyncio.run(analyze_with_ai(POST, provider=FakeProvider(json.dumps(ai_payload))))
    assert result is not None
    assert result.analysis is None


def test_analyze_with_ai_missing_score_returns_none(ai_payload):
    del ai_payload["viralityScore"]
    result = asyncio.run(analyze_with_ai(POST, provider=FakeProvider(json.dumps(ai_payload))))
    assert result is None


def test_analyze_with_ai_non_numeric_score_returns_none(ai_payload):
    ai_payload["reachScore"] = "very high"
    result = asyncio.run(analyze_with_ai(POST, provider=FakeProvider(json.dumps(ai_payload))))
    assert result is None


def test_analyze_with_ai_malformed_json_returns_none():
    provider = FakeProvider('{"engagementScore": 70, "reachScore": ')
    assert asyncio.run(analyze_with_ai(POST, provider=provider)) is None


@pytest.mark.parametrize(
    "error", [ProviderError("down"), RuntimeError("socket closed"), ValueError("bad key")]
)
def test_analyze_with_ai_provider_errors_return_none(error):
    provider = FakeProvider(error=error)
    assert asyncio.run(analyze_with_ai(POST, provider=provider)) is None


def test_analyze_with_ai_timeout_returns_none(monkeypatch, ai_payload):
    monkeypatch.setattr(config, "AI_TIMEOUT_SECONDS", 0.01)
    provider = FakeProvider(json.dumps(ai_payload), delay=1.0)
    assert asyncio.run(analyze_with_ai(POST, provider=provider)) is None


def test_analyze_with_ai_without_provider(monkeypatch):
    for key in ("OPENAI_API_KEY", "ANTHROPIC_API_KEY", "GEMINI_API_KEY"):
        monkeypatch.delenv(key, raising=False)
    assert ai_insights.get_provider() is None
    assert asyncio.run(analyze_with_ai(POST)) is None


def test_analyze_with_ai_skips_empty_text():
    provider = FakeProvider("{}")
    assert asyncio.run(analyze_with_ai("   ", provider=provider)) is None
    assert provider.calls == []


# ============================================================
# Hooks & optimization
# ============================================================


def test_generate_hooks_assigns_ids():
    payload = {
        "hooks": [
            {"text": "Why do 90% of managers fail in year one?", "type": "Statistic", "description": "curiosity"},
            {"text": "", "type": "Empty"},
            {"id": "custom", "text": "I almost quit.", "type": "Vulnerability"},
        ]
    }
    hooks = asyncio.run(generate_hooks("first year as a manager", provider=FakeProvider(json.dumps(payload))))
    assert [h.id for h in hooks] == ["hook-1", "custom"]
    assert hooks[0].type == "Statistic"


def test_generate_hooks_reads_object_wrapped_in_prose():
    raw = 'Here you go:\n```json\n{"hooks": [{"text": "Stop writing long posts.", "type": "Contrarian"}]}\n```'
    hooks = asyncio.run(generate_hooks("post length", provider=FakeProvider(raw)))
    assert len(hooks) == 1
    assert hooks[0].text == "Stop writing long posts."


def test_generate_hooks_ignores_bare_array():
    raw = '[{"text": "Stop writing long posts.", "type": "Contrarian"}]'
    assert asyncio.run(generate_hooks("post length", provider=FakeProvider(raw))) == []


def test_generate_hooks_failure_returns_empty():
    assert asyncio.run(generate_hooks("idea", provider=FakeProvider(error=RuntimeError("x")))) == []
    assert asyncio.run(generate_hooks("idea", provider=FakeProvider("no json"))) == []
    assert asyncio.run(generate_hooks("", provider=FakeProvider("[]"))) == []


def test_optimize_post_returns_rewrite():
    provider = FakeProvider("  Rewritten post.\n")
    result = asyncio.run(optimize_post(POST, "hook", provider=provider))
    assert result == "Rewritten post."
    assert provider.calls[0]["json_mode"] is False
    assert "attention-grabbing" in provider.calls[0]["prompt"]


def test_optimize_post_rejects_oversized_content():
    provider = FakeProvider("rewrite")
    text = "x" * (config.MAX_AI_CONTENT_LENGTH + 1)
    assert asyncio.run(optimize_post(text, "value", provider=provider)) is None
    assert provider.calls == []


def test_optimize_post_rejects_unknown_type():
    provider = FakeProvider("rewrite")
    assert asyncio.run(optimize_post(POST, "clickbait", provider=provider)) is None
    assert provider.calls == []


def test_optimize_post_failure_returns_none():
    provider = FakeProvider(error=RuntimeError("boom"))
    assert asyncio.run(optimize_post(POST, "cta", provider=provider)) is None


# ============================================================
# AI suggestions
# ============================================================


def test_generate_ai_suggestions_puts_ai_items_first():
    payload = {
        "suggestions": [
            {
                "type": "hook",
                "title": "Lead with the result",
                "description": "The opening buries the outcome.",
                "action": "Move the 3 lessons into the first line.",
            },
            {"type": "cta", "title": "Ask a sharper question"},
            {"type": "value", "description": "missing title"},
        ]
    }
    provider = FakeProvider(json.dumps(payload))
    suggestions = asyncio.run(generate_ai_suggestions(POST, provider=provider))

    assert [s.id for s in suggestions[:2]] == ["ai-suggestion-0", "ai-suggestion-1"]
    assert suggestions[0].title == "Lead with the result"
    assert suggestions[0].description == (
        "The opening buries the outcome. Move the 3 lessons into the first line."
    )
    rule_ids = [s.id for s in generate_suggestions(POST)]
    assert [s.id for s in suggestions[2:]] == rule_ids[: len(suggestions) - 2]
    assert len(suggestions) <= MAX_MERGED_SUGGESTIONS
    assert provider.calls[0]["json_mode"] is True
    assert POST in provider.calls[0]["prompt"]


def test_generate_ai_suggestions_rejects_oversized_content():
    provider = FakeProvider('{"suggestions": [{"title": "x"}]}')
    text = "x" * (config.MAX_AI_SUGGESTION_CONTENT_LENGTH + 1)
    assert asyncio.run(generate_ai_suggestions(text, provider=provider)) == []
    assert provider.calls == []


@pytest.mark.parametrize(
    "provider",
    [
        FakeProvider(error=RuntimeError("boom")),
        FakeProvider("not json"),
        FakeProvider('{"suggestions": "be better"}'),
        FakeProvider('{"suggestions": []}'),
    ],
)
def test_generate_ai_suggestions_failure_returns_empty(provider):
    assert asyncio.run(generate_ai_suggestions(POST, provider=provider)) == []


def test_generate_ai_suggestions_without_provider(monkeypatch):
    for key in ("OPENAI_API_KEY", "ANTHROPIC_API_KEY", "GEMINI_API_KEY"):
        monkeypatch.delenv(key, raising=False)
    assert asyncio.run(generate_ai_suggestions(POST)) == []
    assert asyncio.run(generate_ai_suggestions("  ", provider=FakeProvider("{}"))) == []
