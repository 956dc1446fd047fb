import os
import json
import asyncio
import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from . import config
from .errors import ParseError, ProviderError
from .providers.base import LLMProvider
from .suggestions import generate_suggestions, merge_suggestions
from .types import AIAnalysisResult, AISuggestion, GeneratedHook, Suggestion

logger = logging.getLogger(__name__)

SCORE_FIELDS = ("engagementScore", "reachScore", "viralityScore")

OPTIMIZATION_PROMPTS: Dict[str, str] = {
    "hook": "Rewrite the opening 1-2 sentences to be more attention-grabbing. Use psychological triggers like curiosity, controversy, or vulnerability. Make it scannable and emotionally engaging.",
    "readability": "Improve the formatting and readability. Add line breaks every 2-3 sentences, use bullet points where appropriate, add strategic emojis (1-3 total), and ensure mobile-friendly formatting.",
    "storytelling": "Enhance the narrative elements. Add more specific details, emotional language, sensory descriptions, and create a clearer story arc with tension and resolution.",
    "vulnerability": "Make the post more personal and relatable. Add vulnerable moments, authentic struggles, specific failures, and human elements that create emotional connection.",
    "cta": "Improve the call-to-action. Create a more engaging question that encourages meaningful discussion and detailed responses, not just yes/no answers.",
    "value": "Increase the actionable value. Add specific tips, frameworks, metrics, or insights that readers can immediately apply to their own situations.",
}


def get_provider() -> LLMProvider | None:
    if os.environ.get("OPENAI_API_KEY"):
        from .providers.openai_provider import OpenAIProvider

        return OpenAIProvider()
    elif os.environ.get("ANTHROPIC_API_KEY"):
        from .providers.anthropic_provider import AnthropicProvider

        return AnthropicProvider()
    elif os.environ.get("GEMINI_API_KEY"):
        from .providers.gemini import GeminiProvider

        return GeminiProvider()
    return None


# ============================================================
# Response parsing
# ============================================================


def extract_json_object(raw: str) -> Dict[str, Any]:
    """
    Slice the response from the first '{' to the last '}' and parse it.
    Models often wrap JSON in prose or markdown fences; anything outside the
    outermost braces is ignored.
    """
    if not raw:
        raise ParseError("Empty LLM response")
    start = raw.find("{")
    end = raw.rfind("}")
    if start == -1 or end <= start:
        raise ParseError("No JSON object found in LLM response")
    try:
        data = json.loads(raw[start : end + 1])
    except json.JSONDecodeError as e:
        raise ParseError(f"Malformed JSON in LLM response: {e}") from e
    if not isinstance(data, dict):
        raise ParseError("LLM response JSON is not an object")
    return data


def _clamp_scores(data: Dict[str, Any]) -> Dict[str, Any]:
    clamped = dict(data)
    for field in SCORE_FIELDS:
        value = clamped.get(field)
        if isinstance(value, bool):
            continue
        if isinstance(value, (int, float)):
            clamped[field] = min(100.0, max(0.0, float(value)))
    return clamped


def _normalize_suggestions(items: Any) -> List[Dict[str, str]]:
    suggestions = []
    if not isinstance(items, list):
        return suggestions
    for item in items:
        if isinstance(item, dict):
            title = str(item.get("title") or "").strip()
            if title:
                suggestions.append(
                    {
                        "title": title,
                        "description": str(item.get("description") or "").strip(),
                    }
                )
        elif isinstance(item, str) and item.strip():
            suggestions.append({"title": item.strip(), "description": ""})
    return suggestions


def _normalize_hashtags(items: Any) -> List[str]:
    if not isinstance(items, list):
        return []
    tags = []
    for item in items:
        tag = str(item).strip()
        if not tag:
            continue
        tags.append(tag if tag.startswith("#") else f"#{tag}")
    return tags


def _normalize_text_list(value: Any) -> List[str]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        return []
    return [str(item).strip() for item in value if str(item).strip()]


def _normalize_analysis(block: Any) -> Dict[str, Any] | None:
    """Coerce the optional commentary block; anything unusable becomes None."""
    if not isinstance(block, dict):
        return None
    normalized: Dict[str, Any] = {
        "strengths": _normalize_text_list(block.get("strengths")),
        "weaknesses": _normalize_text_list(block.get("weaknesses")),
    }
    for field in ("tone", "readability", "callToAction"):
        value = block.get(field)
        normalized[field] = value.strip() if isinstance(value, str) else ""
    return normalized


def parse_analysis(raw: str) -> AIAnalysisResult:
    data = _clamp_scores(extract_json_object(raw))
    data["suggestions"] = _normalize_suggestions(data.get("suggestions"))
    data["recommendedHashtags"] = _normalize_hashtags(data.get("recommendedHashtags"))
    data["analysis"] = _normalize_analysis(data.get("analysis"))
    try:
        return AIAnalysisResult.model_validate(data)
    except ValidationError as e:
        raise ParseError(f"AI analysis failed validation: {e}") from e


def parse_hooks(raw: str) -> List[GeneratedHook]:
    data = extract_json_object(raw).get("hooks") or []
    if not isinstance(data, list):
        raise ParseError("Hook response 'hooks' is not a list")

    hooks: List[GeneratedHook] = []
    for i, item in enumerate(data):
        if not isinstance(item, dict) or not str(item.get("text", "")).strip():
            continue
        hooks.append(
            GeneratedHook(
                id=str(item.get("id") or f"hook-{i + 1}"),
                text=str(item["text"]).strip(),
                type=str(item.get("type", "")).strip(),
                description=str(item.get("description", "")).strip(),
            )
        )
    return hooks


def parse_ai_suggestions(raw: str) -> List[AISuggestion]:
    items = extract_json_object(raw).get("suggestions") or []
    if not isinstance(items, list):
        raise ParseError("Suggestion response 'suggestions' is not a list")

    # The action line is folded into the description
    folded = []
    for item in items:
        if isinstance(item, dict) and str(item.get("action") or "").strip():
            description = str(item.get("description") or "").strip()
            action = str(item["action"]).strip()
            item = {**item, "description": f"{description} {action}".strip()}
        folded.append(item)
    return [AISuggestion(**s) for s in _normalize_suggestions(folded)]


# ============================================================
# Provider calls
# ============================================================


async def _generate(
    provider: LLMProvider, prompt: str, system: str = "", json_mode: bool = False
) -> str:
    try:
        return await asyncio.wait_for(
            provider.generate(prompt, system=system, json_mode=json_mode),
            timeout=config.AI_TIMEOUT_SECONDS,
        )
    except asyncio.TimeoutError as e:
        raise ProviderError(
            f"Provider timed out after {config.AI_TIMEOUT_SECONDS}s"
        ) from e
    except ProviderError:
        raise
    except Exception as e:
        raise ProviderError(str(e)) from e


def _resolve_provider(provider: LLMProvider | None) -> LLMProvider | None:
    if provider is not None:
        return provider
    try:
        return get_provider()
    except ValueError as e:
        logger.warning(f"[AI] Provider unavailable: {e}")
        return None


ANALYSIS_SYSTEM = "You are a LinkedIn content optimization expert. Analyze posts and provide detailed, actionable insights to improve engagement. Always respond with valid JSON only."


def build_analysis_prompt(text: str, industry: Optional[str] = None) -> str:
    return f"""Analyze this LinkedIn post for engagement potential and provide specific recommendations:

Post Content: "{text}"
Industry: {industry or "General"}

Return ONLY a JSON object with:
{{
  "engagementScore": number (0-100),
  "reachScore": number (0-100),
  "viralityScore": number (0-100),
  "suggestions": [
    {{"title": "Specific improvement title", "description": "Detailed actionable suggestion"}}
  ],
  "recommendedHashtags": ["hashtag1", "hashtag2", "hashtag3"],
  "analysis": {{
    "strengths": ["strength1", "strength2"],
    "weaknesses": ["weakness1", "weakness2"],
    "tone": "professional/casual/inspirational",
    "readability": "high/medium/low",
    "callToAction": "strong/weak/missing"
  }}
}}

Consider these LinkedIn best practices:
- Questions increase comments
- Posts with 1-3 hashtags perform better
- Personal stories drive more engagement than generic advice
- Scores above 85 are rare; be realistic
"""


async def analyze_with_ai(
    text: str,
    industry: Optional[str] = None,
    provider: LLMProvider | None = None,
) -> AIAnalysisResult | None:
    """
    Ask an LLM to score the post. Returns None on any failure (no provider,
    timeout, transport error, malformed or invalid JSON); never raises.
    """
    if not text or not text.strip():
        return None

    provider = _resolve_provider(provider)
    if provider is None:
        logger.info("[AI] No LLM provider configured; skipping AI analysis")
        return None

    try:
        raw = await _generate(
            provider,
            build_analysis_prompt(text, industry),
            system=ANALYSIS_SYSTEM,
            json_mode=True,
        )
        result = parse_analysis(raw)
    except ProviderError as e:
        logger.warning(f"[AI] Provider call failed: {e}")
        return None
    except ParseError as e:
        logger.warning(f"[AI] Could not parse analysis: {e}")
        return None

    logger.debug(
        f"[AI] Scores e={result.engagementScore} r={result.reachScore} v={result.viralityScore}"
    )
    return result


HOOKS_SYSTEM = "You are a LinkedIn virality expert who specializes in creating hooks that maximize engagement. You understand psychology, social media algorithms, and what makes content go viral on professional platforms."


async def generate_hooks(
    idea: str, provider: LLMProvider | None = None
) -> List[GeneratedHook]:
    """Five opening-line options for a post idea; [] when the LLM is unavailable."""
    if not idea or not idea.strip():
        return []

    provider = _resolve_provider(provider)
    if provider is None:
        logger.info("[AI] No LLM provider configured; skipping hook generation")
        return []

    prompt = f"""Based on this LinkedIn post idea: "{idea.strip()}"

Generate 5 different viral hook options that would maximize engagement. Each hook should be 1-2 sentences maximum and use a different psychological trigger:
1. Provocative Question Hook - Start with a thought-provoking question
2. Bold Statement Hook - Make a bold, attention-grabbing claim
3. Vulnerability Hook - Share something personal or vulnerable
4. Statistic/Fact Hook - Use surprising data or facts
5. Contrarian Hook - Challenge conventional wisdom

Return ONLY a JSON object:
{{"hooks": [{{"text": "...", "type": "Provocative Question", "description": "why it works"}}]}}
"""

    try:
        raw = await _generate(provider, prompt, system=HOOKS_SYSTEM, json_mode=True)
        return parse_hooks(raw)
    except (ProviderError, ParseError) as e:
        logger.warning(f"[AI] Hook generation failed: {e}")
        return []


SUGGESTIONS_SYSTEM = "You are a LinkedIn content analyst who provides specific, actionable suggestions for improving post virality. You focus on the most impactful changes that will drive engagement."

MAX_AI_SUGGESTIONS = 5


async def generate_ai_suggestions(
    text: str, provider: LLMProvider | None = None
) -> List[Suggestion]:
    """
    LLM suggestions aimed at the weakest virality factors, placed ahead of
    the rule-based suggestions. Returns [] when the post is empty or too long,
    no provider is configured, or the LLM call or its parsing fails.
    """
    if not text or not text.strip():
        return []
    if len(text) > config.MAX_AI_SUGGESTION_CONTENT_LENGTH:
        logger.warning(
            f"[AI] Content too long for suggestions ({len(text)} > {config.MAX_AI_SUGGESTION_CONTENT_LENGTH} chars)"
        )
        return []

    provider = _resolve_provider(provider)
    if provider is None:
        logger.info("[AI] No LLM provider configured; skipping AI suggestions")
        return []

    prompt = f"""Analyze this LinkedIn post and provide specific suggestions for improvement:

"{text}"

Evaluate the post on these virality factors:
1. Hook Strength (20%): How attention-grabbing is the opening?
2. Readability (15%): Is it well-formatted and easy to read?
3. Storytelling (15%): Does it tell a compelling story?
4. Value (15%): Does it provide actionable insights?
5. Call-to-Action (10%): Does it encourage engagement?
6. Visual Appeal (10%): Is it visually scannable?
7. Engagement Bait (10%): Does it spark discussion?
8. Personal Touch (5%): Is it authentic and personal?

For each factor that scores below 7/10, provide one suggestion. Focus on the top 3-5 most impactful improvements.

Return ONLY a JSON object:
{{"suggestions": [{{"type": "factor name", "title": "brief suggestion", "description": "what's wrong and why it matters", "action": "specific action to take"}}]}}
"""

    try:
        raw = await _generate(provider, prompt, system=SUGGESTIONS_SYSTEM, json_mode=True)
        ai_suggestions = parse_ai_suggestions(raw)
    except (ProviderError, ParseError) as e:
        logger.warning(f"[AI] Suggestion generation failed: {e}")
        return []

    if not ai_suggestions:
        logger.info("[AI] LLM returned no usable suggestions")
        return []
    return merge_suggestions(
        ai_suggestions[:MAX_AI_SUGGESTIONS], generate_suggestions(text)
    )


OPTIMIZE_SYSTEM = "You are a LinkedIn content optimization expert. You specialize in making small but impactful changes that dramatically improve engagement while maintaining authenticity and professionalism."


async def optimize_post(
    text: str,
    optimization_type: str,
    provider: LLMProvider | None = None,
) -> str | None:
    """
    Rewrite the post to improve one factor (hook, readability, storytelling,
    vulnerability, cta, value). Returns the rewritten text, or None when the
    request is rejected or the LLM fails.
    """
    if not text or not text.strip():
        return None
    if len(text) > config.MAX_AI_CONTENT_LENGTH:
        logger.warning(
            f"[AI] Content too long to optimize ({len(text)} > {config.MAX_AI_CONTENT_LENGTH} chars)"
        )
        return None
    instruction = OPTIMIZATION_PROMPTS.get(optimization_type)
    if instruction is None:
        logger.warning(f"[AI] Unknown optimization type: {optimization_type}")
        return None

    provider = _resolve_provider(provider)
    if provider is None:
        logger.info("[AI] No LLM provider configured; skipping optimization")
        return None

    prompt = f"""Original LinkedIn post:
"{text}"

Optimization request: {instruction}

Requirements:
- Maintain the core message and authenticity
- Keep it LinkedIn-appropriate and professional
- Ensure the optimization significantly improves the specific factor requested
- Keep word count similar
- Include hashtags if they were in the original

Return only the optimized post content, no additional commentary.
"""

    try:
        optimized = await _generate(provider, prompt, system=OPTIMIZE_SYSTEM)
    except ProviderError as e:
        logger.warning(f"[AI] Optimization failed: {e}")
        return None

    optimized = (optimized or "").strip()
    return optimized or None
