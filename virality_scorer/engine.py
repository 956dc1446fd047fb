"""
Module-level entry points backed by a shared ScoringEngine.

    from virality_scorer.engine import analyze, compare
    metrics = analyze(text)
"""
from typing import List, Optional

from . import ai_insights, hybrid, suggestions
from .comparison import compare_posts
from .providers.base import LLMProvider
from .scoring import ScoringEngine
from .types import (
    AdvancedAnalysisParams,
    AIAnalysisResult,
    ComparisonResult,
    HybridComparison,
    HybridOptions,
    HybridResult,
    PostMetrics,
    Suggestion,
    TimeSeriesPoint,
)

_default_engine: ScoringEngine | None = None


def get_engine() -> ScoringEngine:
    global _default_engine
    if _default_engine is None:
        _default_engine = ScoringEngine()
    return _default_engine


def analyze(
    text: str,
    params: Optional[AdvancedAnalysisParams] = None,
    profile: Optional[str] = None,
) -> PostMetrics:
    return get_engine().analyze(text, params, profile)


def generate_time_series(
    text: str, hours: int = 24, params: Optional[AdvancedAnalysisParams] = None
) -> List[TimeSeriesPoint]:
    return get_engine().generate_time_series(text, hours, params)


def generate_suggestions(text: str) -> List[Suggestion]:
    return suggestions.generate_suggestions(text)


def compare(
    text_a: str, text_b: str, params: Optional[AdvancedAnalysisParams] = None
) -> ComparisonResult:
    return compare_posts(get_engine(), text_a, text_b, params)


async def analyze_with_ai(
    text: str,
    industry: Optional[str] = None,
    provider: Optional[LLMProvider] = None,
) -> Optional[AIAnalysisResult]:
    return await ai_insights.analyze_with_ai(text, industry, provider)


async def hybrid_analyze(
    text: str,
    params: Optional[AdvancedAnalysisParams] = None,
    options: Optional[HybridOptions] = None,
    provider: Optional[LLMProvider] = None,
) -> HybridResult:
    return await hybrid.hybrid_analyze(get_engine(), text, params, options, provider)


async def compare_with_ai(
    text_a: str,
    text_b: str,
    params: Optional[AdvancedAnalysisParams] = None,
    options: Optional[HybridOptions] = None,
    provider: Optional[LLMProvider] = None,
) -> HybridComparison:
    return await hybrid.compare_with_ai(
        get_engine(), text_a, text_b, params, options, provider
    )


async def generate_ai_suggestions(
    text: str, provider: Optional[LLMProvider] = None
) -> List[Suggestion]:
    return await ai_insights.generate_ai_suggestions(text, provider)
