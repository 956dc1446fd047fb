"""
Blends the deterministic score with an optional LLM opinion.

The eight-factor analysis is always computed and acts as the baseline. An AI
result is only allowed to move the final numbers when its confidence clears
the configured threshold; otherwise the deterministic metrics are reported
unchanged and the AI output contributes hashtags and commentary only.
"""
import asyncio
import logging
from typing import List, Optional, Tuple

from . import config
from .ai_insights import analyze_with_ai
from .comparison import composite_score, rank_metrics
from .factors import analyze_virality
from .features import fingerprint, stddev
from .providers.base import LLMProvider
from .scoring import ScoringEngine, derive_counts
from .types import (
    AdvancedAnalysisParams,
    AIAnalysisResult,
    ComparisonResult,
    EnhancedViralityResult,
    HybridComparison,
    HybridMetrics,
    HybridOptions,
    HybridResult,
    PostMetrics,
)

logger = logging.getLogger(__name__)

# Deterministic confidence: consistency of the eight factors vs. score level
FACTOR_SPREAD = 5.0
DET_CONSISTENCY_WEIGHT = 0.6
DET_LEVEL_WEIGHT = 0.4

# AI confidence: agreement with the baseline, realism, answer quality
AGREEMENT_SPREAD = 50.0
AI_AGREEMENT_WEIGHT = 0.5
AI_REALISM_WEIGHT = 0.3
AI_QUALITY_WEIGHT = 0.2
REALISM_TIERS = ((85, 0.5), (70, 0.8))  # (max score above, realism)
MIN_QUALITY_SUGGESTIONS = 2

REJECTED_AI_CONTRIBUTION = 0.1
MAX_SUGGESTED_HASHTAGS = 5


# ============================================================
# Confidence
# ============================================================


def calculate_enhanced_confidence(enhanced: EnhancedViralityResult) -> float:
    scores = list(enhanced.factors.model_dump().values())
    consistency = max(0.0, 1 - stddev(scores) / FACTOR_SPREAD)
    level = enhanced.viralityScore / 10
    return min(1.0, consistency * DET_CONSISTENCY_WEIGHT + level * DET_LEVEL_WEIGHT)


def calculate_ai_confidence(
    ai: AIAnalysisResult, enhanced: EnhancedViralityResult
) -> float:
    ai_avg = (ai.engagementScore + ai.reachScore + ai.viralityScore) / 3
    agreement = max(0.0, 1 - abs(ai_avg - enhanced.viralityScore * 10) / AGREEMENT_SPREAD)

    max_score = max(ai.engagementScore, ai.reachScore, ai.viralityScore)
    realism = 1.0
    for limit, value in REALISM_TIERS:
        if max_score > limit:
            realism = value
            break

    quality = 1.0 if len(ai.suggestions) >= MIN_QUALITY_SUGGESTIONS else 0.7

    return min(
        1.0,
        agreement * AI_AGREEMENT_WEIGHT
        + realism * AI_REALISM_WEIGHT
        + quality * AI_QUALITY_WEIGHT,
    )


def blend_weights(ai_confidence: float, prefer_enhanced: bool) -> Tuple[float, float]:
    """(deterministic weight, AI weight); the deterministic side never drops below 0.6 / 0.4."""
    if prefer_enhanced:
        det_weight = max(0.6, 1 - ai_confidence * 0.4)
    else:
        det_weight = max(0.4, 1 - ai_confidence * 0.6)
    return det_weight, 1 - det_weight


# ============================================================
# Hashtags
# ============================================================


def extract_hashtag_suggestions(
    text: str, enhanced: EnhancedViralityResult
) -> List[str]:
    lower = (text or "").lower()
    suggestions: List[str] = []

    if enhanced.factors.valueRelevance >= 7:
        suggestions += ["#ProfessionalTips", "#CareerAdvice", "#Leadership"]
    if enhanced.factors.storytellingRelatability >= 7:
        suggestions += ["#MyStory", "#LessonsLearned", "#PersonalGrowth"]
    if "tech" in lower or "software" in lower:
        suggestions += ["#Technology", "#Innovation", "#TechCareers"]
    if "business" in lower or "entrepreneur" in lower:
        suggestions += ["#Business", "#Entrepreneurship", "#StartupLife"]
    suggestions += ["#LinkedIn", "#Professional", "#Networking"]

    return list(dict.fromkeys(suggestions))[:MAX_SUGGESTED_HASHTAGS]


# ============================================================
# Blending
# ============================================================


def _enhanced_only(
    enhanced: EnhancedViralityResult,
    legacy: PostMetrics,
    hashtags: List[str],
    ai: Optional[AIAnalysisResult] = None,
    ai_contribution: float = 0.0,
) -> HybridResult:
    return HybridResult(
        enhanced=enhanced,
        legacy=HybridMetrics(
            **legacy.model_dump(include=set(PostMetrics.model_fields)),
            recommendedHashtags=hashtags,
            isAIEnhanced=False,
            analysis=ai.analysis if ai else None,
        ),
        confidence=calculate_enhanced_confidence(enhanced),
        analysisMethod="enhanced-only",
        aiContribution=ai_contribution,
    )


def blend(
    enhanced: EnhancedViralityResult,
    legacy: PostMetrics,
    ai: Optional[AIAnalysisResult],
    options: Optional[HybridOptions] = None,
    params: Optional[AdvancedAnalysisParams] = None,
    fallback_hashtags: Optional[List[str]] = None,
) -> HybridResult:
    """
    Merge deterministic metrics with an AI result.

    `legacy` is the deterministic PostMetrics for the same text and params;
    it is returned untouched whenever the AI result is missing or rejected.
    """
    options = options or HybridOptions()
    threshold = (
        options.confidenceThreshold
        if options.confidenceThreshold is not None
        else config.CONFIDENCE_THRESHOLD
    )

    if ai is None:
        return _enhanced_only(enhanced, legacy, list(fallback_hashtags or []))

    ai_confidence = calculate_ai_confidence(ai, enhanced)
    if ai_confidence < threshold:
        logger.info(
            f"[Hybrid] AI confidence {ai_confidence:.2f} below threshold {threshold:.2f}; using deterministic scores"
        )
        return _enhanced_only(
            enhanced,
            legacy,
            list(ai.recommendedHashtags),
            ai=ai,
            ai_contribution=REJECTED_AI_CONTRIBUTION,
        )

    det_weight, ai_weight = blend_weights(ai_confidence, options.preferEnhanced)
    logger.debug(
        f"[Hybrid] Blending: deterministic {det_weight * 100:.1f}%, AI {ai_weight * 100:.1f}%"
    )

    engagement = int(round(legacy.engagementScore * det_weight + ai.engagementScore * ai_weight))
    reach = int(round(legacy.reachScore * det_weight + ai.reachScore * ai_weight))
    virality = int(round(legacy.viralityScore * det_weight + ai.viralityScore * ai_weight))
    likes, comments, shares = derive_counts(engagement, virality, params)

    return HybridResult(
        enhanced=enhanced,
        legacy=HybridMetrics(
            engagementScore=engagement,
            reachScore=reach,
            viralityScore=virality,
            likes=likes,
            comments=comments,
            shares=shares,
            recommendedHashtags=list(ai.recommendedHashtags),
            isAIEnhanced=True,
            analysis=ai.analysis,
        ),
        confidence=max(calculate_enhanced_confidence(enhanced), ai_confidence),
        analysisMethod="hybrid",
        aiContribution=ai_confidence * (0.3 if options.preferEnhanced else 0.7),
    )


async def hybrid_analyze(
    engine: ScoringEngine,
    text: str,
    params: Optional[AdvancedAnalysisParams] = None,
    options: Optional[HybridOptions] = None,
    provider: Optional[LLMProvider] = None,
) -> HybridResult:
    options = options or HybridOptions()

    enhanced = analyze_virality(text, params)
    legacy = engine.analyze(text, params)

    ai = None
    if options.useAI:
        ai = await analyze_with_ai(
            text, industry=params.industry if params else None, provider=provider
        )
        if ai is None:
            logger.info("[Hybrid] AI analysis unavailable; falling back to deterministic scores")

    return blend(
        enhanced,
        legacy,
        ai,
        options,
        params=params,
        fallback_hashtags=extract_hashtag_suggestions(text, enhanced),
    )


def _post_metrics(metrics: PostMetrics) -> PostMetrics:
    return PostMetrics.model_validate(
        metrics.model_dump(include=set(PostMetrics.model_fields))
    )


async def compare_with_ai(
    engine: ScoringEngine,
    text_a: str,
    text_b: str,
    params: Optional[AdvancedAnalysisParams] = None,
    options: Optional[HybridOptions] = None,
    provider: Optional[LLMProvider] = None,
) -> HybridComparison:
    """
    Run the hybrid analysis on both posts concurrently and rank the blended
    metrics. A failure on one side degrades that side to deterministic
    scoring and leaves the other untouched. Posts with the same fingerprint
    are analyzed once and share the result.
    """
    identical = fingerprint(text_a) == fingerprint(text_b)
    texts = (text_a,) if identical else (text_a, text_b)
    outcomes = await asyncio.gather(
        *(hybrid_analyze(engine, text, params, options, provider) for text in texts),
        return_exceptions=True,
    )

    results: List[HybridResult] = []
    for text, outcome in zip(texts, outcomes):
        if isinstance(outcome, BaseException):
            if not isinstance(outcome, Exception):
                raise outcome
            logger.warning(f"[Hybrid] Analysis failed for one post, using deterministic scores: {outcome}")
            enhanced = analyze_virality(text, params)
            outcome = _enhanced_only(
                enhanced,
                engine.analyze(text, params),
                extract_hashtag_suggestions(text, enhanced),
            )
        results.append(outcome)

    if identical:
        results.append(results[0].model_copy(deep=True))
    result_a, result_b = results
    metrics_a = _post_metrics(result_a.legacy)
    metrics_b = _post_metrics(result_b.legacy)

    if identical:
        score = composite_score(metrics_a)
        comparison = ComparisonResult(
            winner=0, margin=0, score1=score, score2=score,
            metrics1=metrics_a, metrics2=metrics_b,
        )
    else:
        comparison = rank_metrics(metrics_a, metrics_b)

    return HybridComparison(resultA=result_a, resultB=result_b, comparison=comparison)
