import logging
import math
from enum import Enum
from functools import lru_cache
from typing import Dict, List, Optional, Tuple

from . import config
from .factors import analyze_virality, legacy_scores
from .features import (
    clamp,
    extract_features,
    fingerprint,
    length_factor,
    reading_time_multiplier,
    unique_matches,
)
from .lexicons import (
    ENGAGEMENT_LEVEL_MULTIPLIERS,
    ENGAGEMENT_WEIGHTS_V2,
    FOLLOWER_MULTIPLIERS,
    INDUSTRY_KEYWORDS,
    INDUSTRY_MULTIPLIERS,
    POSITIVE_WORDS_V1,
    REACH_WEIGHTS_V2,
    VIRALITY_WEIGHTS_V2,
)
from .types import (
    AdvancedAnalysisParams,
    FeatureVector,
    PostMetrics,
    TimeSeriesPoint,
)

logger = logging.getLogger(__name__)


class ScoringProfile(str, Enum):
    MULTIPLICATIVE_V1 = "multiplicative-v1"
    WEIGHTED_V2 = "weighted-v2"
    EIGHT_FACTOR_V3 = "eight-factor-v3"


LENGTH_BANDS: Dict[ScoringProfile, Tuple[int, int]] = {
    ScoringProfile.MULTIPLICATIVE_V1: (150, 1300),
    ScoringProfile.WEIGHTED_V2: (150, 800),
    ScoringProfile.EIGHT_FACTOR_V3: (150, 800),
}

# (engagement, reach, virality)
BASE_SCORES_V1 = (50.0, 50.0, 42.5)
BASE_SCORES_V2 = (25.0, 20.0, 15.0)
WEIGHTED_BONUS_CAP = 30.0

INDUSTRY_KEYWORD_TARGET = 5

# Derived count constants: (likes, comments, shares)
COUNT_FACTORS_BASIC = (0.6, 0.15, 0.08)
COUNT_FACTORS_ADVANCED = (0.8, 0.15, 0.1)

TIME_SERIES_FLOOR = 0.1

ZERO_METRICS = PostMetrics(
    engagementScore=0, reachScore=0, viralityScore=0, likes=0, comments=0, shares=0
)

# ============================================================
# Feature -> multiplier mappings
# ============================================================


def hashtag_multiplier_v1(count: int) -> float:
    if count == 0:
        return 0.85
    if count < 3:
        return 1.0
    if count <= 5:
        return 1.15
    return max(0.85, 1 - 0.03 * (count - 5))


def hashtag_factor_v2(count: int) -> float:
    if count == 0:
        return 0.5
    if count <= 3:
        return 1.0
    if count <= 5:
        return 0.8
    return 0.6


def structure_factor(features: FeatureVector) -> float:
    return (
        0.7
        + (0.15 if features.hasLineBreaks else 0.0)
        + (0.15 if features.bulletCount > 0 else 0.0)
    )


def weighted_score(base: float, weights, values: Dict[str, float]) -> float:
    total_weight = sum(w for _, w in weights)
    weighted_sum = sum(w * values[name] for name, w in weights)
    return base + (weighted_sum / total_weight) * WEIGHTED_BONUS_CAP


def industry_relevance(text: str, industry: str) -> float:
    keywords = INDUSTRY_KEYWORDS.get(industry, ())
    if not keywords:
        return 1.0
    match_ratio = unique_matches(text, keywords) / INDUSTRY_KEYWORD_TARGET
    return 0.8 + min(0.6, match_ratio * 0.6)


def audience_multipliers(
    text: str, params: Optional[AdvancedAnalysisParams]
) -> Tuple[float, float, float]:
    """Follower x industry x engagement-level, per (engagement, reach, virality)."""
    if params is None:
        return 1.0, 1.0, 1.0
    follower = FOLLOWER_MULTIPLIERS[params.followerRange]
    level = ENGAGEMENT_LEVEL_MULTIPLIERS[params.engagementLevel]
    relevance = industry_relevance(text, params.industry)
    ind_e, ind_r, ind_v = INDUSTRY_MULTIPLIERS.get(params.industry, (1.0, 1.0, 1.0))
    common = follower * level * relevance
    return common * ind_e, common * ind_r, common * ind_v


def derive_counts(
    engagement: int, virality: int, params: Optional[AdvancedAnalysisParams] = None
) -> Tuple[int, int, int]:
    if params is None:
        k_likes, k_comments, k_shares = COUNT_FACTORS_BASIC
    else:
        base = max(1.0, FOLLOWER_MULTIPLIERS[params.followerRange] * 10)
        k_likes, k_comments, k_shares = (k * base for k in COUNT_FACTORS_ADVANCED)
    return (
        max(0, int(round(engagement * k_likes))),
        max(0, int(round(engagement * k_comments))),
        max(0, int(round(virality * k_shares))),
    )


def to_metrics(
    raw: Tuple[float, float, float], params: Optional[AdvancedAnalysisParams]
) -> PostMetrics:
    engagement, reach, virality = (int(round(clamp(s, 0.0, 100.0))) for s in raw)
    likes, comments, shares = derive_counts(engagement, virality, params)
    return PostMetrics(
        engagementScore=engagement,
        reachScore=reach,
        viralityScore=virality,
        likes=likes,
        comments=comments,
        shares=shares,
    )


# ============================================================
# Profiles (text is already normalized and non-empty)
# ============================================================


def score_multiplicative(
    text: str, params: Optional[AdvancedAnalysisParams]
) -> Tuple[float, float, float]:
    features = extract_features(text)
    band_min, band_max = LENGTH_BANDS[ScoringProfile.MULTIPLICATIVE_V1]

    length_m = 0.5 + 0.6 * length_factor(features.length, band_min, band_max)
    positive_m = 1 + 0.05 * unique_matches(text, POSITIVE_WORDS_V1)
    sentiment_m = 1 + 0.1 * features.sentiment
    engagement_m = 1 + 0.1 * features.engagementTriggerCount
    hashtag_m = hashtag_multiplier_v1(features.hashtagCount)
    reading_m = reading_time_multiplier(features.readingTimeMinutes)

    base_e, base_r, base_v = BASE_SCORES_V1
    aud_e, aud_r, aud_v = audience_multipliers(text, params)

    engagement = (
        base_e * length_m * positive_m * sentiment_m * engagement_m
        * hashtag_m * reading_m * aud_e
    )
    reach = base_r * length_m * hashtag_m * reading_m * aud_r
    virality = base_v * engagement_m * positive_m * sentiment_m * hashtag_m * aud_v
    return engagement, reach, virality


def score_weighted(
    text: str, params: Optional[AdvancedAnalysisParams]
) -> Tuple[float, float, float]:
    features = extract_features(text)
    band_min, band_max = LENGTH_BANDS[ScoringProfile.WEIGHTED_V2]

    values = {
        "length": length_factor(features.length, band_min, band_max),
        "engagementTriggers": features.engagementTriggerStrength * 0.8,
        "hook": features.hookMatchStrength,
        "storytelling": features.storytellingStrength,
        "value": features.valueStrength,
        "hashtags": hashtag_factor_v2(features.hashtagCount),
        "structure": structure_factor(features),
    }

    base_e, base_r, base_v = BASE_SCORES_V2
    aud_e, aud_r, aud_v = audience_multipliers(text, params)

    engagement = weighted_score(base_e, ENGAGEMENT_WEIGHTS_V2, values)
    engagement *= 1 + 0.1 * features.sentiment
    reach = weighted_score(base_r, REACH_WEIGHTS_V2, values)
    virality = weighted_score(base_v, VIRALITY_WEIGHTS_V2, values)
    return engagement * aud_e, reach * aud_r, virality * aud_v


def score_eight_factor(
    text: str, params: Optional[AdvancedAnalysisParams]
) -> Tuple[float, float, float]:
    # Audience params already feed the credibility factor
    return legacy_scores(analyze_virality(text, params))


PROFILE_SCORERS = {
    ScoringProfile.MULTIPLICATIVE_V1: score_multiplicative,
    ScoringProfile.WEIGHTED_V2: score_weighted,
    ScoringProfile.EIGHT_FACTOR_V3: score_eight_factor,
}

# ============================================================
# Engine
# ============================================================


class ScoringEngine:
    """
    Deterministic post scorer.

    Results are memoized per (fingerprint, params, profile) in a bounded LRU
    owned by the engine instance.
    """

    def __init__(
        self,
        profile: str = config.DEFAULT_PROFILE,
        cache_size: int = config.CACHE_SIZE,
    ):
        self.profile = ScoringProfile(profile)
        self.cache_size = cache_size
        if cache_size > 0:
            self._score = lru_cache(maxsize=cache_size)(self._score_uncached)
        else:
            self._score = self._score_uncached

    def _score_uncached(
        self,
        normalized: str,
        params: Optional[AdvancedAnalysisParams],
        profile: ScoringProfile,
    ) -> PostMetrics:
        if not normalized:
            return ZERO_METRICS
        raw = PROFILE_SCORERS[profile](normalized, params)
        metrics = to_metrics(raw, params)
        logger.debug(
            f"[Scoring] {profile.value}: engagement={metrics.engagementScore} "
            f"reach={metrics.reachScore} virality={metrics.viralityScore}"
        )
        return metrics

    def analyze(
        self,
        text: str,
        params: Optional[AdvancedAnalysisParams] = None,
        profile: Optional[str] = None,
    ) -> PostMetrics:
        selected = ScoringProfile(profile) if profile else self.profile
        return self._score(fingerprint(text), params, selected).model_copy()

    def cache_info(self):
        if hasattr(self._score, "cache_info"):
            return self._score.cache_info()
        return None

    def clear_cache(self) -> None:
        if hasattr(self._score, "cache_clear"):
            self._score.cache_clear()

    def generate_time_series(
        self,
        text: str,
        hours: int = 24,
        params: Optional[AdvancedAnalysisParams] = None,
    ) -> List[TimeSeriesPoint]:
        """
        Hour-indexed engagement curve: linear ramp for hours 0-2, a sine-shaped
        plateau for hours 3-11, exponential decay afterwards.
        """
        score = self.analyze(text, params).engagementScore
        points: List[TimeSeriesPoint] = []
        for hour in range(max(0, hours)):
            if hour < 3:
                value = score * 0.3 * (hour + 1) / 3
            elif hour < 12:
                value = score * (0.7 + 0.3 * math.sin(math.pi * (hour - 3) / 8))
            else:
                value = score * 0.7 * math.exp(-(hour - 11) / 8)
            points.append(
                TimeSeriesPoint(
                    time=f"{hour}h",
                    engagement=max(TIME_SERIES_FLOOR, round(value, 1)),
                )
            )
        return points
