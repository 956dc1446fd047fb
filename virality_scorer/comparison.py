from typing import Optional

from . import config
from .features import fingerprint
from .scoring import ScoringEngine
from .types import AdvancedAnalysisParams, ComparisonResult, PostMetrics

# (engagement, reach, virality)
COMPOSITE_WEIGHTS = (0.5, 0.3, 0.2)


def composite_score(metrics: PostMetrics) -> float:
    w_e, w_r, w_v = COMPOSITE_WEIGHTS
    return (
        metrics.engagementScore * w_e
        + metrics.reachScore * w_r
        + metrics.viralityScore * w_v
    )


def margin_percent(score1: float, score2: float) -> int:
    difference = abs(score1 - score2)
    if difference == 0:
        return 0
    lower = min(score1, score2)
    if lower <= 0:
        return 100
    return int(round(difference / lower * 100))


def rank_metrics(
    metrics1: PostMetrics,
    metrics2: PostMetrics,
    threshold: float = config.MATERIALITY_THRESHOLD,
) -> ComparisonResult:
    score1 = composite_score(metrics1)
    score2 = composite_score(metrics2)

    winner = 0
    margin = 0
    if abs(score1 - score2) >= threshold:
        winner = 1 if score1 > score2 else 2
        margin = margin_percent(score1, score2)

    return ComparisonResult(
        winner=winner,
        margin=margin,
        score1=score1,
        score2=score2,
        metrics1=metrics1,
        metrics2=metrics2,
    )


def compare_posts(
    engine: ScoringEngine,
    post1: str,
    post2: str,
    params: Optional[AdvancedAnalysisParams] = None,
    threshold: float = config.MATERIALITY_THRESHOLD,
) -> ComparisonResult:
    """
    Pick the post likely to perform better.
    Identical posts (after normalization) are a tie by identity; composites
    closer than `threshold` points are a tie as well.
    """
    metrics1 = engine.analyze(post1, params)
    if fingerprint(post1) == fingerprint(post2):
        score = composite_score(metrics1)
        return ComparisonResult(
            winner=0,
            margin=0,
            score1=score,
            score2=score,
            metrics1=metrics1,
            metrics2=metrics1.model_copy(),
        )

    metrics2 = engine.analyze(post2, params)
    return rank_metrics(metrics1, metrics2, threshold)
