import pytest
from virality_scorer.comparison import (
    compare_posts,
    composite_score,
    margin_percent,
    rank_metrics,
)
from virality_scorer.scoring import ScoringEngine
from virality_scorer.types import PostMetrics


def _metrics(engagement, reach, virality):
    return PostMetrics(
        engagementScore=engagement,
        reachScore=reach,
        viralityScore=virality,
        likes=0,
        comments=0,
        shares=0,
    )


@pytest.fixture
def engine():
    return ScoringEngine()


def test_composite_weights():
    assert composite_score(_metrics(80, 70, 60)) == pytest.approx(73.0)


def test_identical_posts_tie(engine):
    result = compare_posts(engine, "  Great Post!  ", "great post!")
    assert result.winner == 0
    assert result.margin == 0
    assert result.score1 == result.score2


def test_clear_winner():
    result = rank_metrics(_metrics(80, 70, 60), _metrics(40, 30, 20))
    assert result.winner == 1
    assert result.margin == 121  # (73 - 33) / 33


def test_comparison_is_symmetric():
    a, b = _metrics(80, 70, 60), _metrics(40, 30, 20)
    forward = rank_metrics(a, b)
    backward = rank_metrics(b, a)
    assert forward.winner == 1
    assert backward.winner == 2
    assert forward.margin == backward.margin


def test_small_gap_is_a_tie():
    result = rank_metrics(_metrics(51, 50, 50), _metrics(50, 50, 50))
    assert result.score1 != result.score2
    assert result.winner == 0
    assert result.margin == 0


def test_threshold_is_configurable():
    result = rank_metrics(_metrics(51, 50, 50), _metrics(50, 50, 50), threshold=0.1)
    assert result.winner == 1


def test_zero_loser_margin():
    result = rank_metrics(_metrics(50, 50, 50), _metrics(0, 0, 0))
    assert result.winner == 1
    assert result.margin == 100


def test_margin_percent():
    assert margin_percent(0, 0) == 0
    assert margin_percent(50, 50) == 0
    assert margin_percent(60, 40) == 50


def test_compare_posts_agrees_with_scores(engine):
    weak = "ok"
    strong = (
        "I learned 3 lessons from failing my first startup.\n\n"
        "- Talk to customers\n- Ship weekly\n- Track one metric\n\n"
        "What would you add? Share your thoughts below! #startups #founders"
    )
    result = compare_posts(engine, weak, strong)
    assert result.winner == 2
    assert result.margin > 0
    assert result.score2 > result.score1
