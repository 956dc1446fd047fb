import pytest
from virality_scorer.factors import (
    analyze_virality,
    interpret,
    legacy_scores,
    score_credibility,
    score_readability,
    strip_hashtags,
    weighted_virality,
)
from virality_scorer.scoring import ScoringEngine
from virality_scorer.types import AdvancedAnalysisParams, ViralityFactors

STORY_POST = (
    "Unpopular opinion: most people quit too early.\n\n"
    "When I started my first company I struggled for 2 years. I remember the day "
    "I realized the framework we used was broken.\n\n"
    "• Talk to customers weekly\n"
    "• Measure the metrics that matter\n"
    "• Ship small steps\n\n"
    "What would you add? Share your experience below 👇"
)


def test_empty_post_has_zero_factors():
    result = analyze_virality("")
    assert result.viralityScore == 0.0
    assert result.interpretation == "Low"
    assert all(v == 0.0 for v in result.factors.model_dump().values())


def test_weights_sum_to_one():
    perfect = ViralityFactors(
        hookStrength=10,
        readabilityFormatting=10,
        valueRelevance=10,
        authorCredibility=10,
        storytellingRelatability=10,
        visualAppeal=10,
        callToActionEngagement=10,
        timingFrequency=10,
    )
    assert weighted_virality(perfect) == pytest.approx(10.0)


def test_result_structure():
    result = analyze_virality(STORY_POST)
    assert 0.0 <= result.viralityScore <= 10.0
    assert result.viralityScore * 10 == pytest.approx(round(result.viralityScore * 10))
    assert len(result.topStrengths) == 3
    assert len(result.improvementAreas) == 3
    assert set(result.detailedAnalysis) == set(ViralityFactors.model_fields)
    for value in result.factors.model_dump().values():
        assert 0.0 <= value <= 10.0


def test_strong_post_beats_flat_post():
    flat = analyze_virality("the meeting is at noon")
    assert analyze_virality(STORY_POST).viralityScore > flat.viralityScore


def test_credibility_uses_audience_params():
    text = "in my experience the roi of good analytics is huge"
    plain = score_credibility(text)
    boosted = score_credibility(
        text, AdvancedAnalysisParams(followerRange="10K+", engagementLevel="High")
    )
    assert boosted > plain
    assert boosted <= 10.0


def test_interpretation_thresholds():
    assert interpret(8.0) == "High"
    assert interpret(7.99) == "Moderate"
    assert interpret(6.0) == "Moderate"
    assert interpret(5.99) == "Low"


def test_detailed_analysis_switches_on_strength():
    result = analyze_virality(STORY_POST)
    for key, detail in result.detailedAnalysis.items():
        assert detail.score == getattr(result.factors, key)
        assert detail.suggestions


def test_eight_factor_profile_uses_legacy_conversion():
    result = analyze_virality(STORY_POST)
    engagement, reach, virality = legacy_scores(result)
    metrics = ScoringEngine(profile="eight-factor-v3").analyze(STORY_POST)
    assert metrics.engagementScore == int(round(engagement))
    assert metrics.reachScore == int(round(reach))
    assert metrics.viralityScore == int(round(virality))


def test_strip_hashtags():
    assert strip_hashtags("ship it #python #devops") == "ship it"
    assert strip_hashtags("great week\n#career") == "great week"


@pytest.mark.parametrize("suffix", [" #python", "\n#python", " #python #career"])
def test_readability_ignores_trailing_hashtags(suffix):
    for text in (STORY_POST.lower(), "our team shipped the release.", "a"):
        assert score_readability(text + suffix) == score_readability(text)
