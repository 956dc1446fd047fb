import pytest
from virality_scorer.features import (
    bullet_count,
    count_emojis,
    count_hashtags,
    extract_features,
    fingerprint,
    hook_strength,
    length_factor,
    numbered_list_count,
    reading_time_minutes,
    reading_time_multiplier,
    sentiment,
    stddev,
)


def test_fingerprint_is_idempotent():
    raw = "  Hello LinkedIn World!  \n"
    once = fingerprint(raw)
    assert once == "hello linkedin world!"
    assert fingerprint(once) == once


def test_fingerprint_handles_none_and_whitespace():
    assert fingerprint(None) == ""
    assert fingerprint("   \n\t ") == ""


def test_length_factor_curve():
    # Below the band: linear ramp from 0.3
    assert length_factor(0, 150, 800) == pytest.approx(0.3)
    assert length_factor(75, 150, 800) == pytest.approx(0.55)
    # Band edges and midpoint
    assert length_factor(150, 150, 800) == pytest.approx(0.8)
    assert length_factor(475, 150, 800) == pytest.approx(1.0)
    assert length_factor(800, 150, 800) == pytest.approx(0.8)
    # Above the band: decay to the floor
    assert length_factor(1150, 150, 800) == pytest.approx(0.6)
    assert length_factor(5000, 150, 800) == pytest.approx(0.4)


def test_counts():
    text = "Big news 🚀🔥\n\n#leadership #growth #ai"
    assert count_hashtags(text) == 3
    assert count_emojis(text) == 2


def test_list_counts():
    text = "Three lessons:\n- ship early\n- listen more\n\n1. write\n2) review"
    assert bullet_count(text) == 2
    assert numbered_list_count(text) == 2


def test_reading_time():
    assert reading_time_minutes("") == 0
    assert reading_time_minutes("word " * 225) == 1
    assert reading_time_minutes("word " * 226) == 2


def test_reading_time_multiplier():
    assert reading_time_multiplier(1) == 1.0
    assert reading_time_multiplier(3) == 1.0
    assert reading_time_multiplier(5) == pytest.approx(0.9)
    assert reading_time_multiplier(30) == pytest.approx(0.7)


def test_sentiment_sign():
    assert sentiment("great success") == pytest.approx(1.0)
    assert sentiment("we failed and it was terrible") < 0
    assert sentiment("the meeting is at noon") == 0.0
    assert sentiment("") == 0.0


def test_hook_strength():
    assert hook_strength("") == 0.0
    weak = hook_strength("the meeting is at noon")
    strong = hook_strength("What if I told you I learned 3 things in a week?")
    assert 0.0 <= weak < strong <= 1.0


def test_extract_features_empty():
    features = extract_features("")
    assert features.length == 0
    assert features.wordCount == 0
    assert features.hashtagCount == 0
    assert features.hookMatchStrength == 0.0
    assert features.hasLineBreaks is False
    assert features.hasQuestion is False


def test_extract_features_normalizes_first():
    assert extract_features("  Hello World  ") == extract_features("hello world")


def test_stddev():
    assert stddev([]) == 0.0
    assert stddev([5.0]) == 0.0
    assert stddev([2.0, 4.0, 4.0, 4.0, 5.0, 5.0, 7.0, 9.0]) == pytest.approx(2.0)


@pytest.mark.parametrize("band", [(150, 800), (150, 1300)])
def test_optimal_rewrite_beats_long_post(band):
    assert length_factor(300, *band) >= length_factor(2000, *band)


def test_hook_strength_rewards_leading_number_and_first_person_only():
    assert hook_strength("3 habits that changed my mornings") == pytest.approx(0.2)
    assert hook_strength("habits that changed my mornings in 3 weeks") == 0.0
    assert hook_strength("i moved to a new team this spring") == pytest.approx(0.1)
    assert hook_strength("my manager moved to a new team") == pytest.approx(0.1)
    assert hook_strength("the new team hired me and i said yes") == 0.0
