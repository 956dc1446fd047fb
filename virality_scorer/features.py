import math
import re
from typing import Iterable, List

from .lexicons import (
    CTA_PHRASES_V3,
    ENGAGEMENT_TRIGGERS_V1,
    HOOK_PHRASES_V1,
    SENTIMENT_NEGATIVE_V1,
    SENTIMENT_POSITIVE_V1,
    STORYTELLING_PHRASES_V2,
    VALUE_INDICATORS_V2,
)
from .types import FeatureVector

# ============================================================
# Helpers
# ============================================================


def mean(arr: List[float]) -> float:
    return float(sum(arr) / len(arr)) if arr else 0.0


def stddev(arr: List[float]) -> float:
    if len(arr) < 2:
        return 0.0
    m = mean(arr)
    variance = sum((x - m) ** 2 for x in arr) / len(arr)
    return math.sqrt(variance)


def clamp(value: float, lo: float = 0.0, hi: float = 1.0) -> float:
    return max(lo, min(hi, value))


def log_scale(value: float, max_value: float = 1.0) -> float:
    """Diminishing returns: the first match is worth far more than the tenth."""
    if value <= 0:
        return 0.0
    return math.log(1 + value) / math.log(1 + max_value)


def fingerprint(text: str) -> str:
    """Normalized form of a post, used as cache key and tie-detection key."""
    return (text or "").strip().lower()


def unique_matches(text: str, phrases: Iterable[str]) -> int:
    return len({p for p in phrases if p in text})


# ============================================================
# Regexes
# ============================================================

HASHTAG_REGEX = re.compile(r"#\w+")
EMOJI_REGEX = re.compile(
    "[\U0001F300-\U0001F5FF\U0001F900-\U0001F9FF\U0001F600-\U0001F64F"
    "\U0001F680-\U0001F6FF\u2600-\u26FF\u2700-\u27BF]"
)
WORD_REGEX = re.compile(r"[a-z0-9']+")
BULLET_LINE_REGEX = re.compile(r"^\s*[-•*→✓▶]\s*\S", re.MULTILINE)
NUMBERED_LINE_REGEX = re.compile(r"^\s*\d+[.)]\s+\S", re.MULTILINE)
PARAGRAPH_SPLIT = re.compile(r"\n\s*\n")
STAT_REGEX = re.compile(r"\d+%|\d+ percent|\d+x\b")
PRONOUN_REGEX = re.compile(r"\b(i|me|my|mine)\b")

HOOK_WINDOW = 100  # characters visible before LinkedIn's "see more"
FIRST_PERSON_OPENINGS = ("i ", "i'", "my ")
WORDS_PER_MINUTE = 225

# ============================================================
# Length & structure
# ============================================================


def length_factor(length: int, band_min: int, band_max: int) -> float:
    """
    Piecewise length curve in [0.3, 1.0].
    Ramp up to the band, cosine bump peaking at the band midpoint,
    linear decay above the band with a floor of 0.4.
    """
    if length < band_min:
        return 0.3 + 0.5 * length / band_min
    if length <= band_max:
        mid = (band_min + band_max) / 2.0
        half = (band_max - band_min) / 2.0
        return 0.8 + 0.2 * math.cos((length - mid) / half * math.pi / 2)
    return max(0.4, 0.8 - (length - band_max) / 700.0 * 0.4)


def words(text: str) -> List[str]:
    return WORD_REGEX.findall(fingerprint(text))


def word_count(text: str) -> int:
    return len(words(text))


def paragraph_count(text: str) -> int:
    return len([p for p in PARAGRAPH_SPLIT.split(fingerprint(text)) if p.strip()])


def bullet_count(text: str) -> int:
    return len(BULLET_LINE_REGEX.findall(fingerprint(text)))


def numbered_list_count(text: str) -> int:
    return len(NUMBERED_LINE_REGEX.findall(fingerprint(text)))


def count_hashtags(text: str) -> int:
    return len(HASHTAG_REGEX.findall(fingerprint(text)))


def count_emojis(text: str) -> int:
    return len(EMOJI_REGEX.findall(fingerprint(text)))


def reading_time_minutes(text: str) -> int:
    return int(math.ceil(word_count(text) / WORDS_PER_MINUTE))


def reading_time_multiplier(minutes: int) -> float:
    # Bell shape: flat top at 1-3 minutes
    if minutes <= 3:
        return 1.0
    return max(0.7, 1.0 - 0.05 * (minutes - 3))


# ============================================================
# Lexical signals
# ============================================================


def sentiment(text: str) -> float:
    tokens = words(text)
    if not tokens:
        return 0.0
    positive = sum(1 for t in tokens if t in SENTIMENT_POSITIVE_V1)
    negative = sum(1 for t in tokens if t in SENTIMENT_NEGATIVE_V1)
    return clamp((positive - negative) / len(tokens), -1.0, 1.0)


def hook_strength(text: str) -> float:
    normalized = fingerprint(text)
    if not normalized:
        return 0.0
    first_line = normalized.split("\n")[0]
    opening = normalized[:HOOK_WINDOW]

    score = 0.0
    if "?" in first_line:
        score += 0.3
    score += min(0.4, unique_matches(opening, HOOK_PHRASES_V1) * 0.15)
    if re.match(r"\d", opening):
        score += 0.2
    if opening.startswith(FIRST_PERSON_OPENINGS):
        score += 0.1
    return clamp(score)


def engagement_trigger_count(text: str) -> int:
    return unique_matches(fingerprint(text), ENGAGEMENT_TRIGGERS_V1)


def engagement_trigger_strength(text: str) -> float:
    return clamp(log_scale(engagement_trigger_count(text), 3))


def storytelling_strength(text: str) -> float:
    normalized = fingerprint(text)
    story = unique_matches(normalized, STORYTELLING_PHRASES_V2)
    pronouns = len(PRONOUN_REGEX.findall(normalized))
    return clamp(log_scale(story, 5) * 0.6 + log_scale(pronouns, 15) * 0.4)


def value_strength(text: str) -> float:
    normalized = fingerprint(text)
    indicators = unique_matches(normalized, VALUE_INDICATORS_V2)
    has_stats = bool(STAT_REGEX.search(normalized))
    return clamp(log_scale(indicators, 4) * 0.7 + (0.3 if has_stats else 0.0))


def cta_present(text: str) -> bool:
    return unique_matches(fingerprint(text), CTA_PHRASES_V3) > 0


def extract_features(text: str) -> FeatureVector:
    normalized = fingerprint(text)
    return FeatureVector(
        length=len(normalized),
        wordCount=word_count(normalized),
        sentiment=sentiment(normalized),
        hashtagCount=count_hashtags(normalized),
        emojiCount=count_emojis(normalized),
        paragraphCount=paragraph_count(normalized),
        bulletCount=bullet_count(normalized),
        numberedListCount=numbered_list_count(normalized),
        readingTimeMinutes=reading_time_minutes(normalized),
        hookMatchStrength=hook_strength(normalized),
        storytellingStrength=storytelling_strength(normalized),
        valueStrength=value_strength(normalized),
        engagementTriggerCount=engagement_trigger_count(normalized),
        engagementTriggerStrength=engagement_trigger_strength(normalized),
        ctaPresent=cta_present(normalized),
        hasLineBreaks="\n" in normalized,
        hasQuestion="?" in normalized,
    )
