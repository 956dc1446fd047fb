"""
Eight-factor virality model.

V = sum(F_i * W_i) over eight factors, each scored 0-10, with the fixed
weights in FACTOR_WEIGHTS_V3. The result is on a 0-10 scale.
"""
import re
from typing import Dict, List, Optional, Tuple

from .features import EMOJI_REGEX, clamp, fingerprint, unique_matches
from .lexicons import (
    ACTION_WORDS_V3,
    BOLD_STATEMENTS_V3,
    CREDIBILITY_PHRASES_V3,
    CTA_PHRASES_V3,
    EMOTIONAL_WORDS_V3,
    ENGAGEMENT_WORDS_V3,
    FACTOR_WEIGHTS_V3,
    MODERATE_HOOKS_V3,
    PROFESSIONAL_KEYWORDS_V3,
    SOPHISTICATED_TERMS_V3,
    STORYTELLING_PHRASES_V3,
    STRONG_HOOKS_V3,
    VALUE_INDICATORS_V3,
)
from .types import (
    AdvancedAnalysisParams,
    EnhancedViralityResult,
    FactorDetail,
    ViralityFactors,
)

STATISTICS_REGEX = re.compile(r"\d+%|\d+ percent|\d+x|\d+\.\d+")
VISUAL_BULLETS_REGEX = re.compile(r"[•→✓▶]")
FORMATTING_REGEX = re.compile(r"\*\*.*?\*\*|__.*?__|`.*?`")
LIST_LINE_REGEX = re.compile(r"^\s*[-•*]\s", re.MULTILINE)
PERSONAL_PRONOUNS_REGEX = re.compile(r"\b(i|me|my|mine|we|our|us)\b")
SENTENCE_SPLIT = re.compile(r"[.!?]+")
HASHTAG_STRIP_REGEX = re.compile(r"[ \t]*#\w+")

STRONG_FACTOR_THRESHOLD = 7.0


def _factor(score: float) -> float:
    return clamp(score, 0.0, 10.0)


# ============================================================
# Factor scorers (text is already normalized)
# ============================================================


def score_hook(text: str) -> float:
    first_line = text.split("\n")[0]
    opening = text[:100]

    score = 3.0
    score += min(3.0, unique_matches(opening, STRONG_HOOKS_V3) * 1.5)
    score += min(2.0, unique_matches(opening, MODERATE_HOOKS_V3) * 1.0)
    if "?" in first_line:
        score += 1
    if STATISTICS_REGEX.search(opening):
        score += 1
    score += min(1.0, unique_matches(opening, BOLD_STATEMENTS_V3) * 0.5)
    return _factor(score)


def strip_hashtags(text: str) -> str:
    return HASHTAG_STRIP_REGEX.sub("", text).strip()


def score_readability(text: str) -> float:
    # Hashtags are left out of the layout measures
    body = strip_hashtags(text)
    lines = body.split("\n")
    paragraphs = body.split("\n\n")

    score = 5.0
    avg_paragraph = sum(len(p) for p in paragraphs) / len(paragraphs)
    if avg_paragraph < 200:
        score += 1
    if avg_paragraph < 150:
        score += 1

    empty_lines = len([line for line in lines if not line.strip()])
    content_lines = max(1, len(lines) - empty_lines)
    whitespace_ratio = empty_lines / content_lines
    if whitespace_ratio > 0.2:
        score += 1
    if whitespace_ratio > 0.3:
        score += 1

    if EMOJI_REGEX.search(text):
        score += 0.5
    if VISUAL_BULLETS_REGEX.search(text):
        score += 0.5
    if LIST_LINE_REGEX.search(text):
        score += 0.5

    sentences = [s for s in SENTENCE_SPLIT.split(body) if s.strip()]
    if sentences:
        avg_sentence = sum(len(s) for s in sentences) / len(sentences)
        if 15 < avg_sentence < 80:
            score += 1
    return _factor(score)


def score_value(text: str) -> float:
    score = 3.0
    score += min(3.0, unique_matches(text, VALUE_INDICATORS_V3) * 0.5)
    score += min(2.0, unique_matches(text, ACTION_WORDS_V3) * 0.3)
    score += min(2.0, unique_matches(text, PROFESSIONAL_KEYWORDS_V3) * 0.2)
    return _factor(score)


def score_credibility(text: str, params: Optional[AdvancedAnalysisParams] = None) -> float:
    score = 5.0
    score += min(3.0, unique_matches(text, SOPHISTICATED_TERMS_V3) * 0.5)
    if unique_matches(text, CREDIBILITY_PHRASES_V3):
        score += 1
    if params is not None:
        if params.engagementLevel == "High":
            score += 1
        if params.followerRange == "10K+":
            score += 2
        elif params.followerRange == "5K-10K":
            score += 1
    return _factor(score)


def score_storytelling(text: str) -> float:
    score = 2.0
    score += min(3.0, len(PERSONAL_PRONOUNS_REGEX.findall(text)) * 0.1)
    score += min(3.0, unique_matches(text, STORYTELLING_PHRASES_V3) * 0.8)
    score += min(2.0, unique_matches(text, EMOTIONAL_WORDS_V3) * 0.4)
    return _factor(score)


def score_visual(text: str) -> float:
    score = 3.0
    emoji_count = len(EMOJI_REGEX.findall(text))
    if 0 < emoji_count <= 5:
        score += 2
    elif 5 < emoji_count <= 10:
        score += 1
    elif emoji_count > 10:
        score -= 1

    if VISUAL_BULLETS_REGEX.search(text):
        score += 1
    if LIST_LINE_REGEX.search(text):
        score += 1
    if FORMATTING_REGEX.search(text):
        score += 1
    if len(text.split("\n\n")) - 1 > 2:
        score += 1
    return _factor(score)


def score_call_to_action(text: str) -> float:
    score = 2.0
    score += min(4.0, unique_matches(text, CTA_PHRASES_V3) * 2)
    score += min(2.0, text.count("?") * 0.5)
    score += min(2.0, unique_matches(text, ENGAGEMENT_WORDS_V3) * 0.5)
    return _factor(score)


def score_timing() -> float:
    # No posting-time data is available for a draft; assume a moderate schedule.
    return 6.0


# ============================================================
# Explanations
# ============================================================

# factor -> (strong description, weak description, weak suggestions, strong suggestions)
FACTOR_NOTES: Dict[str, Tuple[str, str, List[str], List[str]]] = {
    "hookStrength": (
        "Strong opening that grabs attention effectively",
        "Opening could be more compelling to stop the scroll",
        [
            "Start with a provocative question or bold statement",
            "Use specific numbers or surprising statistics",
            "Consider vulnerability or contrarian viewpoints",
        ],
        ["Maintain this strong hook style in future posts"],
    ),
    "readabilityFormatting": (
        "Well-formatted and easy to read",
        "Formatting could be improved for better readability",
        [
            "Break content into shorter paragraphs (2-3 sentences)",
            "Add more whitespace and visual breaks",
            "Use bullet points or emojis for visual interest",
        ],
        ["Great formatting - keep this structure"],
    ),
    "valueRelevance": (
        "Provides clear professional value",
        "Could offer more actionable insights",
        [
            "Include specific tips or strategies",
            "Share concrete examples or case studies",
            "Focus on professional relevance and applicability",
        ],
        ["Excellent value proposition"],
    ),
    "authorCredibility": (
        "Content demonstrates expertise and authority",
        "Could establish more credibility and expertise",
        [
            "Share relevant experience or credentials",
            "Include industry-specific insights",
            "Reference data or research to support points",
        ],
        ["Strong credibility indicators"],
    ),
    "storytellingRelatability": (
        "Engaging personal story that resonates",
        "Could benefit from more personal storytelling",
        [
            "Include personal experiences and emotions",
            'Use "I", "my", "we" to create connection',
            "Share vulnerable moments or lessons learned",
        ],
        ["Compelling storytelling approach"],
    ),
    "visualAppeal": (
        "Good use of visual elements",
        "Could be more visually engaging",
        [
            "Add 2-3 relevant emojis strategically",
            "Use bullet points (• → ✓) for lists",
            "Create visual hierarchy with formatting",
        ],
        ["Nice visual presentation"],
    ),
    "callToActionEngagement": (
        "Strong call-to-action that encourages interaction",
        "Needs clearer engagement prompts",
        [
            "End with a specific question related to your content",
            "Ask for opinions or personal experiences",
            "Invite readers to share or comment",
        ],
        ["Excellent engagement strategy"],
    ),
}

TIMING_NOTE = FactorDetail(
    score=6.0,
    description="Timing optimization requires consistent posting strategy",
    suggestions=[
        "Post during business hours on weekdays",
        "Maintain consistent posting schedule",
        "Engage actively in first 5 minutes after posting",
    ],
)


def _label(key: str, score: float) -> str:
    words = re.sub(r"([A-Z])", r" \1", key).lower()
    return f"{words}: {score:.1f}/10"


def interpret(virality: float) -> str:
    if virality >= 8.0:
        return "High"
    if virality >= 6.0:
        return "Moderate"
    return "Low"


def describe_factors(factors: ViralityFactors) -> Dict[str, FactorDetail]:
    detailed: Dict[str, FactorDetail] = {}
    for key, score in factors.model_dump().items():
        if key == "timingFrequency":
            detailed[key] = TIMING_NOTE.model_copy(update={"score": score})
            continue
        strong, weak, fixes, keep = FACTOR_NOTES[key]
        is_strong = score >= STRONG_FACTOR_THRESHOLD
        detailed[key] = FactorDetail(
            score=score,
            description=strong if is_strong else weak,
            suggestions=list(keep if is_strong else fixes),
        )
    return detailed


def weighted_virality(factors: ViralityFactors) -> float:
    values = factors.model_dump()
    return sum(values[name] * weight for name, weight in FACTOR_WEIGHTS_V3.items())


# ============================================================
# Public API
# ============================================================


def score_factors(
    text: str, params: Optional[AdvancedAnalysisParams] = None
) -> ViralityFactors:
    normalized = fingerprint(text)
    if not normalized:
        return ViralityFactors(
            hookStrength=0.0,
            readabilityFormatting=0.0,
            valueRelevance=0.0,
            authorCredibility=0.0,
            storytellingRelatability=0.0,
            visualAppeal=0.0,
            callToActionEngagement=0.0,
            timingFrequency=0.0,
        )
    return ViralityFactors(
        hookStrength=score_hook(normalized),
        readabilityFormatting=score_readability(normalized),
        valueRelevance=score_value(normalized),
        authorCredibility=score_credibility(normalized, params),
        storytellingRelatability=score_storytelling(normalized),
        visualAppeal=score_visual(normalized),
        callToActionEngagement=score_call_to_action(normalized),
        timingFrequency=score_timing(),
    )


def analyze_virality(
    text: str, params: Optional[AdvancedAnalysisParams] = None
) -> EnhancedViralityResult:
    factors = score_factors(text, params)
    virality = weighted_virality(factors)

    ranked = sorted(factors.model_dump().items(), key=lambda x: x[1], reverse=True)

    return EnhancedViralityResult(
        viralityScore=round(virality * 10) / 10,
        factors=factors,
        interpretation=interpret(virality),
        topStrengths=[_label(k, s) for k, s in ranked[:3]],
        improvementAreas=[_label(k, s) for k, s in ranked[-3:]],
        detailedAnalysis=describe_factors(factors),
    )


def legacy_scores(result: EnhancedViralityResult) -> Tuple[float, float, float]:
    """Map the 0-10 virality score onto 0-100 (engagement, reach, virality)."""
    scaled = result.viralityScore * 10
    return scaled * 0.9, scaled * 0.8, scaled
