from typing import Callable, List, Sequence, Tuple

from .features import extract_features
from .types import AISuggestion, FeatureVector, Suggestion

MIN_LENGTH = 150
MAX_LENGTH = 1300
HASHTAG_MAX = 5
WEAK_HOOK = 0.3
MAX_READING_MINUTES = 3
EMOJI_MAX = 10

MIN_SUGGESTIONS = 2
MAX_SUGGESTIONS = 5
MAX_MERGED_SUGGESTIONS = 6

# ============================================================
# Rule catalog, evaluated in order
# ============================================================

Rule = Tuple[Callable[[FeatureVector], bool], Suggestion]

RULES: Sequence[Rule] = (
    (
        lambda f: f.length < MIN_LENGTH,
        Suggestion(
            id="length-short",
            type="improvement",
            title="Expand your content",
            description=f"Posts between {MIN_LENGTH}-{MAX_LENGTH} characters typically perform better. Add more context, examples, or insights.",
        ),
    ),
    (
        lambda f: f.length > MAX_LENGTH,
        Suggestion(
            id="length-long",
            type="warning",
            title="Consider shortening",
            description="Very long posts may lose reader attention. Try breaking into multiple posts or cutting unnecessary details.",
        ),
    ),
    (
        lambda f: f.hashtagCount == 0,
        Suggestion(
            id="no-hashtags",
            type="improvement",
            title="Add relevant hashtags",
            description="Include 1-3 industry-relevant hashtags to improve discoverability.",
        ),
    ),
    (
        lambda f: f.hashtagCount > HASHTAG_MAX,
        Suggestion(
            id="too-many-hashtags",
            type="warning",
            title="Reduce hashtags",
            description="Too many hashtags can appear spammy. Stick to 1-3 highly relevant ones.",
        ),
    ),
    (
        lambda f: f.engagementTriggerCount == 0 and not f.hasQuestion,
        Suggestion(
            id="engagement-missing",
            type="improvement",
            title="Add engagement prompt",
            description="End with a question or call-to-action to encourage comments and discussion.",
        ),
    ),
    (
        lambda f: f.hookMatchStrength < WEAK_HOOK,
        Suggestion(
            id="weak-hook",
            type="improvement",
            title="Strengthen your opening",
            description="Start with a compelling hook - a question, surprising fact, or personal story opener.",
        ),
    ),
    (
        lambda f: not f.hasLineBreaks,
        Suggestion(
            id="add-structure",
            type="tip",
            title="Break into paragraphs",
            description="Use line breaks to improve readability and make your content more scannable.",
        ),
    ),
    (
        lambda f: f.readingTimeMinutes > MAX_READING_MINUTES,
        Suggestion(
            id="reading-time",
            type="warning",
            title="Shorten the read",
            description=f"Posts that take more than {MAX_READING_MINUTES} minutes to read lose most readers before the end.",
        ),
    ),
    (
        lambda f: f.sentiment < 0,
        Suggestion(
            id="negative-tone",
            type="warning",
            title="Balance the tone",
            description="The post leans negative. Pair setbacks with the lesson or outcome so readers leave with something positive.",
        ),
    ),
    (
        lambda f: f.emojiCount == 0,
        Suggestion(
            id="no-emoji",
            type="tip",
            title="Add a touch of visual flair",
            description="One to three well-placed emojis make a post easier to scan in the feed.",
        ),
    ),
    (
        lambda f: f.emojiCount > EMOJI_MAX,
        Suggestion(
            id="too-many-emoji",
            type="warning",
            title="Cut back on emojis",
            description="Heavy emoji use reads as noise on LinkedIn. Keep only the ones that carry meaning.",
        ),
    ),
)

FALLBACK_TIPS: Sequence[Suggestion] = (
    Suggestion(
        id="timing-tip",
        type="tip",
        title="Optimize posting time",
        description="LinkedIn engagement is highest on Tuesday, Wednesday, and Thursday between 8-10am and 3-5pm.",
    ),
    Suggestion(
        id="storytelling-tip",
        type="tip",
        title="Use storytelling",
        description="Posts that tell a personal story tend to get 2-3x more engagement on LinkedIn.",
    ),
    Suggestion(
        id="visual-tip",
        type="tip",
        title="Add visual content",
        description="Posts with images or videos get 2x more comments than text-only posts.",
    ),
    Suggestion(
        id="first-line-tip",
        type="tip",
        title="Strengthen your opening",
        description='Only the first 2-3 lines appear before the "see more" button. Make them compelling.',
    ),
)


def generate_suggestions(text: str) -> List[Suggestion]:
    features = extract_features(text)

    suggestions = [s.model_copy() for check, s in RULES if check(features)]

    seen_titles = {s.title for s in suggestions}
    for tip in FALLBACK_TIPS:
        if len(suggestions) >= MIN_SUGGESTIONS:
            break
        if tip.title in seen_titles:
            continue
        suggestions.append(tip.model_copy())

    return suggestions[:MAX_SUGGESTIONS]


# ============================================================
# AI suggestions
# ============================================================

AI_SUGGESTION_TYPES = ("improvement", "tip", "warning")


def convert_ai_suggestions(ai_suggestions: List[AISuggestion]) -> List[Suggestion]:
    return [
        Suggestion(
            id=f"ai-suggestion-{i}",
            type=AI_SUGGESTION_TYPES[i % 3],
            title=s.title,
            description=s.description,
        )
        for i, s in enumerate(ai_suggestions or [])
    ]


def merge_suggestions(
    ai_suggestions: List[AISuggestion],
    rule_suggestions: List[Suggestion],
    limit: int = MAX_MERGED_SUGGESTIONS,
) -> List[Suggestion]:
    """AI suggestions first, then rule-based ones, capped at `limit`."""
    return (convert_ai_suggestions(ai_suggestions) + list(rule_suggestions))[:limit]
