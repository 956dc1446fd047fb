"""
Versioned keyword lists and weight tables used by the scoring profiles.

Tables are suffixed with the profile generation that introduced them so a
profile can be pinned to an exact set of constants.
"""
import math
from typing import Dict, Tuple

# ============================================================
# Lexicons
# ============================================================

POSITIVE_WORDS_V1 = (
    "thank", "appreciate", "excited", "proud", "happy", "success",
    "achievement", "accomplished", "growth", "learned", "opportunity",
    "connection", "network", "professional", "career", "job", "hiring",
    "tips", "advice", "how to", "guide", "insights", "experience", "story",
)

POSITIVE_WORDS_V2 = (
    "thank", "appreciate", "excited", "proud", "happy", "success",
    "achievement", "accomplished", "growth", "learned", "opportunity",
    "connection", "network", "professional", "career", "insights",
)

# Whole-word matches, used for sentiment polarity
SENTIMENT_POSITIVE_V1 = frozenset({
    "thank", "thanks", "grateful", "appreciate", "excited", "proud", "happy",
    "success", "successful", "win", "wins", "growth", "great", "amazing",
    "love", "inspired", "opportunity", "achievement", "celebrate", "thrilled",
    "delighted", "best", "improve", "improved", "progress",
})

SENTIMENT_NEGATIVE_V1 = frozenset({
    "fail", "failed", "failure", "hate", "terrible", "awful", "worst", "bad",
    "angry", "sad", "disappointed", "frustrated", "fired", "layoff", "layoffs",
    "toxic", "problem", "struggle", "struggled", "broke", "lost", "loss",
    "never", "quit", "burnout",
})

ENGAGEMENT_TRIGGERS_V1 = (
    "agree?", "?", "thoughts", "comment", "share", "like", "what do you think",
    "your experience", "your opinion", "what would you", "who else", "tag someone",
)

HOOK_PHRASES_V1 = (
    "i discovered", "i learned", "breaking:", "unpopular opinion", "the truth about",
    "little known fact", "secret to", "what nobody tells you", "attention",
    "game changer", "revealed", "case study", "my biggest mistake",
)

STORYTELLING_PHRASES_V2 = (
    "when i", "i remember", "last week", "last year", "yesterday", "today",
    "my journey", "lesson learned", "failure", "success", "challenge", "overcome",
)

VALUE_INDICATORS_V2 = (
    "benefit", "advantage", "save time", "boost", "increase", "improve", "solution",
    "tips", "tricks", "strategy", "framework", "how to", "steps to", "proven",
)

CTA_PHRASES_V3 = (
    "what do you think", "share your", "comment below", "tag someone",
    "your thoughts", "agree?", "disagree?", "your experience",
    "what would you", "who else", "thoughts?", "opinions?",
)

# Eight-factor lexicons
STRONG_HOOKS_V3 = (
    "i just got fired", "shocking truth", "nobody tells you", "unpopular opinion",
    "breaking:", "attention:", "listen up", "game changer", "secret to",
    "what happened next", "you won't believe", "the truth about",
    "little known fact", "surprising", "revealed", "discovered",
)

MODERATE_HOOKS_V3 = (
    "here's what i learned", "my biggest mistake", "case study",
    "how i", "why you should", "what if", "imagine if",
    "the problem with", "everyone thinks", "most people",
)

BOLD_STATEMENTS_V3 = ("never", "always", "all", "every", "no one", "everyone")

VALUE_INDICATORS_V3 = (
    "tips", "strategy", "framework", "method", "steps", "ways to",
    "how to", "guide", "checklist", "template", "proven", "tested",
    "insights", "lessons", "mistakes", "experience", "advice",
)

STORYTELLING_PHRASES_V3 = (
    "when i", "i remember", "last week", "yesterday", "my journey",
    "what happened", "lesson learned", "challenge", "struggle",
    "realized", "discovered", "felt", "emotion", "story",
)

ACTION_WORDS_V3 = ("step", "action", "implement", "apply", "use", "try")

PROFESSIONAL_KEYWORDS_V3 = (
    "business", "career", "leadership", "management", "strategy",
    "growth", "success", "professional", "industry", "market",
)

SOPHISTICATED_TERMS_V3 = (
    "framework", "methodology", "paradigm", "leverage", "synergy",
    "stakeholder", "roi", "kpi", "metrics", "analytics",
)

CREDIBILITY_PHRASES_V3 = ("years of experience", "in my experience", "as a")

EMOTIONAL_WORDS_V3 = (
    "felt", "realized", "struggled", "learned", "discovered",
    "excited", "nervous", "proud", "disappointed", "surprised",
)

ENGAGEMENT_WORDS_V3 = ("comment", "share", "like", "connect", "follow", "tag")

# ============================================================
# Weight tables
# ============================================================

FACTOR_WEIGHTS_V3: Dict[str, float] = {
    "hookStrength": 0.20,
    "readabilityFormatting": 0.15,
    "valueRelevance": 0.15,
    "authorCredibility": 0.15,
    "storytellingRelatability": 0.10,
    "visualAppeal": 0.10,
    "callToActionEngagement": 0.10,
    "timingFrequency": 0.05,
}

# (factor name, weight) pairs for the weighted-sum profile
ENGAGEMENT_WEIGHTS_V2: Tuple[Tuple[str, float], ...] = (
    ("length", 3),
    ("engagementTriggers", 4),
    ("hook", 3),
    ("storytelling", 3),
    ("hashtags", 2),
    ("structure", 2),
)

REACH_WEIGHTS_V2: Tuple[Tuple[str, float], ...] = (
    ("length", 3),
    ("hashtags", 2),
    ("hook", 4),
    ("structure", 2),
    ("engagementTriggers", 1),
)

VIRALITY_WEIGHTS_V2: Tuple[Tuple[str, float], ...] = (
    ("storytelling", 4),
    ("value", 3),
    ("engagementTriggers", 3),
    ("hook", 2),
    ("hashtags", 1),
)

# ============================================================
# Audience tables
# ============================================================

FOLLOWER_MULTIPLIERS: Dict[str, float] = {
    "0-500": 0.5,
    "500-1K": 0.8,
    "1K-5K": 1.0,
    "5K-10K": 1.3,
    "10K+": 1.8,
}

ENGAGEMENT_LEVEL_MULTIPLIERS: Dict[str, float] = {
    "Low": 0.7,
    "Medium": 1.0,
    "High": 1.4,
}

# Per-score industry baselines: (engagement, reach, virality)
INDUSTRY_MULTIPLIERS: Dict[str, Tuple[float, float, float]] = {
    "Technology": (1.1, 1.2 * 1.3, 1.2),
    "Marketing": (1.4, 1.3 * 1.2, 1.3),
    "Finance": (0.8, 0.9 * 1.0, 0.9),
    "Healthcare": (0.9, 0.8 * 0.8, 0.8),
    "Education": (1.2, 1.0 * 0.9, 1.0),
    "Retail": (1.0, 1.1 * 1.1, 1.1),
    "Manufacturing": (0.9, 0.9, 0.9),
    "Consulting": (1.1, 1.0, 1.0),
    "Legal": (0.8, 0.9, 0.8),
}

INDUSTRY_KEYWORDS: Dict[str, Tuple[str, ...]] = {
    "Technology": ("software", "artificial intelligence", "tech", "data", "cloud", "engineering", "startup", "code", "product", "automation"),
    "Marketing": ("marketing", "brand", "campaign", "content", "audience", "seo", "growth", "social media", "funnel", "conversion"),
    "Finance": ("finance", "investment", "market", "capital", "revenue", "fintech", "banking", "portfolio", "budget", "profit"),
    "Healthcare": ("health", "patient", "clinical", "medical", "care", "hospital", "wellness", "doctor", "nurse", "pharma"),
    "Education": ("education", "learning", "students", "teacher", "school", "course", "training", "university", "skills", "curriculum"),
    "Retail": ("retail", "customer", "store", "shopping", "ecommerce", "sales", "consumer", "inventory", "brand", "omnichannel"),
    "Manufacturing": ("manufacturing", "supply chain", "factory", "production", "operations", "lean", "quality", "logistics", "automation", "safety"),
    "Consulting": ("consulting", "client", "strategy", "advisory", "transformation", "stakeholder", "framework", "engagement", "roadmap", "insights"),
    "Legal": ("legal", "law", "compliance", "contract", "regulation", "attorney", "litigation", "policy", "counsel", "privacy"),
}


def _check_weights(name: str, weights, expected: float) -> None:
    total = sum(w for _, w in weights)
    if not math.isclose(total, expected, rel_tol=1e-9):
        raise ValueError(f"{name} sums to {total}, expected {expected}")


_check_weights("FACTOR_WEIGHTS_V3", FACTOR_WEIGHTS_V3.items(), 1.0)
_check_weights("ENGAGEMENT_WEIGHTS_V2", ENGAGEMENT_WEIGHTS_V2, 17)
_check_weights("REACH_WEIGHTS_V2", REACH_WEIGHTS_V2, 12)
_check_weights("VIRALITY_WEIGHTS_V2", VIRALITY_WEIGHTS_V2, 13)
