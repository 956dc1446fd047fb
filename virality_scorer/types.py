from typing import List, Dict, Optional, Literal
from pydantic import BaseModel, ConfigDict, Field

# ============================================================
# INPUT CONTEXT: optional caller-supplied audience parameters
# ============================================================

FollowerRange = Literal["0-500", "500-1K", "1K-5K", "5K-10K", "10K+"]
Industry = Literal[
    "Technology",
    "Marketing",
    "Finance",
    "Healthcare",
    "Education",
    "Retail",
    "Manufacturing",
    "Consulting",
    "Legal",
]
EngagementLevel = Literal["Low", "Medium", "High"]


class AdvancedAnalysisParams(BaseModel):
    model_config = ConfigDict(frozen=True)

    followerRange: FollowerRange = "1K-5K"
    industry: Industry = "Technology"
    engagementLevel: EngagementLevel = "Medium"


# ============================================================
# FEATURES: signals extracted from one post
# ============================================================


class FeatureVector(BaseModel):
    length: int
    wordCount: int
    sentiment: float  # [-1, 1]
    hashtagCount: int
    emojiCount: int
    paragraphCount: int
    bulletCount: int
    numberedListCount: int
    readingTimeMinutes: int
    hookMatchStrength: float  # [0, 1]
    storytellingStrength: float  # [0, 1]
    valueStrength: float  # [0, 1]
    engagementTriggerCount: int
    engagementTriggerStrength: float  # [0, 1]
    ctaPresent: bool
    hasLineBreaks: bool
    hasQuestion: bool


# ============================================================
# DETERMINISTIC OUTPUT
# ============================================================


class PostMetrics(BaseModel):
    engagementScore: int = Field(ge=0, le=100)
    reachScore: int = Field(ge=0, le=100)
    viralityScore: int = Field(ge=0, le=100)
    likes: int = Field(ge=0)
    comments: int = Field(ge=0)
    shares: int = Field(ge=0)


class TimeSeriesPoint(BaseModel):
    time: str
    engagement: float


class Suggestion(BaseModel):
    id: str
    type: Literal["improvement", "warning", "tip"]
    title: str
    description: str


class ComparisonResult(BaseModel):
    winner: Literal[0, 1, 2]
    margin: int = Field(ge=0)
    score1: float = 0.0
    score2: float = 0.0
    metrics1: Optional[PostMetrics] = None
    metrics2: Optional[PostMetrics] = None


# ============================================================
# EIGHT-FACTOR VIRALITY MODEL
# ============================================================


class ViralityFactors(BaseModel):
    hookStrength: float  # 0-10
    readabilityFormatting: float
    valueRelevance: float
    authorCredibility: float
    storytellingRelatability: float
    visualAppeal: float
    callToActionEngagement: float
    timingFrequency: float


class FactorDetail(BaseModel):
    score: float
    description: str
    suggestions: List[str]


class EnhancedViralityResult(BaseModel):
    viralityScore: float  # 0-10, one decimal
    factors: ViralityFactors
    interpretation: Literal["High", "Moderate", "Low"]
    topStrengths: List[str]
    improvementAreas: List[str]
    detailedAnalysis: Dict[str, FactorDetail]


# ============================================================
# AI OUTPUT: untrusted, validated before use
# ============================================================


class AISuggestion(BaseModel):
    title: str
    description: str = ""


class AIContentAnalysis(BaseModel):
    strengths: List[str] = []
    weaknesses: List[str] = []
    tone: str = ""
    readability: str = ""
    callToAction: str = ""


class AIAnalysisResult(BaseModel):
    model_config = ConfigDict(extra="ignore")

    engagementScore: float = Field(ge=0, le=100)
    reachScore: float = Field(ge=0, le=100)
    viralityScore: float = Field(ge=0, le=100)
    suggestions: List[AISuggestion] = []
    recommendedHashtags: List[str] = []
    analysis: Optional[AIContentAnalysis] = None


class GeneratedHook(BaseModel):
    id: str
    text: str
    type: str = ""
    description: str = ""


# ============================================================
# HYBRID: deterministic + AI blend
# ============================================================


class HybridMetrics(PostMetrics):
    recommendedHashtags: List[str] = []
    isAIEnhanced: bool = False
    analysis: Optional[AIContentAnalysis] = None


class HybridOptions(BaseModel):
    useAI: bool = True
    preferEnhanced: bool = True
    confidenceThreshold: Optional[float] = Field(default=None, ge=0, le=1)


class HybridResult(BaseModel):
    enhanced: EnhancedViralityResult
    legacy: HybridMetrics
    confidence: float = Field(ge=0, le=1)
    analysisMethod: Literal["enhanced-only", "ai-only", "hybrid"]
    aiContribution: float = Field(ge=0, le=1)


class HybridComparison(BaseModel):
    resultA: HybridResult
    resultB: HybridResult
    comparison: ComparisonResult
