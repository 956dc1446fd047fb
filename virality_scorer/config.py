"""
Runtime configuration read from environment variables.
"""
import os


def _get_env_float(key: str, default: float) -> float:
    try:
        return float(os.getenv(key, default))
    except (ValueError, TypeError):
        return default


def _get_env_int(key: str, default: int) -> int:
    try:
        return int(os.getenv(key, default))
    except (ValueError, TypeError):
        return default


# Scoring engine
DEFAULT_PROFILE: str = os.getenv("VIRALITY_DEFAULT_PROFILE", "weighted-v2")
CACHE_SIZE: int = max(0, _get_env_int("VIRALITY_CACHE_SIZE", 1024))

# Comparison: minimum composite gap before a winner is declared
MATERIALITY_THRESHOLD: float = _get_env_float("VIRALITY_MATERIALITY_THRESHOLD", 2.0)

# AI adapter
AI_TIMEOUT_SECONDS: float = _get_env_float("VIRALITY_AI_TIMEOUT", 20.0)
MAX_AI_CONTENT_LENGTH: int = _get_env_int("VIRALITY_MAX_AI_CONTENT", 10000)
MAX_AI_SUGGESTION_CONTENT_LENGTH: int = _get_env_int("VIRALITY_MAX_AI_SUGGESTION_CONTENT", 5000)

# Hybrid blender
CONFIDENCE_THRESHOLD: float = _get_env_float("VIRALITY_CONFIDENCE_THRESHOLD", 0.6)
