"""
Configuration for the news recommendation core.

Adjust these parameters to tune scoring, diversification and the
surrounding service. Subclass ``Config`` to build alternative setups.
"""

import os
from typing import List


class Config:
    """Configuration class for the news recommendation system."""

    # =========================================================================
    # TEXT PROCESSING
    # =========================================================================

    # Tokens of three characters or fewer are discarded
    MIN_TOKEN_LENGTH = 4

    # =========================================================================
    # USER PROFILE
    # =========================================================================

    # Weight of each interaction type; unknown types fall back to the default
    INTERACTION_WEIGHTS = {
        'click': 1.0,
        'view': 2.0,
        'like': 2.5,
        'share': 3.0,
    }
    DEFAULT_INTERACTION_WEIGHT = 1.0

    # Time constant (days) of the exponential interaction decay
    DECAY_DAYS = 30.0

    # Sizes of the exported preference summary
    TOP_CATEGORIES = 5
    TOP_BIAS_TYPES = 3

    # =========================================================================
    # SCORING
    # =========================================================================

    CONTENT_WEIGHT = 0.7
    CATEGORY_WEIGHT = 0.2
    BIAS_WEIGHT = 0.1

    # Score thresholds used when explaining a recommendation
    HIGH_RELEVANCE_THRESHOLD = 0.7
    SIMILAR_THRESHOLD = 0.5

    # Articles older than this get no recency bonus in the trending fallback
    TRENDING_WINDOW_DAYS = 7.0

    # =========================================================================
    # DIVERSIFICATION
    # =========================================================================

    # Per-category cap is max(MIN_PER_CATEGORY_CAP, limit // 3)
    MIN_PER_CATEGORY_CAP = 2

    # Over-cap items are still admitted while the list is below this share
    # of the limit. Heuristic threshold kept for compatibility.
    DIVERSITY_OVERFLOW_RATIO = 0.7

    # =========================================================================
    # SERVICE
    # =========================================================================

    DEFAULT_LIMIT = 10
    REFRESH_COUNT = 3
    RECOMMEND_INTERACTION_LIMIT = 100
    PREFERENCE_INTERACTION_LIMIT = 50
    CANDIDATE_ARTICLE_LIMIT = 200

    # =========================================================================
    # LOGGING
    # =========================================================================

    LOG_LEVEL = os.environ.get('NEWSREC_LOG_LEVEL', 'INFO').upper()
    LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

    # =========================================================================
    # HELPER METHODS
    # =========================================================================

    @classmethod
    def validate_config(cls) -> List[str]:
        """
        Validate configuration settings.

        Returns:
            List of problems found (empty when the configuration is valid)
        """
        issues = []

        if cls.MIN_TOKEN_LENGTH < 1:
            issues.append("MIN_TOKEN_LENGTH must be at least 1")

        if cls.DECAY_DAYS <= 0:
            issues.append("DECAY_DAYS must be positive")

        if cls.TRENDING_WINDOW_DAYS <= 0:
            issues.append("TRENDING_WINDOW_DAYS must be positive")

        weights = (cls.CONTENT_WEIGHT, cls.CATEGORY_WEIGHT, cls.BIAS_WEIGHT)
        if any(w < 0 for w in weights):
            issues.append("Scoring weights must be non-negative")
        elif abs(sum(weights) - 1.0) > 1e-9:
            issues.append("Scoring weights must sum to 1")

        if not 0 <= cls.DIVERSITY_OVERFLOW_RATIO <= 1:
            issues.append("DIVERSITY_OVERFLOW_RATIO must be between 0 and 1")

        if cls.MIN_PER_CATEGORY_CAP < 1:
            issues.append("MIN_PER_CATEGORY_CAP must be at least 1")

        for name, weight in cls.INTERACTION_WEIGHTS.items():
            if weight <= 0:
                issues.append(f"Interaction weight for '{name}' must be positive")

        return issues


class StrictDiversityConfig(Config):
    """Configuration that never lets a category exceed its cap."""
    DIVERSITY_OVERFLOW_RATIO = 0.0
