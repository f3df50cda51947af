"""
User profiling for personalized recommendations.

A profile aggregates a user's interaction history into:
  - category and political-bias preference distributions
  - an interest vector in TF-IDF space

Each event contributes  weight(type) * exp(-days_since / 30).
"""

import json
import logging
from collections import defaultdict
from datetime import datetime
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

import numpy as np

from .config import Config
from .math_utils import calculate_time_decay
from .models import InteractionEvent, InteractionType, UserPreferenceSummary, UserProfile

logger = logging.getLogger(__name__)


def _normalized(weights: Mapping[str, float]) -> Dict[str, float]:
    total = sum(weights.values())
    if total <= 0:
        return dict(weights)
    return {key: value / total for key, value in weights.items()}


def _top_keys(weights: Mapping[str, float], n: int) -> List[str]:
    # sorted() is stable, so ties keep first-seen order
    ranked = sorted(weights.items(), key=lambda item: item[1], reverse=True)
    return [key for key, _ in ranked[:n]]


class ProfileAccumulator:
    """
    Collects weighted interactions, then freezes them into a UserProfile.

    The accumulator is the only mutable stage; profiles handed out by
    ``build`` never change afterwards.
    """

    def __init__(self, vocabulary_size: int, config=Config, now: Optional[datetime] = None):
        self.config = config
        self.now = now
        self.vocabulary_size = vocabulary_size

        self.category_weights: Dict[str, float] = defaultdict(float)
        self.bias_weights: Dict[str, float] = defaultdict(float)
        self.interest_vector = np.zeros(vocabulary_size)
        self.total_weight = 0.0
        self.total_interactions = 0

    def effective_weight(self, interaction: InteractionEvent) -> float:
        type_weight = InteractionType.weight_for(interaction.interaction_type, self.config)
        decay = calculate_time_decay(
            interaction.timestamp, self.now, self.config.DECAY_DAYS
        )
        return type_weight * decay

    def add(self, interaction: InteractionEvent,
            article_vector: Optional[np.ndarray] = None) -> None:
        """
        Add one interaction.

        Args:
            interaction: The interaction event
            article_vector: TF-IDF vector of the article, if available
        """
        weight = self.effective_weight(interaction)

        self.category_weights[interaction.category] += weight
        self.bias_weights[interaction.political_bias] += weight

        if article_vector is None:
            logger.debug(
                f"No vector for article {interaction.article_id}; "
                f"counting category and bias only"
            )
        elif len(article_vector) != self.vocabulary_size:
            logger.debug(
                f"Vector for article {interaction.article_id} has "
                f"{len(article_vector)} dims, expected {self.vocabulary_size}; skipped"
            )
        else:
            self.interest_vector += article_vector * weight

        self.total_weight += weight
        self.total_interactions += 1

    def build(self) -> UserProfile:
        """Normalise the accumulated weights into a frozen profile."""
        interest_vector = self.interest_vector.copy()
        if self.total_weight > 0:
            interest_vector /= self.total_weight
        interest_vector.setflags(write=False)

        return UserProfile(
            category_weights=_normalized(self.category_weights),
            bias_weights=_normalized(self.bias_weights),
            interest_vector=interest_vector,
            total_interactions=self.total_interactions,
        )


class UserProfiler:
    """
    Builds user profiles from interaction histories.
    """

    def __init__(self, config=Config):
        self.config = config

    def build_profile(
        self,
        interactions: Iterable[InteractionEvent],
        article_vectors: Mapping[int, np.ndarray],
        vocabulary_size: int,
        now: Optional[datetime] = None,
    ) -> UserProfile:
        """
        Build a user profile from interactions.

        Args:
            interactions: The user's interaction history
            article_vectors: article_id -> TF-IDF vector
            vocabulary_size: Current vocabulary size
            now: Reference time for decay (default: current time)

        Returns:
            Normalised, immutable user profile
        """
        accumulator = ProfileAccumulator(vocabulary_size, self.config, now)
        for interaction in interactions:
            accumulator.add(interaction, article_vectors.get(interaction.article_id))
        return accumulator.build()

    def export_profile_data(self, profile: UserProfile,
                            vocabulary: Sequence[str]) -> UserPreferenceSummary:
        """
        Convert a profile to its storage format.

        Args:
            profile: Profile to export
            vocabulary: Vocabulary the interest vector is aligned with

        Returns:
            Top categories, top bias types and the serialised profile
        """
        serialized = json.dumps({
            'interestVector': profile.interest_vector.tolist(),
            'vocabulary': list(vocabulary),
            'totalInteractions': profile.total_interactions,
        })

        return UserPreferenceSummary(
            preferred_categories=_top_keys(profile.category_weights, self.config.TOP_CATEGORIES),
            preferred_bias_types=_top_keys(profile.bias_weights, self.config.TOP_BIAS_TYPES),
            serialized_profile=serialized,
        )
