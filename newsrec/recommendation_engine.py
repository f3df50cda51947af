"""
Recommendation Engine
=====================

Scores candidate articles against a user profile:

    score = 0.7 x cosine(interest_vector, article_vector)
          + 0.2 x category_weights[article.category]
          + 0.1 x bias_weights[article.political_bias]

then ranks, explains and diversifies the result. Users without a profile
(no interactions, or no model built yet) get trending recommendations
instead:

    trending = |sentiment_score| + (1 - min(7, age_days) / 7)

Usage:
    engine = RecommendationEngine()
    engine.initialize(articles)

    recs = engine.get_recommendations(
        user_id=1,
        interactions=events,
        candidates=articles,
        exclude_ids=[3, 7],
        limit=10,
    )
"""

import logging
from collections import Counter
from datetime import datetime
from typing import Dict, Iterable, List, NamedTuple, Optional, Sequence

import numpy as np

from .config import Config
from .math_utils import cosine_similarity, days_between
from .models import Article, InteractionEvent, Recommendation, UserPreferenceSummary, UserProfile
from .tfidf_processor import TfIdfProcessor
from .user_profiler import UserProfiler

logger = logging.getLogger(__name__)

TRENDING_REASON = "Trending article"


class ArticleFeatures(NamedTuple):
    category: str
    political_bias: str
    sentiment_score: float


def diversify_recommendations(
    recommendations: Sequence[Recommendation],
    limit: int,
    min_per_category: int = Config.MIN_PER_CATEGORY_CAP,
    overflow_ratio: float = Config.DIVERSITY_OVERFLOW_RATIO,
) -> List[Recommendation]:
    """
    Bounded greedy selection with a per-category cap.

    Walks the ranked list keeping at most max(min_per_category, limit // 3)
    items per category. An over-cap item is still taken while the result
    holds fewer than ``overflow_ratio * limit`` items, so the list is not
    starved when few categories are represented.

    Args:
        recommendations: Candidates sorted by score, best first
        limit: Number of items to select
        min_per_category: Lower bound of the per-category cap
        overflow_ratio: Fill share below which the cap is ignored

    Returns:
        Up to ``limit`` recommendations, in ranked order
    """
    max_per_category = max(min_per_category, limit // 3)
    category_counts: Counter = Counter()
    selected: List[Recommendation] = []

    for rec in recommendations:
        category = rec.article.category
        if (category_counts[category] < max_per_category
                or len(selected) < limit * overflow_ratio):
            selected.append(rec)
            category_counts[category] += 1

        if len(selected) >= limit:
            break

    return selected


class RecommendationEngine:
    """
    Content-based recommender over a rebuildable TF-IDF model.

    Call ``initialize`` whenever the corpus changes. Until then every request
    is served from the trending fallback.
    """

    def __init__(self,
                 config=Config,
                 tfidf_processor: Optional[TfIdfProcessor] = None,
                 user_profiler: Optional[UserProfiler] = None):
        self.config = config
        self.tfidf_processor = tfidf_processor or TfIdfProcessor(config)
        self.user_profiler = user_profiler or UserProfiler(config)

        self._user_profiles: Dict[int, UserProfile] = {}
        self._article_features: Dict[int, ArticleFeatures] = {}

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def initialize(self, articles: Sequence[Article]) -> None:
        """
        (Re)build the TF-IDF model and the article feature cache.

        Cached user profiles are dropped since their interest vectors are
        aligned with the previous vocabulary.
        """
        self.tfidf_processor.build_model(articles)

        self._article_features = {
            article.id: ArticleFeatures(
                category=article.category,
                political_bias=article.political_bias,
                sentiment_score=article.sentiment_score,
            )
            for article in articles
        }
        self._user_profiles = {}

    def is_ready(self) -> bool:
        return self.tfidf_processor.is_model_ready()

    def get_article_features(self, article_id: int) -> Optional[ArticleFeatures]:
        return self._article_features.get(article_id)

    # ------------------------------------------------------------------
    # Profiles
    # ------------------------------------------------------------------

    def _article_vector(self, article_id: int) -> Optional[np.ndarray]:
        """Article vector, or None when missing or misaligned with the vocabulary."""
        vector = self.tfidf_processor.get_article_vector(article_id)
        if vector is None:
            return None
        if len(vector) != self.tfidf_processor.vocabulary_size:
            logger.debug(f"Stale vector for article {article_id}; treated as unavailable")
            return None
        return vector

    def _build_user_profile(self, user_id: int,
                            interactions: Sequence[InteractionEvent],
                            now: Optional[datetime] = None) -> UserProfile:
        article_vectors = {}
        for interaction in interactions:
            vector = self._article_vector(interaction.article_id)
            if vector is not None:
                article_vectors[interaction.article_id] = vector

        profile = self.user_profiler.build_profile(
            interactions,
            article_vectors,
            self.tfidf_processor.vocabulary_size,
            now=now,
        )
        self._user_profiles[user_id] = profile
        return profile

    def _resolve_profile(self, user_id: int,
                         interactions: Sequence[InteractionEvent],
                         now: Optional[datetime] = None) -> Optional[UserProfile]:
        if not self.is_ready():
            logger.debug("TF-IDF model not initialized; using trending fallback")
            return None

        if interactions:
            return self._build_user_profile(user_id, interactions, now)
        return self._user_profiles.get(user_id)

    # ------------------------------------------------------------------
    # Recommendations
    # ------------------------------------------------------------------

    def get_recommendations(
        self,
        user_id: int,
        interactions: Sequence[InteractionEvent],
        candidates: Sequence[Article],
        exclude_ids: Iterable[int] = (),
        limit: int = Config.DEFAULT_LIMIT,
        now: Optional[datetime] = None,
    ) -> List[Recommendation]:
        """
        Generate personalized recommendations.

        Args:
            user_id: User identifier (profile cache key)
            interactions: The user's interaction history
            candidates: Articles to rank
            exclude_ids: Article ids never to recommend
            limit: Maximum number of recommendations
            now: Reference time for decay and recency (default: current time)

        Returns:
            Ranked, diversified recommendations
        """
        if limit <= 0:
            raise ValueError(f"limit must be positive, got {limit}")

        exclude = set(exclude_ids)
        profile = self._resolve_profile(user_id, interactions, now)

        if profile is None or profile.is_empty:
            logger.debug(f"No profile for user {user_id}; serving trending articles")
            return self.get_trending_recommendations(candidates, limit, exclude, now)

        top_category = profile.top_category
        scored = []
        for article in candidates:
            if article.id in exclude:
                continue
            score = self._score(profile, article)
            reason = self._generate_reason(top_category, article, score)
            scored.append(Recommendation(article=article, score=score, reason=reason))

        scored.sort(key=lambda rec: rec.score, reverse=True)

        return diversify_recommendations(
            scored,
            limit,
            min_per_category=self.config.MIN_PER_CATEGORY_CAP,
            overflow_ratio=self.config.DIVERSITY_OVERFLOW_RATIO,
        )

    def _score(self, profile: UserProfile, article: Article) -> float:
        vector = self._article_vector(article.id)
        content_score = 0.0
        if vector is not None:
            content_score = cosine_similarity(profile.interest_vector, vector)

        # Prefer the indexed snapshot of the article
        features = self._article_features.get(article.id)
        category = features.category if features else article.category
        bias = features.political_bias if features else article.political_bias

        category_score = profile.category_weights.get(category, 0.0)
        bias_score = profile.bias_weights.get(bias, 0.0)

        return (
            self.config.CONTENT_WEIGHT * content_score
            + self.config.CATEGORY_WEIGHT * category_score
            + self.config.BIAS_WEIGHT * bias_score
        )

    def _generate_reason(self, top_category: Optional[str],
                         article: Article, score: float) -> str:
        if top_category is not None and article.category == top_category:
            return f"You frequently read {top_category} articles"
        if score > self.config.HIGH_RELEVANCE_THRESHOLD:
            return "Highly relevant to your interests"
        if score > self.config.SIMILAR_THRESHOLD:
            return "Similar to articles you've enjoyed"
        return "Based on your reading preferences"

    def get_trending_recommendations(
        self,
        candidates: Sequence[Article],
        limit: int = Config.DEFAULT_LIMIT,
        exclude_ids: Iterable[int] = (),
        now: Optional[datetime] = None,
    ) -> List[Recommendation]:
        """Cold-start ranking by sentiment strength plus recency."""
        if limit <= 0:
            raise ValueError(f"limit must be positive, got {limit}")

        exclude = set(exclude_ids)
        trending = [
            Recommendation(
                article=article,
                score=abs(article.sentiment_score) + self._recency_bonus(article, now),
                reason=TRENDING_REASON,
            )
            for article in candidates
            if article.id not in exclude
        ]
        trending.sort(key=lambda rec: rec.score, reverse=True)
        return trending[:limit]

    def _recency_bonus(self, article: Article, now: Optional[datetime] = None) -> float:
        window = self.config.TRENDING_WINDOW_DAYS
        days_old = min(window, max(0.0, days_between(article.published_at, now)))
        return 1 - days_old / window

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def export_user_preferences(self, user_id: int,
                                interactions: Sequence[InteractionEvent],
                                now: Optional[datetime] = None) -> UserPreferenceSummary:
        """
        Rebuild the user's profile and export it for storage.

        Without a model the profile is built against an empty vocabulary, so
        category and bias preferences are still exported.
        """
        profile = self._build_user_profile(user_id, interactions, now)
        return self.user_profiler.export_profile_data(
            profile, self.tfidf_processor.get_vocabulary()
        )
