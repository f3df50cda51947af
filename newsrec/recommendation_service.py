"""
recommendation_service.py: store-backed wrapper around the engine.

Keeps the TF-IDF model in step with the stored corpus, and serialises
model rebuilds against scoring so no request ever reads a half-built model.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Sequence

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from .config import Config
from .models import InteractionEvent, InteractionType, Recommendation, UserPreferences, UserPreferenceSummary
from .recommendation_engine import RecommendationEngine
from .store import InMemoryStore

logger = logging.getLogger(__name__)

NO_LIKES_MESSAGE = "Like some articles first to get smart refresh recommendations"


class ArticleNotFoundError(LookupError):
    """Raised when an interaction references an article that is not stored."""


class RefreshResult(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    new_recommendations: list[Recommendation]
    based_on_categories: list[str] = []
    based_on_bias_types: list[str] = []
    total_liked_articles: int = 0
    message: str | None = None


class RecommendationService:
    """Serves recommendations for users of an InMemoryStore."""

    def __init__(
        self,
        store: InMemoryStore | None = None,
        engine: RecommendationEngine | None = None,
        config=Config,
    ):
        self.config = config
        self.store = store if store is not None else InMemoryStore()
        self.engine = engine or RecommendationEngine(config)

        self._lock = threading.RLock()
        self._model_version: int | None = None

    # ------------------------------------------------------------------
    # Model lifecycle
    # ------------------------------------------------------------------

    def build_tfidf_model(self, articles: Sequence) -> None:
        """Rebuild the engine on an explicit article list."""
        with self._lock:
            self.engine.initialize(articles)
            self._model_version = None

    def ensure_model(self) -> None:
        """Rebuild the engine if the stored corpus changed since the last build."""
        with self._lock:
            version = self.store.corpus_version
            if self._model_version == version:
                return
            articles = self.store.get_articles()
            logger.info(f"Corpus version {self._model_version} -> {version}, rebuilding model")
            self.engine.initialize(articles)
            self._model_version = version

    # ------------------------------------------------------------------
    # Recommendations
    # ------------------------------------------------------------------

    def get_recommendations(
        self,
        user_id: int,
        limit: int = Config.DEFAULT_LIMIT,
        exclude_viewed: bool = False,
        now: datetime | None = None,
    ) -> list[Recommendation]:
        """Personalized recommendations from the stored corpus."""
        with self._lock:
            self.ensure_model()
            interactions = self.store.get_user_interactions(
                user_id, self.config.RECOMMEND_INTERACTION_LIMIT
            )
            articles = self.store.get_articles(self.config.CANDIDATE_ARTICLE_LIMIT)
            exclude_ids = [i.article_id for i in interactions] if exclude_viewed else []

            return self.engine.get_recommendations(
                user_id, interactions, articles, exclude_ids, limit, now=now
            )

    def get_refresh_recommendations(
        self,
        user_id: int,
        count: int = Config.REFRESH_COUNT,
        now: datetime | None = None,
    ) -> RefreshResult:
        """
        Fresh articles close to what the user liked.

        Candidates are articles the user has not interacted with whose
        category or political bias appears among the liked articles.
        """
        with self._lock:
            interactions = self.store.get_user_interactions(
                user_id, self.config.RECOMMEND_INTERACTION_LIMIT
            )
            liked = [i for i in interactions if i.interaction_type == InteractionType.LIKE.value]
            if not liked:
                return RefreshResult(new_recommendations=[], message=NO_LIKES_MESSAGE)

            categories = list(dict.fromkeys(i.category for i in liked))
            bias_types = list(dict.fromkeys(i.political_bias for i in liked))
            interacted_ids = {i.article_id for i in interactions}

            candidates = [
                article
                for article in self.store.get_articles(self.config.CANDIDATE_ARTICLE_LIMIT)
                if article.id not in interacted_ids
                and (article.category in categories or article.political_bias in bias_types)
            ]

            self.ensure_model()
            recommendations = self.engine.get_recommendations(
                user_id, interactions, candidates, interacted_ids, count, now=now
            )

        return RefreshResult(
            new_recommendations=recommendations,
            based_on_categories=categories,
            based_on_bias_types=bias_types,
            total_liked_articles=len(liked),
        )

    # ------------------------------------------------------------------
    # Interactions & preferences
    # ------------------------------------------------------------------

    def record_interaction(
        self,
        user_id: int,
        article_id: int,
        interaction_type: str,
        session_duration: int | None = None,
        timestamp: datetime | None = None,
    ) -> InteractionEvent:
        """
        Append an interaction and refresh the user's stored preferences.

        Raises:
            ArticleNotFoundError: If the article is not in the store
        """
        with self._lock:
            article = self.store.get_article(article_id)
            if article is None:
                raise ArticleNotFoundError(f"Article {article_id} not found")

            event = self.store.create_user_interaction(
                user_id=user_id,
                article_id=article_id,
                interaction_type=interaction_type,
                category=article.category,
                political_bias=article.political_bias,
                timestamp=timestamp,
                session_duration=session_duration,
            )

            recent = self.store.get_user_interactions(
                user_id, self.config.PREFERENCE_INTERACTION_LIMIT
            )
            self.ensure_model()
            summary = self.generate_user_preferences_data(user_id, recent)
            self.store.create_or_update_user_preferences(UserPreferences(
                user_id=user_id,
                preferred_categories=summary.preferred_categories,
                preferred_bias_types=summary.preferred_bias_types,
                tf_idf_profile=summary.serialized_profile,
            ))

        logger.debug(f"Recorded {interaction_type} on article {article_id} for user {user_id}")
        return event

    def generate_user_preferences_data(
        self,
        user_id: int,
        interactions: Sequence[InteractionEvent],
        now: datetime | None = None,
    ) -> UserPreferenceSummary:
        with self._lock:
            return self.engine.export_user_preferences(user_id, interactions, now=now)
