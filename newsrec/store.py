"""
In-memory storage for articles, the interaction log and user preferences.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Iterable

from .math_utils import as_utc
from .models import Article, InteractionEvent, UserPreferences

logger = logging.getLogger(__name__)


class InMemoryStore:
    """Process-local store; the engine reads it through plain query methods."""

    def __init__(self, articles: Iterable[Article] = ()):
        self._articles: dict[int, Article] = {}
        self._interactions: list[InteractionEvent] = []
        self._preferences: dict[int, UserPreferences] = {}
        self.corpus_version = 0

        articles = list(articles)
        if articles:
            self.add_articles(articles)

    # ------------------------------------------------------------------
    # Articles
    # ------------------------------------------------------------------

    def add_articles(self, articles: Iterable[Article]) -> int:
        """Insert or replace articles by id. Returns the number written."""
        count = 0
        for article in articles:
            self._articles[article.id] = article
            count += 1
        if count:
            self.corpus_version += 1
            logger.info(f"Stored {count} articles (corpus version {self.corpus_version})")
        return count

    def get_article(self, article_id: int) -> Article | None:
        return self._articles.get(article_id)

    def get_articles(self, limit: int | None = None) -> list[Article]:
        articles = list(self._articles.values())
        return articles if limit is None else articles[:limit]

    # ------------------------------------------------------------------
    # Interactions
    # ------------------------------------------------------------------

    def create_user_interaction(
        self,
        user_id: int,
        article_id: int,
        interaction_type: str,
        category: str,
        political_bias: str,
        timestamp: datetime | None = None,
        session_duration: int | None = None,
    ) -> InteractionEvent:
        event = InteractionEvent(
            user_id=user_id,
            article_id=article_id,
            interaction_type=interaction_type,
            timestamp=as_utc(timestamp) if timestamp else datetime.now(timezone.utc),
            category=category,
            political_bias=political_bias,
            session_duration=session_duration,
        )
        self._interactions.append(event)
        return event

    def get_user_interactions(self, user_id: int, limit: int = 100) -> list[InteractionEvent]:
        """Most recent interactions of a user, newest first."""
        events = [e for e in self._interactions if e.user_id == user_id]
        events.sort(key=lambda e: as_utc(e.timestamp), reverse=True)
        return events[:limit]

    # ------------------------------------------------------------------
    # Preferences
    # ------------------------------------------------------------------

    def get_user_preferences(self, user_id: int) -> UserPreferences | None:
        return self._preferences.get(user_id)

    def create_or_update_user_preferences(self, preferences: UserPreferences) -> UserPreferences:
        existing = self._preferences.get(preferences.user_id)
        updates = preferences.model_dump(exclude_unset=True)
        updates['last_updated'] = datetime.now(timezone.utc)

        if existing is None:
            stored = UserPreferences(**updates)
        else:
            stored = existing.model_copy(update=updates)

        self._preferences[preferences.user_id] = stored
        return stored
