from datetime import datetime, timedelta, timezone

import pytest

from newsrec.models import Article, InteractionEvent

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def make_article(article_id, title, content="", category="technology",
                 political_bias="neutral", sentiment_score=0.0,
                 published_at=None, summary=None):
    return Article(
        id=article_id,
        title=title,
        content=content,
        summary=summary,
        category=category,
        political_bias=political_bias,
        sentiment_score=sentiment_score,
        published_at=published_at or NOW - timedelta(hours=1),
    )


def make_interaction(article, interaction_type="click", age_days=0.0, user_id=1):
    return InteractionEvent(
        user_id=user_id,
        article_id=article.id,
        interaction_type=interaction_type,
        timestamp=NOW - timedelta(days=age_days),
        category=article.category,
        political_bias=article.political_bias,
    )


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def corpus():
    return [
        make_article(1, "Artificial intelligence breakthrough transforms healthcare diagnostics",
                     category="technology"),
        make_article(2, "Cricket team wins championship final", category="sports"),
        make_article(3, "Artificial intelligence chip announced for laptops",
                     category="technology"),
        make_article(4, "Football league announces championship schedule", category="sports"),
        make_article(5, "Stock markets rally after strong earnings", category="finance",
                     political_bias="right"),
        make_article(6, "Quantum computing startup raises funding", category="technology"),
    ]
