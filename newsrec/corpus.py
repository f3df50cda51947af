"""
Corpus loading helpers.

Reads articles and interaction logs from CSV/JSON files or DataFrames and
validates every row into the shared models.
"""

import logging
from pathlib import Path
from typing import List, Sequence, Union

import pandas as pd

from .models import Article, InteractionEvent, Recommendation

logger = logging.getLogger(__name__)

Source = Union[str, Path, pd.DataFrame]


def _read_frame(source: Source) -> pd.DataFrame:
    """Load a DataFrame from a path (.csv / .json) or pass one through."""
    if isinstance(source, pd.DataFrame):
        return source

    path = Path(source)
    suffix = path.suffix.lower()
    if suffix == '.csv':
        return pd.read_csv(path)
    if suffix == '.json':
        return pd.read_json(path, orient='records')
    raise ValueError(f"Unsupported file type: {path.suffix} (expected .csv or .json)")


def _records(df: pd.DataFrame) -> List[dict]:
    """Rows as dicts with missing values turned into None."""
    clean = df.astype(object).where(df.notna(), None)
    return clean.to_dict(orient='records')


def load_articles(source: Source) -> List[Article]:
    """
    Load articles.

    Args:
        source: CSV/JSON path or DataFrame, camelCase or snake_case columns

    Returns:
        Validated articles, in row order
    """
    df = _read_frame(source)
    articles = [Article.model_validate(row) for row in _records(df)]
    logger.info(f"Loaded {len(articles)} articles")
    return articles


def load_interactions(source: Source) -> List[InteractionEvent]:
    """Load an interaction log (same formats as ``load_articles``)."""
    df = _read_frame(source)
    interactions = [InteractionEvent.model_validate(row) for row in _records(df)]
    logger.info(f"Loaded {len(interactions)} interactions")
    return interactions


def recommendations_to_frame(recommendations: Sequence[Recommendation]) -> pd.DataFrame:
    """Tabular view of recommendations, one row per article."""
    rows = [
        {
            'rank': rank,
            'article_id': rec.article.id,
            'title': rec.article.title,
            'category': rec.article.category,
            'political_bias': rec.article.political_bias,
            'score': round(rec.score, 4),
            'reason': rec.reason,
        }
        for rank, rec in enumerate(recommendations, 1)
    ]
    columns = ['rank', 'article_id', 'title', 'category', 'political_bias', 'score', 'reason']
    return pd.DataFrame(rows, columns=columns)
