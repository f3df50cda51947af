"""
Data models shared by the recommendation core and its surrounding service.

Python attributes are snake_case; every model also accepts and emits the
camelCase names used by the web application (``politicalBias``,
``publishedAt``, ...).
"""

from datetime import datetime
from enum import Enum
from typing import Dict, List, Literal, Optional, Tuple

import numpy as np
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .config import Config

Category = Literal['politics', 'technology', 'health', 'finance', 'sports']
PoliticalBias = Literal['left', 'right', 'neutral']


class _Model(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


class InteractionType(str, Enum):
    """Known interaction types, each with a profile weight."""

    CLICK = 'click'
    VIEW = 'view'
    LIKE = 'like'
    SHARE = 'share'

    @classmethod
    def weight_for(cls, interaction_type: str, config=Config) -> float:
        """Weight of a raw interaction type string (default for unknown types)."""
        try:
            known = cls(interaction_type)
        except ValueError:
            return config.DEFAULT_INTERACTION_WEIGHT
        return config.INTERACTION_WEIGHTS.get(known.value, config.DEFAULT_INTERACTION_WEIGHT)


class Article(_Model):
    """News article as handed to the engine. Read-only."""

    id: int
    title: str
    content: str
    summary: Optional[str] = None
    category: Category
    political_bias: PoliticalBias
    sentiment_score: float = Field(default=0.0, ge=-1.0, le=1.0)
    published_at: datetime

    @property
    def text(self) -> str:
        """Title, content and summary joined into one blob."""
        return f"{self.title} {self.content} {self.summary or ''}"


class InteractionEvent(_Model):
    """One entry of the append-only interaction log."""

    user_id: int
    article_id: int
    interaction_type: str
    timestamp: datetime
    # Denormalised from the article when the event was recorded
    category: str
    political_bias: str
    session_duration: Optional[int] = None


class Recommendation(_Model):
    article: Article
    score: float
    reason: str


class UserPreferenceSummary(_Model):
    """Exported profile, ready to be persisted by the caller."""

    preferred_categories: List[str]
    preferred_bias_types: List[str]
    serialized_profile: str


class UserPreferences(_Model):
    """Stored preference record for one user."""

    user_id: int
    preferred_categories: List[str] = Field(default_factory=list)
    preferred_bias_types: List[str] = Field(default_factory=list)
    tf_idf_profile: Optional[str] = None
    last_updated: Optional[datetime] = None


class TfIdfModel(BaseModel):
    """Vocabulary plus one TF-IDF vector per article id."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    vocabulary: Tuple[str, ...]
    article_vectors: Dict[int, np.ndarray]

    @property
    def vocabulary_size(self) -> int:
        return len(self.vocabulary)


class UserProfile(BaseModel):
    """Normalised interest profile of a single user."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    category_weights: Dict[str, float]
    bias_weights: Dict[str, float]
    interest_vector: np.ndarray
    total_interactions: int = 0

    @property
    def is_empty(self) -> bool:
        return self.total_interactions == 0

    @property
    def top_category(self) -> Optional[str]:
        """Highest weighted category; the first one seen wins ties."""
        if not self.category_weights:
            return None
        return max(self.category_weights, key=self.category_weights.get)
