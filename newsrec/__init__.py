"""
newsrec: content-based news recommendations.

TF-IDF article vectors, time-decayed user interest profiles, and a
diversified ranking with a trending fallback for cold-start users.
"""

from .config import Config
from .models import (
    Article,
    InteractionEvent,
    InteractionType,
    Recommendation,
    TfIdfModel,
    UserPreferences,
    UserPreferenceSummary,
    UserProfile,
)
from .recommendation_engine import RecommendationEngine, diversify_recommendations
from .recommendation_service import ArticleNotFoundError, RecommendationService
from .store import InMemoryStore
from .tfidf_processor import TfIdfProcessor
from .user_profiler import UserProfiler

__version__ = '0.1.0'

__all__ = [
    'Config',
    'Article',
    'InteractionEvent',
    'InteractionType',
    'Recommendation',
    'TfIdfModel',
    'UserPreferences',
    'UserPreferenceSummary',
    'UserProfile',
    'RecommendationEngine',
    'diversify_recommendations',
    'ArticleNotFoundError',
    'RecommendationService',
    'InMemoryStore',
    'TfIdfProcessor',
    'UserProfiler',
]
