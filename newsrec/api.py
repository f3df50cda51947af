"""
api.py: FastAPI REST API for the recommendation service.

Endpoints:
  GET  /api/health
  POST /api/articles
  POST /api/interact
  GET  /api/recommend/{user_id}
  GET  /api/recommend/{user_id}/refresh
  GET  /api/users/{user_id}/interactions
  GET  /api/users/{user_id}/preferences
  POST /api/users/{user_id}/preferences

Run with:  uvicorn newsrec.api:app
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from .config import Config
from .models import Article, InteractionEvent, Recommendation, UserPreferences
from .recommendation_service import ArticleNotFoundError, RecommendationService, RefreshResult

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Request / Response models
# ---------------------------------------------------------------------------

class _ApiModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)


class InteractionRequest(_ApiModel):
    user_id: int
    article_id: int
    interaction_type: str
    session_duration: int | None = None


class PreferencesRequest(_ApiModel):
    preferred_categories: list[str] = []
    preferred_bias_types: list[str] = []
    tf_idf_profile: str | None = None


class RecommendResponse(_ApiModel):
    recommendations: list[Recommendation]
    total_interactions: int
    user_id: int


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------

def create_app(service: RecommendationService | None = None) -> FastAPI:
    logging.basicConfig(level=Config.LOG_LEVEL, format=Config.LOG_FORMAT)

    service = service or RecommendationService()
    app = FastAPI(title="newsrec API", version="0.1.0")
    app.state.service = service

    @app.get("/api/health")
    def health() -> dict:
        return {
            "status": "ok",
            "model_ready": service.engine.is_ready(),
            "articles": len(service.store.get_articles()),
        }

    @app.post("/api/articles", status_code=201)
    def add_articles(articles: list[Article]) -> dict:
        stored = service.store.add_articles(articles)
        return {"stored": stored, "corpusVersion": service.store.corpus_version}

    @app.post("/api/interact", status_code=201, response_model=InteractionEvent)
    def interact(req: InteractionRequest) -> InteractionEvent:
        try:
            return service.record_interaction(
                user_id=req.user_id,
                article_id=req.article_id,
                interaction_type=req.interaction_type,
                session_duration=req.session_duration,
            )
        except ArticleNotFoundError as exc:
            raise HTTPException(status_code=404, detail="Article not found") from exc

    @app.get("/api/recommend/{user_id}", response_model=RecommendResponse)
    def recommend(
        user_id: int,
        limit: int = Query(Config.DEFAULT_LIMIT, gt=0),
        exclude_viewed: bool = Query(False, alias="excludeViewed"),
    ) -> RecommendResponse:
        recommendations = service.get_recommendations(
            user_id, limit=limit, exclude_viewed=exclude_viewed
        )
        total = len(service.store.get_user_interactions(
            user_id, Config.RECOMMEND_INTERACTION_LIMIT
        ))
        return RecommendResponse(
            recommendations=recommendations,
            total_interactions=total,
            user_id=user_id,
        )

    @app.get("/api/recommend/{user_id}/refresh", response_model=RefreshResult)
    def refresh(user_id: int, count: int = Query(Config.REFRESH_COUNT, gt=0)) -> RefreshResult:
        return service.get_refresh_recommendations(user_id, count=count)

    @app.get("/api/users/{user_id}/interactions", response_model=list[InteractionEvent])
    def interactions(user_id: int, limit: int = Query(50, gt=0)) -> list[InteractionEvent]:
        return service.store.get_user_interactions(user_id, limit)

    @app.get("/api/users/{user_id}/preferences", response_model=UserPreferences)
    def get_preferences(user_id: int) -> UserPreferences:
        preferences = service.store.get_user_preferences(user_id)
        if preferences is None:
            raise HTTPException(status_code=404, detail="User preferences not found")
        return preferences

    @app.post("/api/users/{user_id}/preferences", response_model=UserPreferences)
    def save_preferences(user_id: int, req: PreferencesRequest) -> UserPreferences:
        return service.store.create_or_update_user_preferences(
            UserPreferences(user_id=user_id, **req.model_dump(exclude_unset=True))
        )

    return app


app = create_app()
