import pandas as pd
import pytest
from pydantic import ValidationError

from newsrec.corpus import load_articles, load_interactions, recommendations_to_frame
from newsrec.models import Recommendation

from conftest import make_article

ARTICLE_ROWS = [
    {
        "id": 1,
        "title": "Monsoon session of parliament begins",
        "content": "Lawmakers gather to debate new bills",
        "summary": None,
        "category": "politics",
        "politicalBias": "left",
        "sentimentScore": 0.2,
        "publishedAt": "2026-10-18T08:00:00Z",
    },
    {
        "id": 2,
        "title": "Hospital networks adopt digital records",
        "content": "Patients gain access to their files online",
        "summary": "Health records go digital",
        "category": "health",
        "politicalBias": "neutral",
        "sentimentScore": -0.1,
        "publishedAt": "2026-10-17T15:30:00Z",
    },
]


def test_load_articles_from_csv(tmp_path):
    path = tmp_path / "articles.csv"
    pd.DataFrame(ARTICLE_ROWS).to_csv(path, index=False)

    articles = load_articles(path)

    assert [a.id for a in articles] == [1, 2]
    assert articles[0].summary is None
    assert articles[0].political_bias == "left"
    assert articles[1].summary == "Health records go digital"
    assert articles[1].published_at.tzinfo is not None


def test_load_articles_from_json(tmp_path):
    path = tmp_path / "articles.json"
    pd.DataFrame(ARTICLE_ROWS).to_json(path, orient="records")

    articles = load_articles(str(path))
    assert [a.category for a in articles] == ["politics", "health"]


def test_load_articles_snake_case_frame():
    df = pd.DataFrame([{
        "id": 3,
        "title": "Derby ends in a draw",
        "content": "",
        "category": "sports",
        "political_bias": "neutral",
        "sentiment_score": 0.0,
        "published_at": pd.Timestamp("2026-10-19T09:00:00Z"),
    }])

    assert load_articles(df)[0].title == "Derby ends in a draw"


def test_invalid_category_rejected():
    rows = [dict(ARTICLE_ROWS[0], category="weather")]
    with pytest.raises(ValidationError):
        load_articles(pd.DataFrame(rows))


def test_unsupported_extension(tmp_path):
    with pytest.raises(ValueError, match="Unsupported file type"):
        load_articles(tmp_path / "articles.parquet")


def test_load_interactions(tmp_path):
    path = tmp_path / "interactions.csv"
    pd.DataFrame([
        {"userId": 1, "articleId": 2, "interactionType": "like",
         "timestamp": "2026-10-18T10:00:00Z", "category": "health",
         "politicalBias": "neutral", "sessionDuration": 40},
        {"userId": 2, "articleId": 1, "interactionType": "click",
         "timestamp": "2026-10-18T11:00:00Z", "category": "politics",
         "politicalBias": "left", "sessionDuration": None},
    ]).to_csv(path, index=False)

    interactions = load_interactions(path)

    assert interactions[0].session_duration == 40
    assert interactions[1].session_duration is None
    assert interactions[1].interaction_type == "click"


def test_recommendations_to_frame():
    recs = [
        Recommendation(article=make_article(4, "Rates held steady", category="finance"),
                       score=0.81234, reason="Highly relevant to your interests"),
        Recommendation(article=make_article(9, "Transfer window opens", category="sports"),
                       score=0.4, reason="Based on your reading preferences"),
    ]

    frame = recommendations_to_frame(recs)

    assert list(frame["rank"]) == [1, 2]
    assert list(frame["article_id"]) == [4, 9]
    assert frame.loc[0, "score"] == 0.8123


def test_recommendations_to_frame_empty():
    frame = recommendations_to_frame([])
    assert frame.empty
    assert "reason" in frame.columns
