import json

import pandas as pd
import pytest

from newsrec.cli import build_parser, main


@pytest.fixture
def data_files(tmp_path, corpus):
    articles = tmp_path / "articles.csv"
    # Empty CSV cells read back as missing, so give every row some content
    rows = [dict(a.model_dump(by_alias=True), content="...") for a in corpus]
    pd.DataFrame(rows).to_csv(articles, index=False)

    interactions = tmp_path / "interactions.json"
    pd.DataFrame([
        {"userId": 1, "articleId": 1, "interactionType": "like",
         "timestamp": "2026-10-19T10:00:00Z", "category": "technology",
         "politicalBias": "neutral"},
        {"userId": 2, "articleId": 2, "interactionType": "click",
         "timestamp": "2026-10-19T10:00:00Z", "category": "sports",
         "politicalBias": "neutral"},
    ]).to_json(interactions, orient="records")

    return str(articles), str(interactions)


def test_parser_requires_command():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_recommend(data_files, capsys):
    articles, interactions = data_files
    code = main(["recommend", "--articles", articles, "--interactions", interactions,
                 "--user-id", "1", "--limit", "3", "--exclude-viewed"])

    assert code == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert lines[0].split()[:3] == ["rank", "article_id", "title"]
    assert len(lines) == 4
    assert lines[1].split()[:2] == ["1", "3"]


def test_preferences(data_files, capsys):
    articles, interactions = data_files
    code = main(["preferences", "--articles", articles, "--interactions", interactions,
                 "--user-id", "2"])

    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["preferredCategories"] == ["sports"]
    assert json.loads(payload["serializedProfile"])["totalInteractions"] == 1


def test_missing_file(data_files, tmp_path):
    _, interactions = data_files
    code = main(["recommend", "--articles", str(tmp_path / "nope.csv"),
                 "--interactions", interactions, "--user-id", "1"])
    assert code == 1


def test_non_positive_limit(data_files):
    articles, interactions = data_files
    code = main(["recommend", "--articles", articles, "--interactions", interactions,
                 "--user-id", "1", "--limit", "0"])
    assert code == 1


def test_invalid_rows(tmp_path, data_files):
    _, interactions = data_files
    broken = tmp_path / "broken.csv"
    pd.DataFrame([{"id": 1, "title": "No category"}]).to_csv(broken, index=False)

    code = main(["recommend", "--articles", str(broken), "--interactions", interactions,
                 "--user-id", "1"])
    assert code == 1
