import pytest
from fastapi.testclient import TestClient

import main
from core_async import FetchError


OPTIMAL_PAGE = (
    "<html><head>"
    "<title>{title}</title>"
    '<meta name="description" content="{description}">'
    '<meta property="og:title" content="OG">'
    '<meta property="og:description" content="OG description">'
    '<meta property="og:image" content="https://example.com/og.png">'
    '<meta property="og:url" content="https://example.com/">'
    '<meta name="twitter:card" content="summary">'
    '<meta name="twitter:title" content="TW">'
    '<meta name="twitter:description" content="TW description">'
    "</head><body></body></html>"
).format(title="t" * 45, description="d" * 155)


@pytest.fixture
def serve(monkeypatch):
    """Replace the network fetch with canned HTML per URL."""
    pages = {}

    async def fake_fetch(url):
        if url not in pages:
            raise FetchError(url, "connection refused")
        return pages[url]

    monkeypatch.setattr("core_async.fetch_html", fake_fetch)
    return pages


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_analyze_returns_full_result(client, serve):
    serve["https://example.com/"] = OPTIMAL_PAGE

    response = client.post("/api/analyze", json={"url": "https://example.com/"})

    assert response.status_code == 200
    body = response.json()
    assert body["url"] == "https://example.com/"
    assert body["score"] == 85
    assert body["metaDescription"] == "d" * 155
    assert body["ogTags"]["og:url"] == "https://example.com/"
    assert body["twitterTags"]["twitter:card"] == "summary"
    assert body["allMetaTags"]["title"] == "t" * 45
    assert list(body["checks"]) == ["title", "metaDescription", "openGraph", "twitterCards"]
    assert body["checks"]["title"][1] == {
        "name": "Title length",
        "status": "pass",
        "message": "Title length is optimal",
        "value": "t" * 45,
        "characterCount": 45,
    }
    assert body["recommendations"] == [
        "Consider adding Schema markup to help search engines better understand your content",
    ]


def test_analyze_empty_page(client, serve):
    serve["https://empty.test/"] = "<html></html>"

    body = client.post("/api/analyze", json={"url": "https://empty.test/"}).json()

    assert body["score"] == 0
    assert body["title"] is None
    assert body["metaDescription"] is None
    assert len(body["recommendations"]) == 4
    missing = body["checks"]["openGraph"][0]
    assert missing == {
        "name": "og:title",
        "status": "fail",
        "message": "og:title is missing",
        "recommendation": "Add og:title meta tag for better social media sharing",
    }


@pytest.mark.parametrize("payload", [
    {"url": "not-a-url"},
    {"url": "example.com"},
    {"url": ""},
    {},
    {"url": "http://exa mple.com"},
    {"url": "http://:80"},
    {"url": "https://exa<mple.com"},
    {"url": "http://localhost:99999"},
])
def test_invalid_url_is_rejected_before_fetch(client, monkeypatch, payload):
    fetched = []

    async def recording_fetch(url):
        fetched.append(url)
        return "<html></html>"

    monkeypatch.setattr("core_async.fetch_html", recording_fetch)
    response = client.post("/api/analyze", json=payload)

    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Invalid URL format"
    assert body["errors"]
    assert body["errors"][0]["path"] == ["url"]
    assert fetched == []
    assert client.get("/api/analyses").json() == []


def test_fetch_failure_is_400(client, serve):
    response = client.post("/api/analyze", json={"url": "https://down.test/"})

    assert response.status_code == 400
    assert response.json() == {
        "message": "Failed to fetch website content. Please check the URL and try again."
    }
    assert client.get("/api/analyses").json() == []


def test_unexpected_error_is_500_without_detail(client, serve, monkeypatch):
    serve["https://example.com/"] = "<html></html>"

    def explode(tags):
        raise RuntimeError("database password is hunter2")

    monkeypatch.setattr("core_async.evaluate", explode)
    response = client.post("/api/analyze", json={"url": "https://example.com/"})

    assert response.status_code == 500
    assert response.json() == {"message": "Failed to analyze website"}


def test_history_is_most_recent_first(client, serve):
    serve["https://first.test/"] = "<title>first</title>"
    serve["https://second.test/"] = OPTIMAL_PAGE

    client.post("/api/analyze", json={"url": "https://first.test/"})
    client.post("/api/analyze", json={"url": "https://second.test/"})

    history = client.get("/api/analyses").json()
    assert [h["url"] for h in history] == ["https://second.test/", "https://first.test/"]
    assert history[0]["score"] == 85
    assert history[0]["id"] != history[1]["id"]
    assert "createdAt" in history[0]
    assert history[1]["checks"]["title"][0]["name"] == "Title presence"


def test_history_storage_failure_is_500(client, store, monkeypatch):
    def broken():
        raise RuntimeError("boom")

    monkeypatch.setattr(store, "list_analyses", broken)
    response = client.get("/api/analyses")
    assert response.status_code == 500
    assert response.json() == {"message": "Failed to fetch analysis history"}


def test_get_single_analysis_and_report(client, serve):
    serve["https://example.com/"] = "<title>{}</title>".format("x" * 20)
    client.post("/api/analyze", json={"url": "https://example.com/"})
    analysis_id = client.get("/api/analyses").json()[0]["id"]

    single = client.get("/api/analyses/{}".format(analysis_id))
    assert single.status_code == 200
    assert single.json()["score"] == 20

    report = client.get("/api/analyses/{}/report".format(analysis_id))
    assert report.status_code == 200
    data = report.json()
    assert data["id"] == analysis_id
    assert data["createdAt"]
    assert data["url"] == "https://example.com/"
    assert data["totals"] == {"passed": 1, "warnings": 1, "failed": 8, "total": 10}
    assert data["characterCounts"]["title"] == {
        "count": 20, "status": "short", "message": "Too short (recommended: 30-60 characters)",
    }
    assert set(data["sectionScores"]) == {"Search Engine Optimization", "Social Media Optimization"}
    assert data["previews"]["google"]["displayUrl"] == "example.com"
    assert data["categories"]["title"]["status"] == "warning"
    assert data["previews"]["google"]["title"] == "x" * 20
    assert [c["title"] for c in data["recommendations"]["medium"]] == ["Optimize Title Length"]


def test_unknown_analysis_is_404(client):
    assert client.get("/api/analyses/nope").status_code == 404
    response = client.get("/api/analyses/nope/report")
    assert response.status_code == 404
    assert response.json() == {"message": "Analysis not found"}


def test_startup_fails_without_node_env(monkeypatch):
    monkeypatch.delenv("NODE_ENV", raising=False)
    with pytest.raises(ValueError, match="NODE_ENV"):
        with TestClient(main.app):
            pass
