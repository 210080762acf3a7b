"""HTTP-level tests for the analysis, theme and session routers."""
from unittest.mock import patch

from conftest import REVENUE_TEXT, TIMELINE_TEXT, TINY_TEXT
from services.content_scorer import content_scorer


# ============ App ============


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["message"] == "Visual Content Generator API"


def test_health(client):
    response = client.get("/health")
    assert response.json() == {"status": "healthy", "llm_configured": False}


# ============ Analysis ============


def test_analyze(client):
    response = client.post("/analysis", json={"content": REVENUE_TEXT})
    assert response.status_code == 200
    body = response.json()
    assert body["source"] == "rules"
    assert body["suggestions"][0]["id"] == "bullet-icons"
    assert body["smart_analysis"]["best_practices"]


def test_analyze_blank_content(client):
    response = client.post("/analysis", json={"content": "   "})
    assert response.status_code == 400


def test_analyze_tiny_content_gets_default(client):
    response = client.post("/analysis", json={"content": TINY_TEXT})
    assert [s["id"] for s in response.json()["suggestions"]] == ["default"]


def test_analyze_pipeline_failure(client):
    with patch.object(content_scorer, "score", side_effect=RuntimeError("boom")):
        response = client.post("/analysis", json={"content": REVENUE_TEXT})
    assert response.status_code == 500
    assert "boom" in response.json()["detail"]


def test_extract_and_score(client):
    extracted = client.post("/analysis/extract", json={"content": TIMELINE_TEXT}).json()
    years = [p["value"] for p in extracted["data_points"] if p["category"] == "year"]
    assert years == [2023.0, 2024.0]

    scored = client.post("/analysis/score", json={"content": TIMELINE_TEXT}).json()
    assert "timeline-short" in [a["id"] for a in scored["approaches"]]
    assert set(scored["scoring"]) >= {"complexity", "temporal_elements", "audience_level"}


def test_gallery(client):
    response = client.post("/analysis/gallery", json={"content": TIMELINE_TEXT})
    ids = [s["id"] for s in response.json()["suggestions"]]
    assert "timeline-temporal" in ids


def test_cache_stats_and_clear(client):
    client.post("/analysis", json={"content": REVENUE_TEXT})
    client.post("/analysis", json={"content": REVENUE_TEXT})

    stats = client.get("/analysis/cache/stats").json()
    assert stats["total_entries"] == 1
    assert client.delete("/analysis/cache").json() == {"cleared": 1}


def test_cache_cleanup_expired(client):
    from services.analysis_cache import analysis_cache

    client.post("/analysis", json={"content": REVENUE_TEXT})
    client.post("/analysis", json={"content": TIMELINE_TEXT})
    oldest = next(iter(analysis_cache._cache.values()))
    oldest.created_at -= analysis_cache.ttl_seconds + 1

    assert client.delete("/analysis/cache/expired").json() == {"removed": 1}
    assert client.get("/analysis/cache/stats").json()["total_entries"] == 1


# ============ Themes ============


def test_list_themes(client):
    themes = client.get("/themes").json()
    assert [t["id"] for t in themes] == ["professional", "creative", "minimal", "bold"]


def test_unknown_theme(client):
    assert client.get("/themes/neon").status_code == 404
    assert client.get("/themes/neon/preview").status_code == 404


def test_theme_preview(client):
    body = client.get("/themes/minimal/preview").json()
    assert len(body["elements"]) == 4
    assert body["svg"].startswith("<svg")


def test_apply_theme(client):
    element = {
        "type": "text",
        "content": "Hello",
        "position": {"x": 10, "y": 10},
        "size": {"width": 200, "height": 50},
    }
    body = client.post("/themes/bold/apply", json={"elements": [element]}).json()
    assert body["elements"][0]["style"]["text_color"] == "#dc2626"
    assert "Hello" in body["svg"]


def test_apply_theme_malformed_chart(client):
    element = {
        "type": "chart",
        "content": '{"data": null}',
        "position": {"x": 0, "y": 0},
        "size": {"width": 200, "height": 120},
    }
    response = client.post("/themes/professional/apply", json={"elements": [element]})
    assert response.status_code == 200
    assert response.json()["elements"][0]["style"]["chart_data"] == '{"data": null}'


def test_apply_theme_escapes_colours(client):
    element = {
        "type": "text",
        "content": "Hi",
        "position": {"x": 0, "y": 0},
        "size": {"width": 200, "height": 50},
        "style": {"text_color": 'red"/><script>alert(1)</script>'},
    }
    svg = client.post("/themes/bold/apply", json={"elements": [element]}).json()["svg"]
    assert "<script>" not in svg


# ============ Sessions ============


def test_session_flow(client):
    session = client.post("/sessions", json={"content": {"content": REVENUE_TEXT}}).json()
    session_id = session["id"]
    assert session["step"] == "input"

    analyzed = client.post(f"/sessions/{session_id}/analyze", json={}).json()
    assert analyzed["step"] == "preview"
    suggestion_id = analyzed["analysis"]["suggestions"][0]["id"]

    selected = client.post(f"/sessions/{session_id}/select", json={"suggestion_id": suggestion_id})
    assert selected.json()["step"] == "editing"

    assert client.put(f"/sessions/{session_id}/theme", json={"theme_id": "minimal"}).status_code == 200
    elements = client.get(f"/sessions/{session_id}/elements").json()
    assert all(e["style"]["border_radius"] == 4 for e in elements)

    assert client.post(f"/sessions/{session_id}/export", json={"format": "pptx"}).status_code == 501

    exported = client.post(f"/sessions/{session_id}/export", json={"format": "svg"}).json()
    assert exported["media_type"] == "image/svg+xml"
    assert exported["content"].startswith("<svg")

    reset = client.post(f"/sessions/{session_id}/reset").json()
    assert reset["step"] == "input"
    assert reset["theme_id"] == "minimal"

    assert client.delete(f"/sessions/{session_id}").json() == {"deleted": session_id}
    assert client.get(f"/sessions/{session_id}").status_code == 404


def test_session_errors(client):
    assert client.get("/sessions/missing").status_code == 404

    session_id = client.post("/sessions", json={}).json()["id"]
    assert client.post(f"/sessions/{session_id}/analyze", json={}).status_code == 409
    assert client.put(f"/sessions/{session_id}/theme", json={"theme_id": "neon"}).status_code == 404

    failed = client.post(f"/sessions/{session_id}/analyze", json={"content": {"content": " "}})
    assert failed.status_code == 400
    session = client.get(f"/sessions/{session_id}").json()
    assert session["step"] == "input"
    assert session["error"]


def test_list_sessions_and_stats(client):
    first = client.post("/sessions", json={}).json()["id"]
    second = client.post("/sessions", json={"content": {"content": REVENUE_TEXT}}).json()["id"]
    client.post(f"/sessions/{second}/analyze", json={})

    sessions = client.get("/sessions").json()
    assert [s["id"] for s in sessions] == [second, first]
    assert client.get("/sessions/stats").json() == {"total": 2, "input": 1, "preview": 1}
