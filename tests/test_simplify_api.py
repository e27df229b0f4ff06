import asyncio
import json

import httpx


GOOGLE_KEY = "AIza-test-key"
DOCUMENT = "The Receiving Party shall hold in confidence all Confidential Information."


def gemini_response(text: str) -> dict:
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}]}


def test_empty_text_rejected(make_client):
    client = make_client(google_api_key=GOOGLE_KEY)

    resp = client.post("/simplify", json={"text": "  "})
    assert resp.status_code == 400
    assert resp.json() == {"error": "No text provided"}


def test_simplifies_with_gemini(make_client, upstream):
    upstream.handler = lambda request: httpx.Response(200, json=gemini_response("  Keep secrets secret.  "))
    client = make_client(google_api_key=GOOGLE_KEY, gemini_model="gemini-test")

    resp = client.post("/simplify", json={"text": DOCUMENT})
    assert resp.status_code == 200
    assert resp.json() == {"simplified": "Keep secrets secret."}

    request = upstream.requests[0]
    assert request.url.path == "/v1beta/models/gemini-test:generateContent"
    assert request.url.params["key"] == GOOGLE_KEY
    prompt = json.loads(request.content)["contents"][0]["parts"][0]["text"]
    assert DOCUMENT in prompt


def test_repeat_document_served_from_cache(make_client, upstream):
    upstream.handler = lambda request: httpx.Response(200, json=gemini_response("Keep secrets secret."))
    client = make_client(google_api_key=GOOGLE_KEY)

    first = client.post("/simplify", json={"text": DOCUMENT})
    second = client.post("/simplify", json={"text": DOCUMENT + "\n"})

    assert first.json() == second.json()
    assert len(upstream.requests) == 1


def test_missing_key_returns_placeholder(make_client, upstream):
    client = make_client(google_api_key=None)

    resp = client.post("/simplify", json={"text": DOCUMENT})
    assert resp.status_code == 200
    simplified = resp.json()["simplified"]
    assert "API not configured" in simplified
    assert DOCUMENT in simplified
    assert upstream.requests == []


def test_rate_limit_returns_placeholder(make_client, upstream):
    upstream.handler = lambda request: httpx.Response(429, json={"error": {"status": "RESOURCE_EXHAUSTED"}})
    client = make_client(google_api_key=GOOGLE_KEY)

    resp = client.post("/simplify", json={"text": DOCUMENT})
    assert resp.status_code == 200
    assert "API rate limit exceeded" in resp.json()["simplified"]


def test_timeout_returns_placeholder(make_client, upstream):
    async def slow(request):
        await asyncio.sleep(1)
        return httpx.Response(200, json=gemini_response("late"))

    upstream.handler = slow
    client = make_client(google_api_key=GOOGLE_KEY, simplify_timeout=0.05)

    resp = client.post("/simplify", json={"text": DOCUMENT})
    assert "request timeout" in resp.json()["simplified"]


def test_upstream_error_returns_placeholder(make_client, upstream):
    upstream.handler = lambda request: httpx.Response(500, text="internal")
    client = make_client(google_api_key=GOOGLE_KEY)

    resp = client.post("/simplify", json={"text": DOCUMENT})
    assert resp.status_code == 200
    assert "service temporarily unavailable" in resp.json()["simplified"]


def test_empty_candidates_return_placeholder(make_client, upstream):
    upstream.handler = lambda request: httpx.Response(200, json={"candidates": []})
    client = make_client(google_api_key=GOOGLE_KEY)

    resp = client.post("/simplify", json={"text": DOCUMENT})
    assert "service temporarily unavailable" in resp.json()["simplified"]


def test_undecodable_body_rejected(make_client, upstream):
    client = make_client(google_api_key=GOOGLE_KEY)

    resp = client.post("/simplify", content=b"{not json", headers={"Content-Type": "application/json"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "No text provided"}
    assert upstream.requests == []


def test_non_string_text_rejected(make_client, upstream):
    client = make_client(google_api_key=GOOGLE_KEY)

    resp = client.post("/simplify", json={"text": 123})
    assert resp.status_code == 400
    assert resp.json() == {"error": "No text provided"}
