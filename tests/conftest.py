import json
from contextlib import ExitStack

import httpx
import pytest
from fastapi.testclient import TestClient

from app import app, get_http_client, get_settings
from lexiclear.config import Settings


VALID_KEY = "sk-test-1234567890"


def chat_response(content: str) -> dict:
    return {"choices": [{"index": 0, "message": {"role": "assistant", "content": content}}]}


def explanation_json(term: str = "estoppel") -> str:
    return json.dumps({
        "definition": f"{term} stops a party from going back on its word.",
        "example": f"A landlord who promised lower rent may be bound by {term}.",
        "implications": ["Promises can bind", "Reliance matters"],
    })


class Upstream:
    """Fake provider behind httpx.MockTransport; records every request."""

    def __init__(self):
        self.requests = []
        self.handler = lambda request: httpx.Response(200, json=chat_response(explanation_json()))

    def __call__(self, request: httpx.Request):
        self.requests.append(request)
        return self.handler(request)


@pytest.fixture
def upstream():
    return Upstream()


@pytest.fixture
def make_client(upstream):
    stack = ExitStack()

    def _make(**overrides) -> TestClient:
        settings = Settings(**overrides)
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(upstream))
        app.dependency_overrides[get_settings] = lambda: settings
        app.dependency_overrides[get_http_client] = lambda: http_client
        return stack.enter_context(TestClient(app))

    yield _make

    stack.close()
    app.dependency_overrides.clear()
