"""Shared fixtures for the tutor relay test suite."""
import json

import httpx
import pytest
from fastapi.testclient import TestClient

from backend import app
from config import RelayConfig, get_config
from llm import get_transport

TEST_KEY = "sk-test-key"


def completion(content) -> dict:
    return {"id": "chatcmpl-1", "choices": [{"index": 0, "message": {"role": "assistant", "content": content}}]}


class RecordingTransport(httpx.MockTransport):
    """MockTransport that remembers what it was sent and whether it was closed."""

    def __init__(self, handler):
        self.requests = []
        self.closed = False

        async def _record(request: httpx.Request):
            self.requests.append(request)
            result = handler(request)
            if hasattr(result, "__await__"):
                result = await result
            return result

        super().__init__(_record)

    async def aclose(self) -> None:
        self.closed = True
        await super().aclose()

    @property
    def called(self) -> bool:
        return bool(self.requests)

    def sent_json(self, index: int = 0) -> dict:
        return json.loads(self.requests[index].content)


@pytest.fixture()
def config():
    return RelayConfig(api_key=TEST_KEY)


@pytest.fixture()
def reply():
    """Set what the fake upstream answers: assistant content, or a raw status/body."""
    state = {"status": 200, "body": json.dumps(completion("Hello world\n<div class=\"translation\">你好世界</div>"))}

    def _set(content=None, status=200, body=None):
        state["status"] = status
        state["body"] = body if body is not None else json.dumps(completion(content), ensure_ascii=False)

    _set.handler = lambda request: httpx.Response(state["status"], text=state["body"])
    return _set


@pytest.fixture()
def transport(reply):
    return RecordingTransport(reply.handler)


@pytest.fixture()
def client(config, transport):
    app.dependency_overrides[get_config] = lambda: config
    app.dependency_overrides[get_transport] = lambda: transport
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
