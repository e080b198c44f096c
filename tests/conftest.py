"""Pytest configuration and fixtures."""

import base64
import json
from typing import Any, Generator

import httpx
import pytest
from fastapi.testclient import TestClient
from openai import AsyncOpenAI

from app.backend.config import Settings, get_settings
from app.backend.main import app
from app.backend.services.identity import IdentityExtractor, get_identity_extractor

TEST_API_KEY = "sk-test-key"


def completion_body(content: Any) -> dict[str, Any]:
    """Build a chat completion response body with the given message content."""
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "created": 1700000000,
        "model": "gpt-4o",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
    }


class FakeOpenAI:
    """
    Stand-in for the OpenAI API built on httpx.MockTransport.

    Records every request and answers with ``status_code`` and ``body``.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.body: dict[str, Any] = completion_body("{}")
        self.text: str | None = None

    def respond_with(self, content: Any, status_code: int = 200) -> None:
        self.status_code = status_code
        self.body = completion_body(content)

    def fail_with(self, status_code: int, message: str = "error") -> None:
        self.status_code = status_code
        self.body = {"error": {"message": message, "type": "invalid_request_error"}}

    def respond_with_text(self, text: str, status_code: int = 200) -> None:
        self.status_code = status_code
        self.text = text

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        return httpx.Response(self.status_code, json=self.body)

    def last_request_json(self) -> dict[str, Any]:
        return json.loads(self.requests[-1].content)

    def client(self) -> AsyncOpenAI:
        return AsyncOpenAI(
            api_key=TEST_API_KEY,
            base_url="https://api.openai.test/v1",
            max_retries=0,
            http_client=httpx.AsyncClient(transport=httpx.MockTransport(self.handler)),
        )


@pytest.fixture
def fake_openai() -> FakeOpenAI:
    """Create a fake OpenAI backend that records requests."""
    return FakeOpenAI()


@pytest.fixture
def jpeg_data_url() -> str:
    """A small JPEG-looking data URL (content is not a real image)."""
    encoded = base64.b64encode(b"\xff\xd8\xff\xe0" + b"\x00" * 296).decode("ascii")
    return f"data:image/jpeg;base64,{encoded}"


@pytest.fixture
def identity_json() -> str:
    """Model answer with all four identity fields."""
    return json.dumps(
        {
            "firstName": "Jane",
            "lastName": "Doe",
            "idNumber": "X123",
            "serialNumber": "SN99",
        }
    )


@pytest.fixture
def test_settings() -> Settings:
    """Settings isolated from any local .env file."""
    return Settings(_env_file=None, openai_api_key=TEST_API_KEY)


@pytest.fixture
def client(
    fake_openai: FakeOpenAI, test_settings: Settings
) -> Generator[TestClient, None, None]:
    """Create a test client whose extractor talks to the fake OpenAI backend."""
    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_identity_extractor] = lambda: IdentityExtractor(
        api_key=TEST_API_KEY,
        model="gpt-4o",
        client=fake_openai.client(),
    )
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
