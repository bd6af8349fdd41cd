import json

import httpx
import pytest

from doc_chat.chat import SessionStore
from doc_chat.config import StaticCredentials
from doc_chat.llm import ChatCompletionClient


class Recorder:
    """MockTransport handler that records requests and replays canned responses."""

    def __init__(self, *responses: httpx.Response):
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if len(self.responses) > 1:
            return self.responses.pop(0)
        return self.responses[0]

    def json_body(self, i: int = -1) -> dict:
        return json.loads(self.requests[i].content)


def reply(content, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, json={"choices": [{"message": {"role": "assistant", "content": content}}]})


@pytest.fixture
def store():
    return SessionStore()


@pytest.fixture
def credentials():
    return StaticCredentials({"openai": "sk-test", "openrouter": "or-test"})


def make_client(recorder: Recorder) -> ChatCompletionClient:
    return ChatCompletionClient(transport=httpx.MockTransport(recorder))
