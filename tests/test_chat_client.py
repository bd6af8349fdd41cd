import httpx
import pytest

from conftest import Recorder, make_client, reply
from doc_chat.errors import ConfigurationError, MalformedResponseError, ProviderHttpError, UnsupportedProviderError
from doc_chat.llm import ChatCompletionRequest, ChatMessage, Provider


def _request(provider="openai", credential="sk-test", **kw) -> ChatCompletionRequest:
    return ChatCompletionRequest(
        provider=provider,
        credential=credential,
        model=kw.pop("model", "gpt-4o-mini"),
        messages=kw.pop("messages", [ChatMessage("system", "be brief"), ChatMessage("user", "hi")]),
        **kw,
    )


@pytest.mark.asyncio
async def test_returns_content_verbatim():
    rec = Recorder(reply("hello"))
    assert await make_client(rec).complete(_request()) == "hello"

    rec = Recorder(reply("  spaced out \n"))
    assert await make_client(rec).complete(_request()) == "  spaced out \n"


@pytest.mark.asyncio
async def test_openai_wire_format():
    rec = Recorder(reply("ok"))
    await make_client(rec).complete(_request())

    sent = rec.requests[0]
    assert sent.method == "POST"
    assert str(sent.url) == "https://api.openai.com/v1/chat/completions"
    assert sent.headers["Authorization"] == "Bearer sk-test"
    assert sent.headers["Content-Type"] == "application/json"
    assert "X-Title" not in sent.headers
    assert rec.json_body() == {
        "model": "gpt-4o-mini",
        "messages": [{"role": "system", "content": "be brief"}, {"role": "user", "content": "hi"}],
        "temperature": 0.2,
    }


@pytest.mark.asyncio
async def test_openrouter_adds_attribution_headers():
    rec = Recorder(reply("ok"))
    await make_client(rec).complete(
        _request(provider=Provider.OPENROUTER, credential="or-test", model="anthropic/claude-3-haiku", temperature=0.7)
    )

    sent = rec.requests[0]
    assert str(sent.url) == "https://openrouter.ai/api/v1/chat/completions"
    assert sent.headers["Authorization"] == "Bearer or-test"
    assert sent.headers["HTTP-Referer"]
    assert sent.headers["X-Title"]
    assert rec.json_body()["temperature"] == 0.7
    assert rec.json_body()["model"] == "anthropic/claude-3-haiku"


@pytest.mark.asyncio
async def test_empty_history_is_sent_as_is():
    rec = Recorder(reply("ok"))
    await make_client(rec).complete(_request(messages=[]))
    assert rec.json_body()["messages"] == []


@pytest.mark.asyncio
async def test_missing_credential_never_hits_network():
    rec = Recorder(reply("unused"))
    with pytest.raises(ConfigurationError, match="openai"):
        await make_client(rec).complete(_request(credential=""))
    assert rec.requests == []


@pytest.mark.asyncio
async def test_unknown_provider_is_a_configuration_error():
    rec = Recorder(reply("unused"))
    with pytest.raises(UnsupportedProviderError):
        await make_client(rec).complete(_request(provider="acme"))
    assert rec.requests == []


@pytest.mark.asyncio
async def test_non_2xx_raises_provider_http_error():
    rec = Recorder(httpx.Response(500, text="upstream exploded"))
    with pytest.raises(ProviderHttpError) as ei:
        await make_client(rec).complete(_request())

    err = ei.value
    assert err.provider == "openai"
    assert err.status_code == 500
    assert err.status_text == "Internal Server Error"
    assert err.body == "upstream exploded"
    assert "Chat completion failed (openai) 500 Internal Server Error" in str(err)


class BrokenBody(httpx.AsyncByteStream):
    async def __aiter__(self):
        raise httpx.ReadError("connection reset while reading body")
        yield b""


@pytest.mark.asyncio
async def test_unreadable_error_body_still_raises_http_error():
    rec = Recorder(httpx.Response(500, stream=BrokenBody()))
    with pytest.raises(ProviderHttpError) as ei:
        await make_client(rec).complete(_request())

    assert ei.value.status_code == 500
    assert ei.value.status_text == "Internal Server Error"
    assert ei.value.body == ""


@pytest.mark.asyncio
async def test_unreadable_success_body_propagates_read_error():
    rec = Recorder(httpx.Response(200, stream=BrokenBody()))
    with pytest.raises(httpx.ReadError):
        await make_client(rec).complete(_request())


@pytest.mark.asyncio
async def test_unauthorized_keeps_json_error_body():
    rec = Recorder(httpx.Response(401, json={"error": {"message": "bad key"}}))
    with pytest.raises(ProviderHttpError) as ei:
        await make_client(rec).complete(_request(provider="openrouter", credential="or-bad"))
    assert ei.value.provider == "openrouter"
    assert ei.value.status_code == 401
    assert "bad key" in ei.value.body


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"choices": []},
        {"choices": [{}]},
        {"choices": [{"message": {}}]},
        {"choices": [{"message": {"content": ""}}]},
        {"choices": [{"message": {"content": None}}]},
        {"choices": [{"message": {"content": [{"type": "text", "text": "x"}]}}]},
        [],
    ],
)
async def test_malformed_success_payloads(payload):
    rec = Recorder(httpx.Response(200, json=payload))
    with pytest.raises(MalformedResponseError) as ei:
        await make_client(rec).complete(_request())
    assert ei.value.provider == "openai"
    assert "openai" in str(ei.value)


@pytest.mark.asyncio
async def test_non_json_success_body_is_malformed():
    rec = Recorder(httpx.Response(200, text="<html>gateway</html>"))
    with pytest.raises(MalformedResponseError):
        await make_client(rec).complete(_request())


@pytest.mark.asyncio
async def test_transport_errors_propagate():
    def boom(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    client = make_client(boom)
    with pytest.raises(httpx.ConnectError):
        await client.complete(_request())


def test_unknown_role_rejected():
    with pytest.raises(ValueError):
        ChatMessage("tool", "x")
