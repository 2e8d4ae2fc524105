"""Tests for the keyword suggestion agent."""

import json

import pytest

from scriptgen.agents import KeywordAgent
from scriptgen.agents.keywords import KEYWORD_SCHEMA
from scriptgen.errors import InvalidAIResponseError, RequestError

from .conftest import FakeClient

URL = "https://www.youtube.com/watch?v=abc123"


class TestKeywordAgent:
    """Tests for KeywordAgent."""

    @pytest.mark.asyncio
    async def test_returns_keywords_in_order(self):
        keywords = ["khu vườn", "hoạt hình 3D", "truyện thiếu nhi"]
        client = FakeClient(response=json.dumps(keywords, ensure_ascii=False))

        result = await KeywordAgent(client=client).run(URL)

        assert result == keywords
        assert client.calls[0]["schema"] == KEYWORD_SCHEMA
        assert URL in client.calls[0]["prompt"]

    @pytest.mark.asyncio
    async def test_model_override(self):
        client = FakeClient(response='["a"]')
        agent = KeywordAgent(client=client, model="gemini-2.5-flash")

        await agent.run(URL)

        assert agent.model == "gemini-2.5-flash"
        assert client.calls[0]["model"] == "gemini-2.5-flash"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("url", ["", "   "])
    async def test_empty_url(self, url):
        client = FakeClient(response="[]")

        with pytest.raises(RequestError):
            await KeywordAgent(client=client).run(url)
        assert client.calls == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("response", ['{"keywords": ["a"]}', '[1, 2, 3]', "no keywords here"])
    async def test_invalid_response(self, response):
        client = FakeClient(response=response)

        with pytest.raises(InvalidAIResponseError):
            await KeywordAgent(client=client).run(URL)

    @pytest.mark.asyncio
    async def test_keyword_error_message(self):
        client = FakeClient(response='{"keywords": []}')

        with pytest.raises(InvalidAIResponseError) as exc_info:
            await KeywordAgent(client=client).run(URL)
        assert "keywords" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_uses_model_default_temperature(self):
        client = FakeClient(response='["a"]')
        await KeywordAgent(client=client).run(URL)
        assert client.calls[0]["temperature"] is None

    @pytest.mark.asyncio
    async def test_explicit_temperature(self):
        client = FakeClient(response='["a"]')
        await KeywordAgent(client=client, temperature=0.3).run(URL)
        assert client.calls[0]["temperature"] == 0.3
