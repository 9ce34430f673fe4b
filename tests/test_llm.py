"""
Unit tests for the model client wrapper
"""
import httpx
import openai
import pytest

from mindspark.config import Settings
from mindspark.errors import ConfigurationMissing, TransportFailure
from mindspark.services.llm import QuestionModelClient
from fakes import FakeOpenAI, TEST_API_KEY

REQUEST = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")


class TestQuestionModelClient:
    def test_returns_message_content(self):
        fake = FakeOpenAI(content='{"question": "Q?"}')
        client = QuestionModelClient(Settings(openai_api_key=TEST_API_KEY, question_model="gpt-test"), client=fake)

        assert client.complete("prompt text") == '{"question": "Q?"}'
        call = fake.completions.calls[0]
        assert call["model"] == "gpt-test"
        assert call["messages"][-1] == {"role": "user", "content": "prompt text"}
        assert call["messages"][0]["role"] == "system"

    def test_applies_timeout_without_retries(self):
        fake = FakeOpenAI(content="{}")
        client = QuestionModelClient(Settings(openai_api_key=TEST_API_KEY, timeout_seconds=3.5), client=fake)
        client.complete("prompt")
        assert fake.options == [{"timeout": 3.5, "max_retries": 0}]

    @pytest.mark.parametrize("key", [None, "", "   ", "sk-short"])
    def test_missing_or_short_key(self, key):
        fake = FakeOpenAI(content="{}")
        client = QuestionModelClient(Settings(openai_api_key=key), client=fake)
        assert not client.is_configured()
        with pytest.raises(ConfigurationMissing):
            client.complete("prompt")
        assert fake.completions.calls == []

    @pytest.mark.parametrize("error", [
        openai.APIConnectionError(request=REQUEST),
        openai.APITimeoutError(request=REQUEST),
    ])
    def test_sdk_errors_become_transport_failures(self, error):
        client = QuestionModelClient(Settings(openai_api_key=TEST_API_KEY), client=FakeOpenAI(error=error))
        with pytest.raises(TransportFailure):
            client.complete("prompt")

    def test_empty_content_is_returned_as_empty_string(self):
        client = QuestionModelClient(Settings(openai_api_key=TEST_API_KEY), client=FakeOpenAI(content=None))
        assert client.complete("prompt") == ""
