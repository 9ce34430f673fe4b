from __future__ import annotations

from typing import Optional

import openai
from openai import OpenAI

from mindspark.config import Settings
from mindspark.errors import ConfigurationMissing, TransportFailure
from mindspark.services.logging import log_performance
from mindspark.services.prompts import SYSTEM_PROMPT


class QuestionModelClient:
    """One chat-completion call per question, bounded by a timeout and never retried."""

    def __init__(self, settings: Settings, client: Optional[OpenAI] = None):
        self.settings = settings
        self._client = client

    def is_configured(self) -> bool:
        return self.settings.has_api_key()

    def _get_client(self) -> OpenAI:
        if not self.is_configured():
            raise ConfigurationMissing("OPENAI_API_KEY not set or too short")
        if self._client is None:
            self._client = OpenAI(api_key=self.settings.openai_api_key.strip())
        # Set timeouts per-request via with_options()
        return self._client.with_options(timeout=self.settings.timeout_seconds, max_retries=0)

    @log_performance("model_completion")
    def complete(self, prompt: str, system_prompt: str = SYSTEM_PROMPT) -> str:
        client = self._get_client()
        try:
            rsp = client.chat.completions.create(
                model=self.settings.question_model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": prompt},
                ],
                temperature=self.settings.temperature,
            )
        except openai.APITimeoutError as e:
            raise TransportFailure(f"model call timed out after {self.settings.timeout_seconds}s") from e
        except openai.OpenAIError as e:
            raise TransportFailure(f"model call failed: {e.__class__.__name__}") from e

        if not rsp.choices:
            return ""
        return rsp.choices[0].message.content or ""
