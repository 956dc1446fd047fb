import os
from openai import AsyncOpenAI

from .. import config
from ..errors import ProviderError
from .base import LLMProvider

PRIMARY_MODEL = "gpt-4o-mini"
FALLBACK_MODEL = "gpt-4o"


class OpenAIProvider(LLMProvider):
    def __init__(self, api_key: str | None = None, timeout: float | None = None):
        self.api_key = api_key or os.environ.get("OPENAI_API_KEY")
        if not self.api_key:
            raise ValueError("OPENAI_API_KEY not configured")

        self.client = AsyncOpenAI(
            api_key=self.api_key,
            timeout=timeout or config.AI_TIMEOUT_SECONDS,
            max_retries=1,
        )

    async def _call_model(
        self, model_name: str, prompt: str, system: str = "", json_mode: bool = False
    ) -> str:
        messages = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})

        kwargs = {
            "model": model_name,
            "messages": messages,
            "temperature": 0.4,
            "max_tokens": 1500,
        }
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        response = await self.client.chat.completions.create(**kwargs)

        content = response.choices[0].message.content
        if content:
            return content
        return ""

    async def generate(
        self, prompt: str, system: str = "", json_mode: bool = False
    ) -> str:
        try:
            result = await self._call_model(PRIMARY_MODEL, prompt, system, json_mode)
            if result and result.strip():
                return result
            raise ProviderError("Empty response from primary model")
        except Exception as e:
            # Fallback to the larger model
            try:
                return await self._call_model(FALLBACK_MODEL, prompt, system, json_mode)
            except Exception as fallback_e:
                raise ProviderError(
                    f"Both primary and fallback OpenAI models failed. Primary Error: {e}"
                ) from fallback_e
