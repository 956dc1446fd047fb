import os
from anthropic import AsyncAnthropic

from .. import config
from ..errors import ProviderError
from .base import LLMProvider

PRIMARY_MODEL = "claude-3-5-haiku-latest"
FALLBACK_MODEL = "claude-3-5-sonnet-latest"

JSON_ONLY_INSTRUCTION = "Respond with a single valid JSON object and nothing else."


class AnthropicProvider(LLMProvider):
    def __init__(self, api_key: str | None = None, timeout: float | None = None):
        self.api_key = api_key or os.environ.get("ANTHROPIC_API_KEY")
        if not self.api_key:
            raise ValueError("ANTHROPIC_API_KEY not configured")

        self.client = AsyncAnthropic(
            api_key=self.api_key,
            timeout=timeout or config.AI_TIMEOUT_SECONDS,
            max_retries=1,
        )

    async def _call_model(
        self, model_name: str, prompt: str, system: str = "", json_mode: bool = False
    ) -> str:
        # No native JSON mode; ask for it in the system prompt
        if json_mode:
            system = f"{system}\n\n{JSON_ONLY_INSTRUCTION}".strip()

        kwargs = {
            "model": model_name,
            "max_tokens": 1500,
            "temperature": 0.4,
            "messages": [{"role": "user", "content": prompt}],
        }

        if system:
            kwargs["system"] = system

        response = await self.client.messages.create(**kwargs)

        # Anthropic returns a list of content blocks
        text_blocks = [block.text for block in response.content if block.type == "text"]
        return "".join(text_blocks)

    async def generate(
        self, prompt: str, system: str = "", json_mode: bool = False
    ) -> str:
        try:
            result = await self._call_model(PRIMARY_MODEL, prompt, system, json_mode)
            if result and result.strip():
                return result
            raise ProviderError("Empty response from primary model")
        except Exception as e:
            try:
                return await self._call_model(FALLBACK_MODEL, prompt, system, json_mode)
            except Exception as fallback_e:
                raise ProviderError(
                    f"Both primary and fallback Anthropic models failed. Primary Error: {e}"
                ) from fallback_e
