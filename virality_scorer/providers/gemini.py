import os
import google.generativeai as genai

from .. import config
from ..errors import ProviderError
from .base import LLMProvider

# Flash first: scoring prompts are short and latency-bound
PRIMARY_MODEL = "gemini-2.5-flash"
FALLBACK_MODEL = "gemini-2.5-pro"


class GeminiProvider(LLMProvider):
    def __init__(self, api_key: str | None = None, timeout: float | None = None):
        self.api_key = api_key or os.environ.get("GEMINI_API_KEY")
        if not self.api_key:
            raise ValueError("GEMINI_API_KEY not configured")
        self.timeout = timeout or config.AI_TIMEOUT_SECONDS

        genai.configure(api_key=self.api_key)

    async def _call_model(
        self, model_name: str, prompt: str, system: str = "", json_mode: bool = False
    ) -> str:
        # 2.5 Pro is a "thinking" model and needs a higher token budget
        max_tokens = 8192 if "pro" in model_name.lower() else 2048

        generation_config = genai.types.GenerationConfig(
            temperature=0.4,
            max_output_tokens=max_tokens,
            response_mime_type="application/json" if json_mode else "text/plain",
        )

        system_instruction = system if system else None

        model = genai.GenerativeModel(
            model_name=model_name, system_instruction=system_instruction
        )

        response = await model.generate_content_async(
            prompt,
            generation_config=generation_config,
            request_options={"timeout": self.timeout},
        )

        if response.prompt_feedback and response.prompt_feedback.block_reason:
            raise ProviderError(
                f"Prompt blocked: {response.prompt_feedback.block_reason}"
            )

        return response.text

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
                    f"Both primary and fallback Gemini models failed. Primary Error: {e}"
                ) from fallback_e
