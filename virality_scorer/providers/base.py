from abc import ABC, abstractmethod


class LLMProvider(ABC):
    @abstractmethod
    async def generate(
        self, prompt: str, system: str = "", json_mode: bool = False
    ) -> str:
        """
        Generate text from an LLM given a prompt and an optional system message.
        With json_mode the provider is asked to return a bare JSON object.
        Raises ProviderError when no model produced a usable answer.
        """
        pass
