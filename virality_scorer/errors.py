class ProviderError(RuntimeError):
    """The LLM provider was unreachable, timed out, or returned nothing usable."""


class ParseError(ValueError):
    """The LLM response held no JSON matching the expected shape."""
