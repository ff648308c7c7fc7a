"""
Abstract base class for LLM providers.

All LLM implementations must implement this interface, enabling
provider-agnostic feedback and paragraph generation in the service layer.
"""

from abc import ABC, abstractmethod


class BaseLLM(ABC):
    """Interface that every LLM provider must implement."""

    @abstractmethod
    async def chat(self, messages: list[dict[str, str]], **kwargs) -> str:
        """Run a chat-style generation.

        Args:
            messages: Ordered ``{"role", "content"}`` messages.
            **kwargs: Provider-specific options (model, temperature, max_tokens).

        Returns:
            The model's trimmed text response.

        Raises:
            UpstreamError: The provider rejected or failed the request.
            ParseError: The provider answered with an unexpected body.
        """

    @abstractmethod
    async def complete(self, prompt: str, **kwargs) -> str:
        """Run a single-prompt text completion.

        Args:
            prompt: Instruction text.
            **kwargs: Provider-specific options (model, temperature, max_tokens).

        Returns:
            The model's trimmed text response.
        """

    async def aclose(self) -> None:
        """Release network resources held by the provider."""
