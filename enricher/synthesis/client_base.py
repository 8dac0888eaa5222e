from abc import ABC, abstractmethod


class BaseGenerationClient(ABC):
    """Contract for provider-specific text generation clients."""

    @abstractmethod
    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        max_tokens: int,
        system_prompt: str,
        user_prompt: str,
    ) -> str:
        """Return provider response as plain text.

        Raises:
            GenerationError: on any failure, GenerationNetworkError for
                transport and API errors.
        """
