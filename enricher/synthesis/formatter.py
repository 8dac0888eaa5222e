from enricher.logging.logger import Log
from enricher.synthesis.client_base import BaseGenerationClient
from enricher.synthesis.exceptions import GenerationError
from enricher.synthesis.models import FormatResult
from enricher.synthesis.prompt_loader import load_prompt

MIN_ORIGINAL_LENGTH = 100
MIN_FORMATTED_LENGTH = 50


class ContentFormatter:
    """Cleans raw scraped article text into markdown without adding facts."""

    def __init__(
        self,
        *,
        client: BaseGenerationClient,
        model: str,
        temperature: float = 0.3,
        max_tokens: int = 4000,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._system_prompt = load_prompt("format_system.txt")
        self._user_template = load_prompt("format_user.txt")

    def format(self, title: str, original_content: str) -> FormatResult:
        if len(original_content) < MIN_ORIGINAL_LENGTH:
            Log.warning(f"Content of '{title}' too short to format")
            return FormatResult()

        try:
            formatted = self._client.create_chat_completion(
                model=self._model,
                temperature=self._temperature,
                max_tokens=self._max_tokens,
                system_prompt=self._system_prompt,
                user_prompt=self._user_template.format(
                    title=title,
                    original_content=original_content,
                ),
            )
        except GenerationError as exc:
            Log.error(f"Formatting failed for '{title}': {exc}")
            return FormatResult()

        if len(formatted) < MIN_FORMATTED_LENGTH:
            return FormatResult()
        return FormatResult(formatted_content=formatted, ok=True)
