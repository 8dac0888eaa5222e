import httpx
import openai

from enricher.logging.logger import Log
from enricher.synthesis.client_base import BaseGenerationClient
from enricher.synthesis.exceptions import GenerationError, GenerationNetworkError


class OpenAIClientAdapter(BaseGenerationClient):
    """Generation client adapter built on OpenAI-compatible chat API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
        )

    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        max_tokens: int,
        system_prompt: str,
        user_prompt: str,
    ) -> str:
        try:
            response = self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                max_tokens=max_tokens,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise GenerationNetworkError(f"AI provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise GenerationNetworkError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            raise GenerationError("AI returned no choices")
        choice = response.choices[0]
        if choice.finish_reason == "length":
            Log.warning(f"Completion from {model} hit max_tokens={max_tokens} and may be cut off")
        if response.usage is not None:
            Log.debug(
                f"{model} usage: prompt={response.usage.prompt_tokens} "
                f"completion={response.usage.completion_tokens}"
            )
        content = choice.message.content
        if content is None:
            raise GenerationError("AI returned empty response")
        return content
