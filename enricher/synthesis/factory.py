from typing import ClassVar

from enricher.config.settings import Settings
from enricher.synthesis.client_base import BaseGenerationClient
from enricher.synthesis.example_client_adapter import ExampleClientAdapter
from enricher.synthesis.formatter import ContentFormatter
from enricher.synthesis.openai_client_adapter import OpenAIClientAdapter
from enricher.synthesis.synthesizer import Synthesizer


class GenerationClientFactory:
    """Creates the configured generation client and the services built on it."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "deepseek": "https://api.deepseek.com/v1",
        "ollama": "http://localhost:11434/v1",
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseGenerationClient:
        """Create a configured generation client from application settings."""
        provider = settings.generation_provider.lower()
        if provider == "example":
            return ExampleClientAdapter()
        return OpenAIClientAdapter(
            api_key=settings.openai_api_key,
            timeout_seconds=settings.openai_timeout_seconds,
            base_url=cls._resolve_base_url(provider, settings),
        )

    @classmethod
    def create_synthesizer(cls, settings: Settings) -> Synthesizer:
        return Synthesizer(
            client=cls.create(settings),
            model=cls._resolve_model_name(settings),
            temperature=settings.enhance_temperature,
            max_tokens=settings.openai_max_tokens,
        )

    @classmethod
    def create_formatter(cls, settings: Settings) -> ContentFormatter:
        return ContentFormatter(
            client=cls.create(settings),
            model=cls._resolve_model_name(settings),
            temperature=settings.format_temperature,
            max_tokens=settings.openai_max_tokens,
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        configured = (settings.openai_base_url or "").strip() or None
        if provider == "openai":
            return configured
        if provider == "openai_compatible":
            if configured is None:
                raise ValueError(
                    "openai_base_url is required for generation_provider=openai_compatible"
                )
            return configured
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return configured or default_base_url
        supported = [
            "example",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ValueError(f"Unknown generation provider '{provider}'. Choose from: {supported}")

    @classmethod
    def _resolve_model_name(cls, settings: Settings) -> str:
        if settings.generation_provider.lower() == "example":
            return "example"
        return settings.openai_model_name
