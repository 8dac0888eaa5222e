class GenerationError(Exception):
    """Raised when text generation fails."""


class GenerationNetworkError(GenerationError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""


class PromptLoadError(Exception):
    """Raised when a bundled or custom prompt file cannot be read."""
