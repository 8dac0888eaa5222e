from pathlib import Path

from enricher.synthesis.exceptions import PromptLoadError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def load_prompt(name: str, path: Path | None = None) -> str:
    """Load a prompt template from a file.

    Args:
        name: File name inside the bundled prompts directory, e.g.
              ``enhance_system.txt``. Ignored when ``path`` is given.
        path: Explicit path to a custom prompt file.

    Returns:
        The raw template string with placeholders.

    Raises:
        PromptLoadError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / name
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise PromptLoadError(f"Failed to load prompt template: {exc}") from exc
