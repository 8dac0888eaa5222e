"""AI-powered article enhancement from competing reference articles."""

import re
from pathlib import Path

from enricher.extraction.models import is_substantial
from enricher.logging.logger import Log
from enricher.synthesis.client_base import BaseGenerationClient
from enricher.synthesis.exceptions import GenerationError
from enricher.synthesis.models import ReferenceDocument, SynthesisResult
from enricher.synthesis.prompt_loader import load_prompt

REFERENCE_MAX_CHARS = 3000
MIN_OUTPUT_LENGTH = 100

_REFERENCES_HEADING = re.compile(r"^\s{0,3}#{1,6}\s*references\b", re.IGNORECASE | re.MULTILINE)


def has_references_section(content: str) -> bool:
    return _REFERENCES_HEADING.search(content) is not None


def append_references_section(content: str, references: list[ReferenceDocument]) -> str:
    """Append a numbered ``## References`` list in the order given."""
    lines = [
        f"{index}. [{ref.title or ref.url}]({ref.url})"
        for index, ref in enumerate(references, start=1)
    ]
    return content.rstrip() + "\n\n## References\n\n" + "\n".join(lines) + "\n"


class Synthesizer:
    """Rewrites an original article using reference articles as inspiration."""

    def __init__(
        self,
        *,
        client: BaseGenerationClient,
        model: str,
        temperature: float = 0.7,
        max_tokens: int = 4000,
        system_prompt_path: Path | None = None,
        user_prompt_path: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._system_prompt = load_prompt("enhance_system.txt", system_prompt_path)
        self._user_template = load_prompt("enhance_user.txt", user_prompt_path)
        self._reference_template = load_prompt("reference_block.txt")

    @property
    def model(self) -> str:
        return self._model

    def synthesize(
        self,
        title: str,
        original_text: str,
        references: list[ReferenceDocument],
    ) -> SynthesisResult:
        """Produce an enhanced article and the list of sources it drew on.

        A failed result has ``ok=False`` with empty content and sources; the
        caller decides what to do next.
        """
        qualifying = [ref for ref in references if is_substantial(ref.content)]
        if not qualifying:
            Log.warning(f"No usable reference articles for '{title}', skipping generation")
            return SynthesisResult()

        prompt = self._build_prompt(title, original_text, qualifying)
        Log.debug(f"Synthesis prompt:\n{prompt}")

        try:
            raw = self._client.create_chat_completion(
                model=self._model,
                temperature=self._temperature,
                max_tokens=self._max_tokens,
                system_prompt=self._system_prompt,
                user_prompt=prompt,
            )
        except GenerationError as exc:
            Log.error(f"Generation failed for '{title}': {exc}")
            return SynthesisResult()

        if len(raw) < MIN_OUTPUT_LENGTH:
            Log.warning(f"Generation for '{title}' returned only {len(raw)} chars")
            return SynthesisResult()

        content = raw
        if not has_references_section(content):
            content = append_references_section(content, qualifying)

        Log.info(f"Synthesized {len(content)} chars for '{title}' from {len(qualifying)} references")
        return SynthesisResult(
            updated_content=content,
            sources=[ref.url for ref in qualifying],
            ok=True,
        )

    def _build_prompt(
        self,
        title: str,
        original_text: str,
        references: list[ReferenceDocument],
    ) -> str:
        blocks = [
            self._reference_template.format(
                index=index,
                title=ref.title,
                url=ref.url,
                content=ref.content[:REFERENCE_MAX_CHARS],
            )
            for index, ref in enumerate(references, start=1)
        ]
        return self._user_template.format(
            title=title,
            original_content=original_text,
            references="\n".join(blocks),
        )
