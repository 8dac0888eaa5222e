"""Example generation client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseGenerationClient and register the provider in
GenerationClientFactory.
"""

from enricher.synthesis.client_base import BaseGenerationClient


class ExampleClientAdapter(BaseGenerationClient):
    """Offline adapter that echoes the prompt back inside fixed markdown.

    No network calls. Useful for local dry runs of the whole pipeline.
    The output deliberately has no References heading so the synthesizer's
    own references section is exercised.
    """

    TEMPLATE = (
        "# Example Article\n\n"
        "## Introduction\n\n"
        "This article was produced offline by the example provider and only "
        "restates the request it received.\n\n"
        "## Request\n\n"
        "{excerpt}\n\n"
        "## Conclusion\n\n"
        "Swap the generation provider to a real model to get actual content.\n"
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
        _ = model, temperature, max_tokens, system_prompt
        return self.TEMPLATE.format(excerpt=user_prompt[:500])
