from dataclasses import dataclass

MIN_CONTENT_LENGTH = 100


def is_substantial(text: str) -> bool:
    """Real article text versus boilerplate or an empty shell."""
    return len(text) > MIN_CONTENT_LENGTH


@dataclass(frozen=True)
class ExtractedContent:
    """Best-effort title and body text of one fetched page."""

    url: str
    title: str
    text: str
    ok: bool

    @classmethod
    def failed(cls, url: str) -> "ExtractedContent":
        return cls(url=url, title="", text="", ok=False)


@dataclass(frozen=True)
class ParsedPage:
    """Output of HTML parsing, before the success flag is decided."""

    title: str
    text: str
