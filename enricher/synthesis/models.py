from dataclasses import dataclass, field


@dataclass(frozen=True)
class ReferenceDocument:
    """A successfully extracted competing article fed into synthesis."""

    url: str
    title: str
    content: str


@dataclass(frozen=True)
class SynthesisResult:
    """Enhanced article plus the URLs of the references actually used."""

    updated_content: str = ""
    sources: list[str] = field(default_factory=list)
    ok: bool = False


@dataclass(frozen=True)
class FormatResult:
    """Cleaned restatement of an original article."""

    formatted_content: str = ""
    ok: bool = False
