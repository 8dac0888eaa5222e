from collections.abc import Callable

import pytest

ARTICLE_SENTENCE = "Chatbots answer customer questions around the clock and cut wait times. "


def article_html(body_text: str, title: str = "Reference Article") -> str:
    return (
        "<html><head><title>Page Title</title></head><body>"
        "<nav>Home | Blog | Contact</nav>"
        f"<article><h1>{title}</h1><div class=\"entry-content\"><p>{body_text}</p></div></article>"
        "<footer>Copyright</footer>"
        "</body></html>"
    )


@pytest.fixture()
def long_text() -> str:
    """About 360 characters of article prose, well above every threshold."""
    return (ARTICLE_SENTENCE * 5).strip()


@pytest.fixture()
def make_article_html() -> Callable[..., str]:
    return article_html
