from dataclasses import dataclass

from bs4 import BeautifulSoup, Tag


@dataclass(frozen=True)
class ListingPost:
    """One post as shown on the blog listing page."""

    title: str
    url: str
    category: str = "Uncategorized"
    author: str = "Unknown"
    date: str = "No date available"
    excerpt: str = "No excerpt available"


def _text(article: Tag, selector: str) -> str:
    node = article.select_one(selector)
    return node.get_text(strip=True) if node is not None else ""


def parse_listing(html: str) -> list[ListingPost]:
    """Extract posts from a listing page in page order.

    Articles without both a title and a link are dropped.
    """
    soup = BeautifulSoup(html, "html.parser")
    posts: list[ListingPost] = []
    for article in soup.find_all("article"):
        if not isinstance(article, Tag):
            continue
        title = _text(article, "h2.entry-title")
        link = article.select_one("h2.entry-title a")
        href = link.get("href") if link is not None else None
        url = href.strip() if isinstance(href, str) else ""
        if not title or not url:
            continue
        posts.append(
            ListingPost(
                title=title,
                url=url,
                category=_text(article, ".meta-categories a") or "Uncategorized",
                author=_text(article, ".meta-author a") or "Unknown",
                date=(
                    _text(article, "time.ct-meta-element-date")
                    or _text(article, ".meta-date")
                    or "No date available"
                ),
                excerpt=_text(article, ".entry-excerpt p") or "No excerpt available",
            )
        )
    return posts


def oldest_posts(posts: list[ListingPost], count: int) -> list[ListingPost]:
    """Listing pages are newest first, so the oldest posts are at the end."""
    return posts[-count:] if count > 0 else []
