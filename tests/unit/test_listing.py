from enricher.ingestion.listing import ListingPost, oldest_posts, parse_listing

LISTING_HTML = """
<html><body>
<article>
  <h2 class="entry-title"><a href="https://blog.test/newest">Newest Post</a></h2>
  <ul class="entry-meta">
    <li class="meta-author"><a href="/author/jane">Jane Doe</a></li>
    <li><time class="ct-meta-element-date">March 3, 2025</time></li>
    <li class="meta-categories"><a href="/c/ai">AI</a></li>
  </ul>
  <div class="entry-excerpt"><p>Short summary of the newest post.</p></div>
</article>
<article>
  <h2 class="entry-title"><a href="/blogs/older/"> Older Post </a></h2>
  <span class="meta-date">Jan 5, 2024</span>
</article>
<article><p>Promo block without a title</p></article>
</body></html>
"""


class TestParseListing:
    def test_reads_all_fields(self) -> None:
        posts = parse_listing(LISTING_HTML)

        assert posts[0] == ListingPost(
            title="Newest Post",
            url="https://blog.test/newest",
            category="AI",
            author="Jane Doe",
            date="March 3, 2025",
            excerpt="Short summary of the newest post.",
        )

    def test_applies_defaults_and_date_fallback(self) -> None:
        older = parse_listing(LISTING_HTML)[1]

        assert older.title == "Older Post"
        assert older.url == "/blogs/older/"
        assert older.date == "Jan 5, 2024"
        assert older.author == "Unknown"
        assert older.category == "Uncategorized"
        assert older.excerpt == "No excerpt available"

    def test_drops_articles_without_title_link(self) -> None:
        assert len(parse_listing(LISTING_HTML)) == 2

    def test_empty_page(self) -> None:
        assert parse_listing("<html><body></body></html>") == []


class TestOldestPosts:
    def test_takes_posts_from_the_end(self) -> None:
        posts = [ListingPost(title=str(i), url=f"/{i}") for i in range(10)]
        assert [p.title for p in oldest_posts(posts, 3)] == ["7", "8", "9"]

    def test_count_larger_than_listing(self) -> None:
        posts = [ListingPost(title="only", url="/only")]
        assert oldest_posts(posts, 5) == posts

    def test_zero_count(self) -> None:
        assert oldest_posts([ListingPost(title="a", url="/a")], 0) == []
