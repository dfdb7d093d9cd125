"""
Tests for applying filters and text queries to sequences of threads.
"""

from chansearch.core.filters import filter_threads, search_threads
from chansearch.core.models import SearchFilters


class TestFilterThreads:
    """Test suite for filter_threads."""

    def setup_method(self):
        self.filters = SearchFilters(file_types=[".PNG"], min_replies=0)

    def test_preserves_input_order(self, make_thread):
        threads = [
            make_thread(number="3", image_url="https://x/c.png"),
            make_thread(number="1", image_url="https://x/a.gif"),
            make_thread(number="2", image_url="https://x/b.png"),
        ]
        result = filter_threads(threads, self.filters)
        assert [t.number for t in result] == ["3", "2"]

    def test_filter_is_normalized_before_matching(self, make_thread):
        # ".PNG" only matches once normalized
        result = filter_threads([make_thread(image_url="https://x/a.png")], self.filters)
        assert len(result) == 1

    def test_inactive_filter_keeps_everything(self, make_thread):
        threads = [make_thread(number=str(i)) for i in range(3)]
        result = filter_threads(threads, SearchFilters(min_replies=0))
        assert result == threads
        assert result is not threads

    def test_none_filter_keeps_everything(self, make_thread):
        threads = [make_thread(), make_thread(number="2")]
        assert filter_threads(threads, None) == threads

    def test_accepts_generators(self, make_thread):
        gen = (make_thread(number=str(i), replies=i) for i in range(6))
        result = filter_threads(gen, SearchFilters(min_replies=4))
        assert [t.number for t in result] == ["4", "5"]


class TestSearchThreads:
    """Test suite for search_threads."""

    def test_matches_title_and_comment(self, make_thread):
        threads = [
            make_thread(number="1", title="Linux Desktop"),
            make_thread(number="2", comment="my <i>desktop</i> setup"),
            make_thread(number="3", title="Laptops"),
        ]
        result = search_threads(threads, "  DESKTOP ")
        assert [t.number for t in result] == ["1", "2"]

    def test_blank_query_returns_nothing(self, make_thread):
        assert search_threads([make_thread(title="anything")], "   ") == []

    def test_query_then_filter(self, make_thread):
        threads = [
            make_thread(number="1", title="desktop", image_url="https://x/a.png", replies=50),
            make_thread(number="2", title="desktop", image_url="", replies=50),
            make_thread(number="3", title="phones", image_url="https://x/b.png", replies=50),
        ]
        result = search_threads(threads, "desktop", SearchFilters(requires_images=True))
        assert [t.number for t in result] == ["1"]
