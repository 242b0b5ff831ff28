"""Unit tests for the frontier module."""

from sailcrawl.frontier import LinkFilter, UrlFrontier
from sailcrawl.sites import SAILBOATDATA, YACHTWORLD

DETAIL = "https://sailboatdata.com/sailboat/catalina-30"
PAGE = "https://sailboatdata.com/?page_number=2"


def _frontier() -> UrlFrontier:
    return UrlFrontier(SAILBOATDATA.link_filter)


def _assert_disjoint(frontier: UrlFrontier) -> None:
    assert not (frontier.pending & frontier.visited)


class TestLinkFilter:
    """LinkFilter tests."""

    def test_sailboatdata_accepts_detail_and_pagination(self):
        f = SAILBOATDATA.link_filter
        assert f.accepts(DETAIL)
        assert f.accepts(PAGE)

    def test_sailboatdata_rejects_unit_toggle(self):
        assert not SAILBOATDATA.link_filter.accepts(DETAIL + "/?units=metric")

    def test_rejects_off_site(self):
        assert not SAILBOATDATA.link_filter.accepts("https://example.com/sailboat/x")

    def test_rejects_unrelated_same_site(self):
        assert not SAILBOATDATA.link_filter.accepts("https://sailboatdata.com/about")

    def test_yachtworld(self):
        f = YACHTWORLD.link_filter
        assert f.accepts("https://www.yachtworld.com/boats-for-sale/type-sail/page-3/")
        assert f.accepts("https://www.yachtworld.com/yacht/2004-beneteau-8812345/")
        assert not f.accepts("https://www.yachtworld.com/boats-for-sale/type-power/")
        assert f.is_detail("https://www.yachtworld.com/yacht/2004-beneteau-8812345/")

    def test_custom_filter(self):
        f = LinkFilter(prefix="https://a.test", detail_markers=("/item/",))
        assert f.accepts("https://a.test/item/1")
        assert not f.accepts("https://a.test/list?page=2")


class TestUrlFrontier:
    """UrlFrontier tests."""

    def test_offer_and_take(self):
        frontier = _frontier()
        assert frontier.offer(DETAIL)
        assert frontier.is_pending(DETAIL)
        assert frontier.take_next() == DETAIL
        assert frontier.take_next() is None

    def test_offer_duplicate_pending(self):
        frontier = _frontier()
        assert frontier.offer(DETAIL)
        assert not frontier.offer(DETAIL)
        assert frontier.pending_count == 1

    def test_counts(self):
        frontier = _frontier()
        frontier.offer(DETAIL)
        frontier.seed(PAGE)
        assert (frontier.pending_count, frontier.visited_count) == (2, 0)

        frontier.mark_visited(frontier.take_next())
        assert (frontier.pending_count, frontier.visited_count) == (1, 1)

        frontier.mark_visited(PAGE)
        assert (frontier.pending_count, frontier.visited_count) == (0, 2)
        assert not frontier.has_pending

    def test_visited_never_requeued(self):
        frontier = _frontier()
        frontier.offer(DETAIL)
        url = frontier.take_next()
        frontier.mark_visited(url)
        for _ in range(3):
            assert not frontier.offer(DETAIL)
            _assert_disjoint(frontier)
        assert not frontier.has_pending
        assert frontier.is_visited(DETAIL)

    def test_mark_visited_while_pending(self):
        frontier = _frontier()
        frontier.offer(DETAIL)
        frontier.offer(PAGE)
        frontier.mark_visited(DETAIL)
        _assert_disjoint(frontier)
        assert frontier.take_next() == PAGE
        assert frontier.take_next() is None

    def test_fifo_order(self):
        frontier = _frontier()
        urls = [f"https://sailboatdata.com/sailboat/boat-{i}" for i in range(5)]
        for url in urls:
            frontier.offer(url)
        assert [frontier.take_next() for _ in urls] == urls

    def test_rejected_offer_is_noop(self):
        frontier = _frontier()
        assert not frontier.offer("https://sailboatdata.com/about")
        assert not frontier.has_pending

    def test_seed_bypasses_filter(self):
        frontier = _frontier()
        assert frontier.seed("https://sailboatdata.com/")
        assert frontier.take_next() == "https://sailboatdata.com/"
