import pytest

from microblog.listing import paginate, parse_date, sort_and_page, sort_posts
from microblog.posts import Post


def _dated(*dates):
    return [Post(id=str(i), publication_date=date) for i, date in enumerate(dates)]


def test_parse_date_formats():
    assert parse_date("2024-01-01") == parse_date("2024-01-01T00:00:00Z")
    assert parse_date("01/02/2024") == parse_date("2024-01-02")
    assert parse_date("Mon, 01 Jan 2024 00:00:00 GMT") == parse_date("2024-01-01")
    assert parse_date("June 1, 2024") == parse_date("2024-06-01")
    assert parse_date("not-a-date") == 0.0
    assert parse_date("") == 0.0
    assert parse_date(None) == 0.0


def test_parse_date_only_reads_strings():
    # publication dates are always text once normalized
    assert parse_date(1704067200) == 0.0
    assert parse_date(True) == 0.0


def test_newest_first_puts_invalid_dates_last():
    posts = _dated("2024-01-01", "not-a-date", "2024-06-01")
    ordered = sort_posts(posts, "newest")
    assert [p.publication_date for p in ordered] == ["2024-06-01", "2024-01-01", "not-a-date"]


def test_oldest_first_puts_invalid_dates_first():
    posts = _dated("2024-01-01", "not-a-date", "2024-06-01")
    ordered = sort_posts(posts, "oldest")
    assert [p.publication_date for p in ordered] == ["not-a-date", "2024-01-01", "2024-06-01"]


@pytest.mark.parametrize("order", ["newest", "oldest"])
def test_sort_is_stable_for_ties(order):
    posts = _dated("2024-01-01", "2024-01-01", "bad", "also bad")
    ordered = sort_posts(posts, order)
    same_day = [p.id for p in ordered if p.publication_date == "2024-01-01"]
    invalid = [p.id for p in ordered if p.publication_date in {"bad", "also bad"}]
    assert same_day == ["0", "1"]
    assert invalid == ["2", "3"]


def test_unknown_sort_order():
    with pytest.raises(ValueError):
        sort_posts([], "random")


def test_thirteen_posts_make_three_pages():
    posts = _dated(*[f"2024-01-{day:02d}" for day in range(1, 14)])
    page = sort_and_page(posts, "newest", 3, 6)
    assert page.total_pages == 3
    assert len(page.items) == 1
    assert page.items[0].publication_date == "2024-01-01"
    assert page.has_previous and not page.has_next


def test_empty_set_still_has_one_page():
    page = paginate([], 1, 6)
    assert page.total_pages == 1
    assert page.items == []
    assert page.page == 1


def test_page_is_clamped():
    assert paginate(list(range(10)), 99, 4).page == 3
    assert paginate(list(range(10)), 0, 4).items == [0, 1, 2, 3]


def test_page_size_must_be_positive():
    with pytest.raises(ValueError):
        paginate([1], 1, 0)
