"""Tests for page metadata."""

from music_ranking.pagination import Page


def test_middle_page():
    page = Page(items=list(range(15)), total=40, page=2, per_page=15)
    assert page.meta() == {
        "current_page": 2,
        "from": 16,
        "last_page": 3,
        "per_page": 15,
        "to": 30,
        "total": 40,
    }


def test_last_partial_page():
    page = Page(items=[1, 2], total=12, page=3, per_page=5)
    assert page.from_item == 11
    assert page.to_item == 12
    assert page.last_page == 3


def test_empty_result():
    """No rows still reports one page."""
    page = Page(items=[], total=0, page=1, per_page=15)
    assert page.last_page == 1
    assert page.from_item is None
    assert page.to_item is None
