import random
from datetime import timedelta

import pytest

from managers import BookmarkManager, SAMPLE_BOOKMARKS
from models import MISSING_FIELD, DUPLICATE_URL, CAPACITY_EXCEEDED, NOT_FOUND


def _add_abc(manager):
    manager.add_bookmark("Alpha", "https://a.example", "Dev")
    manager.add_bookmark("Beta", "https://b.example", "Dev")
    manager.add_bookmark("Gamma", "https://c.example", "News")


def test_add_registers_in_every_structure(manager) -> None:
    bookmark, error = manager.add_bookmark("  GitHub ", " https://github.com ", " Development ")

    assert error is None
    assert bookmark.title == "GitHub"
    assert bookmark.url == "https://github.com"
    assert bookmark.visit_count == 0
    assert bookmark.last_visited is None

    assert manager.hash_index.get("https://github.com") is bookmark
    assert manager.title_trie.search("github")
    assert manager.min_heap.contains("https://github.com")
    assert manager.recent_list.get_size() == 0
    assert "Development" in manager.get_categories()
    assert manager.check_consistency() == []


@pytest.mark.parametrize("title,url,category", [
    ("", "https://a.example", "Dev"),
    ("A", "   ", "Dev"),
    ("A", "https://a.example", None),
])
def test_add_rejects_missing_fields(manager, title, url, category) -> None:
    assert manager.add_bookmark(title, url, category) == (None, MISSING_FIELD)
    assert manager.hash_index.count() == 0
    assert manager.min_heap.size() == 0
    assert manager.title_trie.word_count() == 0


def test_duplicate_url_leaves_structures_unchanged(manager) -> None:
    manager.add_bookmark("GitHub", "https://github.com", "Dev")

    assert manager.add_bookmark("Other", "https://github.com", "Misc") == (None, DUPLICATE_URL)

    assert manager.hash_index.count() == 1
    assert manager.min_heap.size() == 1
    assert manager.get_bookmark("https://github.com").title == "GitHub"
    assert not manager.title_trie.search("other")
    assert "Misc" not in manager.get_categories()


def test_capacity_limit() -> None:
    manager = BookmarkManager(max_bookmarks=10)
    results = [manager.add_bookmark(f"Site {i}", f"https://s{i}.example", "Dev") for i in range(15)]

    assert [error for _, error in results[10:]] == [CAPACITY_EXCEEDED] * 5
    assert manager.hash_index.count() == 10
    assert manager.min_heap.size() == 10
    assert manager.check_consistency() == []


def test_default_capacity_is_100(manager) -> None:
    for i in range(105):
        manager.add_bookmark(f"Site {i}", f"https://s{i}.example", "Dev")
    assert manager.hash_index.count() == 100


def test_visit_increments_and_rekeys_heap(manager) -> None:
    _add_abc(manager)

    before = manager.get_bookmark("https://c.example").visit_count
    bookmark, error = manager.record_visit("https://c.example")

    assert error is None
    assert bookmark.visit_count == before + 1
    assert bookmark.last_visited is not None
    assert manager.min_heap.peek().url in ("https://a.example", "https://b.example")
    assert manager.check_consistency() == []


def test_visit_unknown_url(manager) -> None:
    assert manager.record_visit("https://nowhere.example") == (None, NOT_FOUND)
    assert manager.recent_list.get_size() == 0


def test_heap_root_tracks_minimum_across_visits(manager) -> None:
    _add_abc(manager)
    for url in ["https://a.example"] * 3 + ["https://b.example", "https://c.example"] * 2:
        manager.record_visit(url)
        lowest = min(b.visit_count for b in manager.hash_index.values())
        assert manager.min_heap.peek().visit_count == lowest
    assert manager.check_consistency() == []


def test_recent_ordering_after_repeat_visit(manager) -> None:
    _add_abc(manager)
    manager.record_visit("https://a.example")
    manager.record_visit("https://b.example")
    manager.record_visit("https://a.example")

    assert [b.url for b in manager.get_recent()] == ["https://a.example", "https://b.example"]


def test_recent_list_is_bounded(manager) -> None:
    for i in range(30):
        manager.add_bookmark(f"Site {i}", f"https://s{i}.example", "Dev")
        manager.record_visit(f"https://s{i}.example")

    recent = manager.get_recent()
    assert len(recent) == 20
    assert recent[0].url == "https://s29.example"
    assert manager.check_consistency() == []


def test_search_resolves_through_hash_index(manager) -> None:
    manager.add_bookmark("GitHub", "https://github.com", "Dev")
    manager.add_bookmark("GitLab", "https://gitlab.com", "Dev")
    manager.add_bookmark("Google", "https://google.com", "Search")

    assert {b.title for b in manager.search("Git")} == {"GitHub", "GitLab"}
    assert {b.title for b in manager.search("git")} == {"GitHub", "GitLab"}
    assert manager.search("xyz") == []
    assert manager.search("") == []
    assert manager.search("   ") == []
    assert len(manager.search("g", limit=2)) == 2


def test_delete_removes_from_all_structures(manager) -> None:
    _add_abc(manager)
    manager.record_visit("https://b.example")

    bookmark, error = manager.delete_bookmark("https://b.example")

    assert error is None
    assert bookmark.title == "Beta"
    assert not manager.hash_index.contains("https://b.example")
    assert not manager.title_trie.search("beta")
    assert not manager.recent_list.contains("https://b.example")
    assert not manager.min_heap.contains("https://b.example")
    assert manager.check_consistency() == []

    assert manager.delete_bookmark("https://b.example") == (None, NOT_FOUND)


def test_delete_keeps_shared_title_searchable(manager) -> None:
    manager.add_bookmark("News", "https://a.example", "News")
    manager.add_bookmark("news", "https://b.example", "News")

    manager.delete_bookmark("https://a.example")

    assert manager.title_trie.search("news")
    assert [b.url for b in manager.search("ne")] == ["https://b.example"]

    manager.delete_bookmark("https://b.example")
    assert not manager.title_trie.search("news")


def test_deleted_url_can_be_added_again(manager) -> None:
    manager.add_bookmark("GitHub", "https://github.com", "Dev")
    manager.record_visit("https://github.com")
    manager.delete_bookmark("https://github.com")

    bookmark, error = manager.add_bookmark("GitHub", "https://github.com", "Dev")
    assert error is None
    assert bookmark.visit_count == 0


def test_least_visited_is_repeatable(manager) -> None:
    manager.add_bookmark("A", "https://a.example", "Dev")
    manager.add_bookmark("B", "https://b.example", "Dev")
    manager.add_bookmark("C", "https://c.example", "Dev")
    for _ in range(3):
        manager.record_visit("https://a.example")
    manager.record_visit("https://b.example")

    first = [b.url for b in manager.get_least_visited(2)]
    assert first == ["https://c.example", "https://b.example"]
    assert [b.url for b in manager.get_least_visited(2)] == first


def test_get_bookmarks_filters_and_sorts(manager) -> None:
    _add_abc(manager)
    a = manager.get_bookmark("https://a.example")
    b = manager.get_bookmark("https://b.example")
    c = manager.get_bookmark("https://c.example")
    a.created_at = c.created_at - timedelta(hours=2)
    b.created_at = c.created_at - timedelta(hours=1)
    manager.record_visit("https://a.example")
    manager.record_visit("https://a.example")
    manager.record_visit("https://b.example")
    a.last_visited = c.created_at + timedelta(hours=1)
    b.last_visited = c.created_at + timedelta(hours=2)

    assert [x.title for x in manager.get_bookmarks(sort_by="name")] == ["Alpha", "Beta", "Gamma"]
    assert [x.title for x in manager.get_bookmarks(sort_by="visits")] == ["Alpha", "Beta", "Gamma"]
    assert [x.title for x in manager.get_bookmarks(sort_by="recent")][0] == "Beta"
    assert [x.title for x in manager.get_bookmarks(categories=["News"])] == ["Gamma"]

    with pytest.raises(ValueError):
        manager.get_bookmarks(sort_by="random")


def test_categories_and_stats(manager) -> None:
    _add_abc(manager)
    manager.record_visit("https://a.example")
    assert manager.add_category("  Reading ") == "Reading"
    assert manager.add_category("   ") is None

    assert manager.get_categories() == ["Dev", "News", "Reading", "Uncategorized"]
    assert manager.get_stats() == {
        "total_bookmarks": 3,
        "max_bookmarks": 100,
        "usage_percent": 3,
        "recent_count": 1,
        "category_count": 4,
        "total_visits": 1,
    }


def test_seed_sample_bookmarks(manager) -> None:
    assert manager.seed_sample_bookmarks() == len(SAMPLE_BOOKMARKS)
    assert manager.seed_sample_bookmarks() == 0
    assert manager.hash_index.count() == len(SAMPLE_BOOKMARKS)
    assert manager.check_consistency() == []


def test_check_consistency_reports_drift(manager) -> None:
    _add_abc(manager)
    manager.min_heap.delete("https://a.example")
    assert any("heap size" in problem for problem in manager.check_consistency())


def test_random_operation_sequence_stays_consistent() -> None:
    rng = random.Random(1234)
    manager = BookmarkManager(max_bookmarks=15, recent_size=5)
    titles = ["Git", "GitHub", "GitLab", "News", "news", "Docs", "Mail"]
    expected_visits = {}

    for step in range(600):
        url = f"https://site{rng.randrange(25)}.example"
        action = rng.choice(["add", "add", "visit", "visit", "visit", "delete"])

        if action == "add":
            bookmark, error = manager.add_bookmark(rng.choice(titles), url, "Dev")
            if error is None:
                expected_visits[url] = 0
            else:
                assert error in (DUPLICATE_URL, CAPACITY_EXCEEDED)
        elif action == "visit":
            bookmark, error = manager.record_visit(url)
            if url in expected_visits:
                expected_visits[url] += 1
                assert bookmark.visit_count == expected_visits[url]
            else:
                assert error == NOT_FOUND
        else:
            bookmark, error = manager.delete_bookmark(url)
            assert (error is None) == (url in expected_visits)
            expected_visits.pop(url, None)

        assert manager.check_consistency() == [], f"step {step}: {action} {url}"
        assert manager.hash_index.count() == len(expected_visits) <= 15
        assert len(manager.get_recent()) <= 5
