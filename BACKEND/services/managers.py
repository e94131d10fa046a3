"""
Business Logic Managers for the Bookmark Index

This module holds the coordinator that keeps the four custom data structures
in step with each other:
- HashIndex:  URL -> Bookmark, duplicate detection and O(1) lookup
- TitleTrie:  title autocomplete
- RecentList: last visited bookmarks, newest first
- MinHeap:    least visited bookmarks

Every mutation validates first, then fans out to the structures in a fixed
order. Validation failures are returned as (None, error) and leave every
structure untouched.

Author: Bookmark Index Team
Purpose: Centralized bookmark logic, separate from routes (MVC pattern)
"""

import logging

from data_structures import HashIndex, TitleTrie, RecentList, MinHeap
from models import (Bookmark, MISSING_FIELD, DUPLICATE_URL, CAPACITY_EXCEEDED,
                    NOT_FOUND)


DEFAULT_CATEGORY = 'Uncategorized'

SAMPLE_BOOKMARKS = [
    ('GitHub', 'https://github.com', 'Development'),
    ('Stack Overflow', 'https://stackoverflow.com', 'Development'),
    ('MDN Web Docs', 'https://developer.mozilla.org', 'Learning'),
    ('YouTube', 'https://youtube.com', 'Entertainment'),
    ('Twitter', 'https://twitter.com', 'Social'),
    ('LinkedIn', 'https://linkedin.com', 'Professional'),
    ('Medium', 'https://medium.com', 'Learning'),
    ('Figma', 'https://figma.com', 'Design'),
]

SORT_KEYS = ('recent', 'name', 'visits')


def _clean(value):
    """Stripped string, or '' for anything that is not a string."""
    return value.strip() if isinstance(value, str) else ''


class BookmarkManager:
    """
    Bookmark Manager Class - Owns the bookmark index

    OOP Concepts:
    - ENCAPSULATION: The four structures are only mutated from here
    - ABSTRACTION: add / visit / delete hide the multi-structure bookkeeping
    - SINGLETON PATTERN: One module-level instance per process

    Data Structures Used (built from scratch in data_structures.py):
    - HASH INDEX: canonical store, keyed by URL
    - TRIE: prefix search over titles
    - LINKED LIST: recently visited, capped at recent_size
    - MIN HEAP: least visited first
    """

    DEFAULT_MAX_BOOKMARKS = 100
    DEFAULT_RECENT_SIZE = 20

    def __init__(self, max_bookmarks=DEFAULT_MAX_BOOKMARKS, recent_size=DEFAULT_RECENT_SIZE):
        self.reset(max_bookmarks, recent_size)

    def reset(self, max_bookmarks=None, recent_size=None):
        """Drop every bookmark and rebuild empty structures."""
        if max_bookmarks is not None:
            self.max_bookmarks = max_bookmarks
        if recent_size is not None:
            self.recent_size = recent_size

        self.hash_index = HashIndex()
        self.title_trie = TitleTrie()
        self.recent_list = RecentList(self.recent_size)
        self.min_heap = MinHeap()
        self.categories = {DEFAULT_CATEGORY}

    def init_app(self, app):
        """
        Configure the manager from a Flask app's config.

        Reads MAX_BOOKMARKS and RECENT_LIST_SIZE, starts from an empty index
        and loads the sample bookmarks when SEED_SAMPLE_BOOKMARKS is set.
        """
        self.reset(
            app.config.get('MAX_BOOKMARKS', self.DEFAULT_MAX_BOOKMARKS),
            app.config.get('RECENT_LIST_SIZE', self.DEFAULT_RECENT_SIZE),
        )
        if app.config.get('SEED_SAMPLE_BOOKMARKS'):
            self.seed_sample_bookmarks()
        app.extensions['bookmark_manager'] = self

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add_bookmark(self, title, url, category):
        """
        Add a bookmark to all data structures

        Validation order: missing field, duplicate URL, capacity.
        Time Complexity: O(L) where L = title length (trie insert dominates)

        Args:
            title (str): Bookmark title
            url (str): Bookmark URL (unique key)
            category (str): Category name

        Returns:
            tuple: (Bookmark or None, error code or None)
        """
        title = _clean(title)
        url = _clean(url)
        category = _clean(category)

        if not title or not url or not category:
            logging.info("Rejected bookmark: missing field")
            return None, MISSING_FIELD

        if self.hash_index.contains(url):
            logging.info(f"Rejected bookmark {url}: duplicate URL")
            return None, DUPLICATE_URL

        if self.hash_index.count() >= self.max_bookmarks:
            logging.warning(f"Rejected bookmark {url}: limit of {self.max_bookmarks} reached")
            return None, CAPACITY_EXCEEDED

        bookmark = Bookmark(url=url, title=title, category=category)

        self.hash_index.put(url, bookmark)
        self.title_trie.insert(title, url)
        self.min_heap.insert(bookmark)
        self.categories.add(category)

        logging.info(f"Added bookmark {url}")
        return bookmark, None

    def record_visit(self, url):
        """
        Record a visit to a bookmark

        Increments the visit count, re-keys the heap and moves the bookmark
        to the front of the recent list (inserting it if it is not there).
        Time Complexity: O(n) for the heap and list scans

        Returns:
            tuple: (Bookmark or None, error code or None)
        """
        if not isinstance(url, str):
            return None, NOT_FOUND
        bookmark = self.hash_index.get(url)
        if bookmark is None:
            return None, NOT_FOUND

        bookmark.record_visit()
        self.min_heap.update_key(url, bookmark.visit_count)
        if not self.recent_list.move_to_front(url):
            self.recent_list.insert_at_beginning(bookmark)

        logging.info(f"Visited {url} ({bookmark.visit_count} visits)")
        return bookmark, None

    def delete_bookmark(self, url):
        """
        Delete a bookmark from all data structures

        Time Complexity: O(L + n) where L = title length, n = heap size

        Returns:
            tuple: (deleted Bookmark or None, error code or None)
        """
        if not isinstance(url, str):
            return None, NOT_FOUND
        bookmark = self.hash_index.get(url)
        if bookmark is None:
            return None, NOT_FOUND

        self.hash_index.delete(url)
        self.title_trie.delete(bookmark.title, url)
        self.recent_list.delete(url)
        self.min_heap.delete(url)

        logging.info(f"Deleted bookmark {url}")
        return bookmark, None

    def add_category(self, name):
        """Register a category without a bookmark. Returns the stripped name or None."""
        name = _clean(name)
        if not name:
            return None
        self.categories.add(name)
        return name

    def seed_sample_bookmarks(self):
        """Load the built-in sample bookmarks. Returns how many were added."""
        added = 0
        for title, url, category in SAMPLE_BOOKMARKS:
            bookmark, error = self.add_bookmark(title, url, category)
            if bookmark:
                added += 1
        return added

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_bookmark(self, url):
        return self.hash_index.get(url)

    def search(self, prefix, limit=None):
        """
        Autocomplete bookmarks by title prefix

        Algorithm:
        1. Walk the trie to the prefix node - O(P)
        2. Collect every title below it
        3. Resolve each URL back through the hash index - O(1) each

        Returns:
            list: Bookmark objects whose title starts with prefix
        """
        if not _clean(prefix):
            return []

        results = []
        for match in self.title_trie.search_by_prefix(prefix):
            if limit is not None and len(results) >= limit:
                break
            bookmark = self.hash_index.get(match['url'])
            if bookmark is not None:
                results.append(bookmark)
        return results

    def get_recent(self):
        """Recently visited bookmarks, most recent first."""
        return self.recent_list.get_all()

    def get_least_visited(self, k=5):
        """The k least visited bookmarks, ascending by visit count."""
        return self.min_heap.get_least_visited(k)

    def get_bookmarks(self, categories=None, sort_by='recent'):
        """
        All bookmarks, optionally filtered by category and sorted

        Args:
            categories (iterable): Keep only these categories (empty = all)
            sort_by (str): 'recent', 'name' or 'visits'

        Returns:
            list: Bookmark objects
        """
        if sort_by not in SORT_KEYS:
            raise ValueError(f"unknown sort key {sort_by!r}")

        bookmarks = self.hash_index.values()
        if categories:
            wanted = set(categories)
            bookmarks = [b for b in bookmarks if b.category in wanted]

        if sort_by == 'recent':
            bookmarks.sort(key=lambda b: b.last_activity, reverse=True)
        elif sort_by == 'name':
            bookmarks.sort(key=lambda b: b.title.lower())
        else:
            bookmarks.sort(key=lambda b: b.visit_count, reverse=True)
        return bookmarks

    def get_categories(self):
        return sorted(self.categories)

    def get_stats(self):
        """
        Calculate index statistics

        Returns:
            dict: counts and usage percentage
        """
        count = self.hash_index.count()
        return {
            'total_bookmarks': count,
            'max_bookmarks': self.max_bookmarks,
            'usage_percent': round(count / self.max_bookmarks * 100) if self.max_bookmarks else 0,
            'recent_count': self.recent_list.get_size(),
            'category_count': len(self.categories),
            'total_visits': sum(b.visit_count for b in self.hash_index.values()),
        }

    def check_consistency(self):
        """
        Verify the cross-structure invariants

        Returns:
            list: Human-readable violations (empty when consistent)
        """
        problems = []
        count = self.hash_index.count()

        if self.min_heap.size() != count:
            problems.append(f"heap size {self.min_heap.size()} != index count {count}")

        if self.recent_list.get_size() > self.recent_list.get_max_size():
            problems.append("recent list exceeds its capacity")

        for bookmark in self.recent_list.get_all():
            if not self.hash_index.contains(bookmark.url):
                problems.append(f"recent list holds deleted {bookmark.url}")

        for url, priority in self.min_heap.priorities():
            bookmark = self.hash_index.get(url)
            if bookmark is None:
                problems.append(f"heap holds deleted {url}")
            elif bookmark.visit_count != priority:
                problems.append(f"heap key {priority} != visit count {bookmark.visit_count} for {url}")

        if count and self.min_heap.size():
            lowest = min(b.visit_count for b in self.hash_index.values())
            if self.min_heap.peek().visit_count != lowest:
                problems.append("heap root is not the least visited bookmark")

        for bookmark in self.hash_index.values():
            if not self.title_trie.search(bookmark.title):
                problems.append(f"title {bookmark.title!r} missing from trie")

        return problems


# Global bookmark manager instance
bookmark_manager = BookmarkManager()
