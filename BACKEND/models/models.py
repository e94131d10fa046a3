"""
Bookmark Model

The single in-memory record shared by every data structure of the index.
There is no database: one Bookmark object exists per URL and the HashIndex,
RecentList and MinHeap all hold a reference to that same object.

Author: Bookmark Index Team
"""

from datetime import datetime

import pytz


# Rejection reasons returned by BookmarkManager as the error half of (result, error)
MISSING_FIELD = 'missing_field'
DUPLICATE_URL = 'duplicate_url'
CAPACITY_EXCEEDED = 'capacity_exceeded'
NOT_FOUND = 'not_found'

ERROR_MESSAGES = {
    MISSING_FIELD: 'All fields are required!',
    DUPLICATE_URL: 'Bookmark with this URL already exists!',
    CAPACITY_EXCEEDED: 'Bookmark limit reached!',
    NOT_FOUND: 'Bookmark not found.',
}


def utc_now():
    """Current time as an aware UTC datetime."""
    return datetime.now(pytz.UTC)


class Bookmark:
    """
    Bookmark record

    Attributes:
        url (str): Unique key
        title (str): Display title, indexed case-insensitively by the trie
        category (str): Free-form category name
        visit_count (int): Number of recorded visits, starts at 0
        created_at (datetime): Creation time (UTC)
        last_visited (datetime): Time of the latest visit, None until visited
    """

    __slots__ = ('url', 'title', 'category', 'visit_count', 'created_at', 'last_visited')

    def __init__(self, url, title, category, created_at=None):
        self.url = url
        self.title = title
        self.category = category
        self.visit_count = 0
        self.created_at = created_at or utc_now()
        self.last_visited = None

    def record_visit(self, now=None):
        """Increment the visit counter and stamp last_visited."""
        self.visit_count += 1
        self.last_visited = now or utc_now()
        return self.visit_count

    @property
    def last_activity(self):
        """Latest of last_visited and created_at, used for 'recent' sorting."""
        return self.last_visited or self.created_at

    def to_dict(self):
        return {
            'url': self.url,
            'title': self.title,
            'category': self.category,
            'visit_count': self.visit_count,
            'created_at': self.created_at.isoformat(),
            'last_visited': self.last_visited.isoformat() if self.last_visited else None,
        }

    def __repr__(self):
        return f'<Bookmark {self.url!r} visits={self.visit_count}>'
