"""
Timestamp display helpers for bookmark payloads
"""

import pytz

from models import utc_now


def to_local(dt, tz_name='UTC'):
    """Convert a datetime to the given timezone. Naive values are taken as UTC."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = pytz.UTC.localize(dt)
    return dt.astimezone(pytz.timezone(tz_name))


def format_time_ago(dt, now=None):
    """
    Short relative time, e.g. 'Just now', '5m ago', '3h ago', '2d ago'.
    Anything a week or older falls back to the date.
    """
    if dt is None:
        return 'Never'
    now = now or utc_now()
    if dt.tzinfo is None:
        dt = pytz.UTC.localize(dt)

    seconds = int((now - dt).total_seconds())
    minutes = seconds // 60
    hours = minutes // 60
    days = hours // 24

    if minutes < 1:
        return 'Just now'
    if minutes < 60:
        return f'{minutes}m ago'
    if hours < 24:
        return f'{hours}h ago'
    if days < 7:
        return f'{days}d ago'
    return dt.strftime('%Y-%m-%d')


def serialize_bookmark(bookmark, tz_name='UTC', now=None):
    """Bookmark as a JSON-ready dict with display-friendly timestamps."""
    data = bookmark.to_dict()
    last_visited = to_local(bookmark.last_visited, tz_name)
    data['last_visited_display'] = last_visited.strftime('%Y-%m-%d %I:%M %p') if last_visited else None
    data['last_visited_ago'] = format_time_ago(bookmark.last_visited, now)
    return data
