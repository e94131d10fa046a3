import pytest

from app import create_app
from extensions import socketio
from managers import BookmarkManager


@pytest.fixture
def app():
    return create_app('testing')


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def socket_client(app):
    client = socketio.test_client(app)
    yield client
    if client.is_connected():
        client.disconnect()


@pytest.fixture
def manager():
    return BookmarkManager()


class Item:
    """Minimal stand-in for a bookmark inside RecentList / MinHeap tests."""

    def __init__(self, url, visit_count=0):
        self.url = url
        self.visit_count = visit_count

    def __repr__(self):
        return f'Item({self.url!r}, {self.visit_count})'


@pytest.fixture
def make_item():
    return Item
