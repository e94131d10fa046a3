"""
Socket.IO Event Handlers for live bookmark updates

Clients get the index stats on connect, can run autocomplete over the socket
and record visits without a page round-trip.
"""

from flask import current_app
from flask_socketio import emit

from managers import bookmark_manager
from models import ERROR_MESSAGES, MISSING_FIELD
from formatting import serialize_bookmark


def _payload(data):
    return data if isinstance(data, dict) else {}


def broadcast_update(socketio, action, url):
    """Tell every connected client that the index changed."""
    socketio.emit('bookmarks_updated', {
        'action': action,
        'url': url,
        'stats': bookmark_manager.get_stats(),
    })


def register_socketio_events(socketio):
    """Register all socket.io event handlers"""

    @socketio.on('connect')
    def handle_connect():
        """Send the current stats to the new client"""
        emit('bookmark_stats', bookmark_manager.get_stats())

    @socketio.on('search')
    def handle_search(data):
        """Autocomplete over the socket"""
        query = _payload(data).get('query', '')
        if not isinstance(query, str):
            query = ''
        limit = current_app.config.get('SEARCH_RESULT_LIMIT', 8)
        tz_name = current_app.config.get('DISPLAY_TIMEZONE', 'UTC')
        results = bookmark_manager.search(query, limit=limit)
        emit('search_results', {
            'query': query,
            'results': [serialize_bookmark(b, tz_name) for b in results],
        })

    @socketio.on('visit_bookmark')
    def handle_visit(data):
        """Record a visit and broadcast the change"""
        url = _payload(data).get('url')
        if not isinstance(url, str) or not url:
            emit('error', {'error': MISSING_FIELD, 'message': ERROR_MESSAGES[MISSING_FIELD]})
            return

        bookmark, error = bookmark_manager.record_visit(url)
        if error:
            emit('error', {'error': error, 'message': ERROR_MESSAGES[error]})
            return

        broadcast_update(socketio, 'visited', url)
