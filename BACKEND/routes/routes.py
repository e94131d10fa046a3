"""
Flask Routes (Controllers) for the Bookmark Index

This module contains the JSON API blueprint.
Demonstrates MVC Pattern: Routes act as Controllers, BookmarkManager is the model

Blueprints:
- api_bp: JSON API endpoints (mounted at /api)

URLs are passed as query parameters or JSON fields, never as path segments,
since bookmark URLs contain slashes.

Author: Bookmark Index Team
Purpose: Handle HTTP requests and responses
"""

from flask import Blueprint, request, jsonify, current_app

from managers import bookmark_manager, SORT_KEYS
from models import (ERROR_MESSAGES, MISSING_FIELD, DUPLICATE_URL, CAPACITY_EXCEEDED,
                    NOT_FOUND)
from formatting import serialize_bookmark
from extensions import socketio
from events import broadcast_update


api_bp = Blueprint('api', __name__)


ERROR_STATUS = {
    MISSING_FIELD: 400,
    DUPLICATE_URL: 409,
    CAPACITY_EXCEEDED: 409,
    NOT_FOUND: 404,
}


# ============================================================================
# HELPERS
# ============================================================================

def error_response(error):
    """JSON body + status code for a manager error code."""
    message = ERROR_MESSAGES.get(error, error)
    if error == CAPACITY_EXCEEDED:
        message = f'Bookmark limit ({bookmark_manager.max_bookmarks}) reached!'
    return jsonify({'success': False, 'error': error, 'message': message}), ERROR_STATUS.get(error, 400)


def bad_request(message):
    return jsonify({'success': False, 'error': 'bad_request', 'message': message}), 400


def json_body():
    """Request JSON as a dict; anything else (missing, invalid, a list) becomes {}."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def str_field(data, name):
    """A non-empty string field from a JSON body, or None."""
    value = data.get(name)
    return value if isinstance(value, str) and value.strip() else None


def serialize_all(bookmarks):
    tz_name = current_app.config.get('DISPLAY_TIMEZONE', 'UTC')
    return [serialize_bookmark(b, tz_name) for b in bookmarks]


def int_arg(name, default):
    """Read a positive integer query parameter. Raises ValueError on bad input."""
    value = request.args.get(name)
    if value is None or value == '':
        return default
    number = int(value)
    if number < 0:
        raise ValueError(name)
    return number


# ============================================================================
# BOOKMARK ROUTES
# ============================================================================

@api_bp.route('/bookmarks', methods=['GET'])
def list_bookmarks():
    """
    List bookmarks

    Query params:
        category (repeatable): keep only these categories
        sort: 'recent' (default), 'name' or 'visits'
    """
    sort_by = request.args.get('sort', 'recent')
    if sort_by not in SORT_KEYS:
        return bad_request(f"sort must be one of {', '.join(SORT_KEYS)}")

    categories = [c for c in request.args.getlist('category') if c]
    bookmarks = bookmark_manager.get_bookmarks(categories=categories, sort_by=sort_by)
    return jsonify({'bookmarks': serialize_all(bookmarks), 'count': len(bookmarks)})


@api_bp.route('/bookmarks', methods=['POST'])
def add_bookmark():
    """Add a bookmark from JSON {title, url, category}"""
    data = json_body()
    bookmark, error = bookmark_manager.add_bookmark(
        data.get('title'), data.get('url'), data.get('category')
    )
    if error:
        return error_response(error)

    broadcast_update(socketio, 'added', bookmark.url)
    return jsonify({
        'success': True,
        'message': 'Bookmark added successfully!',
        'bookmark': serialize_all([bookmark])[0],
    }), 201


@api_bp.route('/bookmarks/lookup', methods=['GET'])
def get_bookmark():
    """Fetch one bookmark by ?url="""
    bookmark = bookmark_manager.get_bookmark(request.args.get('url', ''))
    if bookmark is None:
        return error_response(NOT_FOUND)
    return jsonify({'bookmark': serialize_all([bookmark])[0]})


@api_bp.route('/bookmarks/visit', methods=['POST'])
def visit_bookmark():
    """Record a visit from JSON {url}"""
    data = json_body()
    url = str_field(data, 'url')
    if url is None:
        return error_response(MISSING_FIELD)

    bookmark, error = bookmark_manager.record_visit(url)
    if error:
        return error_response(error)

    broadcast_update(socketio, 'visited', url)
    return jsonify({'success': True, 'bookmark': serialize_all([bookmark])[0]})


@api_bp.route('/bookmarks', methods=['DELETE'])
def delete_bookmark():
    """Delete the bookmark given by ?url="""
    url = request.args.get('url')
    if not url:
        return error_response(MISSING_FIELD)

    bookmark, error = bookmark_manager.delete_bookmark(url)
    if error:
        return error_response(error)

    broadcast_update(socketio, 'deleted', url)
    return jsonify({'success': True, 'message': 'Bookmark deleted!', 'url': url})


@api_bp.route('/bookmarks/recent', methods=['GET'])
def recent_bookmarks():
    """Recently visited bookmarks, newest first"""
    return jsonify({'bookmarks': serialize_all(bookmark_manager.get_recent())})


@api_bp.route('/bookmarks/least-visited', methods=['GET'])
def least_visited_bookmarks():
    """The k least visited bookmarks (?k=, default from config)"""
    try:
        k = int_arg('k', current_app.config.get('LEAST_VISITED_DEFAULT', 5))
    except ValueError:
        return bad_request('k must be a non-negative integer')
    return jsonify({'bookmarks': serialize_all(bookmark_manager.get_least_visited(k))})


# ============================================================================
# SEARCH / CATEGORY / STATS ROUTES
# ============================================================================

@api_bp.route('/search', methods=['GET'])
def search():
    """
    Autocomplete by title prefix

    Query params:
        q: prefix (case-insensitive)
        limit: maximum results (default SEARCH_RESULT_LIMIT)
    """
    query = request.args.get('q', '')
    try:
        limit = int_arg('limit', current_app.config.get('SEARCH_RESULT_LIMIT', 8))
    except ValueError:
        return bad_request('limit must be a non-negative integer')

    results = bookmark_manager.search(query, limit=limit)
    return jsonify({'query': query, 'results': serialize_all(results)})


@api_bp.route('/categories', methods=['GET'])
def list_categories():
    return jsonify({'categories': bookmark_manager.get_categories()})


@api_bp.route('/categories', methods=['POST'])
def add_category():
    """Register a category from JSON {name}"""
    data = json_body()
    name = bookmark_manager.add_category(data.get('name'))
    if name is None:
        return error_response(MISSING_FIELD)
    return jsonify({'success': True, 'category': name,
                    'categories': bookmark_manager.get_categories()}), 201


@api_bp.route('/stats', methods=['GET'])
def stats():
    return jsonify(bookmark_manager.get_stats())
