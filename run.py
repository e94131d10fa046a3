"""
Bookmark Index Application Runner
Run this file from root directory to start the application
"""
import sys
import os
import logging

# Store the absolute root directory
ROOT_DIR = os.path.abspath(os.path.dirname(__file__))

# Add BACKEND folders to Python path (using absolute paths)
sys.path.insert(0, os.path.join(ROOT_DIR, 'BACKEND', 'core'))
sys.path.insert(0, os.path.join(ROOT_DIR, 'BACKEND', 'models'))
sys.path.insert(0, os.path.join(ROOT_DIR, 'BACKEND', 'routes'))
sys.path.insert(0, os.path.join(ROOT_DIR, 'BACKEND', 'services'))
sys.path.insert(0, ROOT_DIR)

# Import and run the app
from app import create_app
from extensions import socketio

if __name__ == '__main__':
    config_name = os.environ.get('FLASK_ENV', 'development')

    # Create app instance
    app = create_app(config_name)
    logging.basicConfig(
        level=app.config.get('LOG_LEVEL', 'INFO'),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    print("=" * 60)
    print("Bookmark Index Starting...")
    print("=" * 60)
    print("URL: http://localhost:5000/api/bookmarks")
    print(f"Bookmarks loaded: {app.extensions['bookmark_manager'].hash_index.count()}")
    print("=" * 60)

    # Run with SocketIO
    socketio.run(app, debug=app.config.get('DEBUG', False), host='0.0.0.0', port=5000,
                 allow_unsafe_werkzeug=True, use_reloader=False)
