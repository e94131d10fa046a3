"""
Main Flask Application for the Bookmark Index

This is the entry point of the application.
Demonstrates OOP Concept: APPLICATION FACTORY PATTERN

Author: Bookmark Index Team
Purpose: Initialize and configure Flask application
"""

from flask import Flask, jsonify
import os
from dotenv import load_dotenv

# Load environment variables first
load_dotenv()

from config import get_config
from extensions import socketio, compress
from managers import bookmark_manager


def create_app(config_name='default'):
    """
    Application Factory Function

    OOP Concept: FACTORY PATTERN
    - Creates and configures Flask application instance
    - Allows multiple app instances with different configurations

    Each call resets the process-wide bookmark index to match the new config.

    Args:
        config_name (str): Configuration name ('development', 'production', 'testing')

    Returns:
        Flask: Configured Flask application
    """
    app = Flask(__name__)

    # Load configuration
    config_class = get_config(config_name)
    app.config.from_object(config_class)
    app.logger.setLevel(app.config.get('LOG_LEVEL', 'INFO'))

    # Initialize extensions
    socketio.init_app(app)
    compress.init_app(app)
    bookmark_manager.init_app(app)

    # Register blueprints (routes)
    from routes import api_bp
    app.register_blueprint(api_bp, url_prefix='/api')

    # Error handlers
    @app.errorhandler(404)
    def not_found_error(error):
        """Handle 404 errors"""
        return jsonify({'success': False, 'error': 'not_found', 'message': 'Resource not found.'}), 404

    @app.errorhandler(405)
    def method_not_allowed_error(error):
        """Handle 405 errors"""
        return jsonify({'success': False, 'error': 'method_not_allowed', 'message': 'Method not allowed.'}), 405

    @app.errorhandler(500)
    def internal_error(error):
        """Handle 500 errors"""
        app.logger.error(f"Internal error: {error}")
        return jsonify({'success': False, 'error': 'internal_error', 'message': 'Internal server error.'}), 500

    # Register Socket.IO events
    from events import register_socketio_events
    register_socketio_events(socketio)

    app.logger.info(
        f"Bookmark index ready ({bookmark_manager.hash_index.count()} bookmarks, "
        f"limit {bookmark_manager.max_bookmarks})"
    )
    return app


if __name__ == '__main__':
    """
    Run the application

    This block only executes when running this file directly
    (not when importing as a module)
    """

    # Get configuration from environment variable or use default
    config_name = os.environ.get('FLASK_ENV', 'development')

    # Create application instance
    app = create_app(config_name)

    # Run development server with SocketIO
    socketio.run(
        app,
        host='0.0.0.0',
        port=5000,
        debug=app.config.get('DEBUG', False),
        allow_unsafe_werkzeug=True
    )
