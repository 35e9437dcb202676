from flask import Flask
from flask_cors import CORS
import logging
from pymongo import MongoClient
from pymongo.errors import ConnectionFailure
from typing import Optional

# Initialize these at module level
mongo_client: Optional[MongoClient] = None
db = None

def init_db(app, client: Optional[MongoClient] = None) -> bool:
    """Initialize database connection with proper error handling"""
    global mongo_client, db
    try:
        if client is not None:
            # Externally managed client (tests, scripts); no connectivity check
            mongo_client = client
            db = mongo_client[app.config.get('MONGO_DB_NAME', 'articlehub')]
            return True

        if not app.config.get('MONGO_URI'):
            app.logger.error("MONGO_URI configuration is missing")
            return False

        mongo_client = MongoClient(app.config['MONGO_URI'])
        # Test the connection explicitly
        mongo_client.admin.command('ping')
        db = mongo_client[app.config.get('MONGO_DB_NAME', 'articlehub')]
        app.logger.info("Successfully connected to MongoDB")
        return True

    except ConnectionFailure as e:
        app.logger.error(f"Failed to connect to MongoDB: {e}")
        return False
    except Exception as e:
        app.logger.error(f"Unexpected error connecting to MongoDB: {e}")
        return False

def create_app(config_object, mongo_client: Optional[MongoClient] = None):
    """Create and configure the Flask application"""
    app = Flask(__name__)

    # Configure logging first
    logging.basicConfig(level=logging.INFO)
    app.logger.setLevel(logging.INFO)

    # Load configuration
    try:
        app.config.from_object(config_object)
    except Exception as e:
        app.logger.error(f"Failed to load configuration: {e}")
        raise

    CORS(app, resources={r"/api/*": {"origins": app.config.get('CORS_ORIGINS', '*')}})

    # Initialize database
    if not init_db(app, mongo_client):
        app.logger.error("Failed to initialize database. Application may not function correctly.")

    # Register blueprints and initialize routes
    try:
        from .routes.main import main_bp, articles_bp, init_route_dependencies
        from .viewer.routes import viewer_bp
        from .viewer.formatting import register_template_filters
        app.register_blueprint(main_bp)
        app.register_blueprint(articles_bp)
        app.register_blueprint(viewer_bp)
        register_template_filters(app)

        # Initialize route dependencies within app context
        with app.app_context():
            init_route_dependencies(app)

    except Exception as e:
        app.logger.error(f"Failed to initialize application routes: {e}")
        raise

    return app

# Clean up resources when the application exits
def cleanup():
    global mongo_client
    if mongo_client is not None:
        try:
            mongo_client.close()
        except Exception as e:
            logging.error(f"Error closing MongoDB connection: {e}")

import atexit
atexit.register(cleanup)

__all__ = ['db', 'create_app']
