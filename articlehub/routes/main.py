from datetime import datetime, timezone
from flask import Blueprint, request, jsonify, current_app
import importlib
import uuid
from typing import Optional

from ..exceptions import ArticleNotFoundError, ArticleValidationError
from ..services.query_builder import build_article_query
from ..utils.serialization import serialize_article

# Initialize the blueprints
main_bp = Blueprint('main', __name__)
articles_bp = Blueprint('articles', __name__, url_prefix='/api/articles')

# Initialize variables that will be set up during init_route_dependencies
article_service: Optional[object] = None  # Will be initialized as ArticleService
db: Optional[object] = None  # Will be initialized as pymongo.database.Database

def init_route_dependencies(app):
    """Initialize dependencies after app context is created"""
    global article_service, db

    # Import the database handle set up by create_app
    app_module = importlib.import_module('articlehub')
    db = getattr(app_module, 'db')

    if db is None:
        app.logger.error("Database connection not initialized")
        raise RuntimeError("Database connection not initialized")

    try:
        from ..services.article_service import ArticleService
        article_service = ArticleService(db, use_transactions=app.config.get('MONGO_TRANSACTIONS', False))
        article_service.ensure_indexes()
    except Exception as e:
        app.logger.error(f"Failed to initialize ArticleService: {e}")
        raise

def _not_found():
    return jsonify({"success": False, "message": "Article not found"}), 404

def _bad_request(message):
    return jsonify({"success": False, "message": message}), 400

def _server_error(context, error):
    """Logs the failure under a reference id and returns only that id to the client."""
    reference = uuid.uuid4().hex[:12]
    current_app.logger.error(f"Error in {context} [ref {reference}]: {error}", exc_info=True)
    return jsonify({"success": False, "message": "Server Error", "error": f"ref-{reference}"}), 500

def _json_body():
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else None

@main_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    try:
        if db is None:
            raise RuntimeError("Database not initialized")
        db.command('ping')
        mongo_status = "connected"
    except Exception as e:
        mongo_status = f"disconnected: {e}"

    return jsonify({
        "status": "ok",
        "message": "ArticleHub backend is healthy!",
        "dependencies": {
            "mongodb": mongo_status
        },
        "timestamp": datetime.now(timezone.utc).isoformat()
    }), 200

@articles_bp.route('', methods=['GET'])
def get_articles():
    """
    API endpoint to retrieve a page of articles, newest first.
    Query parameters: type, includeAll, page, limit
    """
    query = build_article_query(
        request.args,
        default_limit=current_app.config.get('DEFAULT_PAGE_LIMIT', 15),
        max_limit=current_app.config.get('MAX_PAGE_LIMIT', 100),
    )
    try:
        result = article_service.list_articles(query)
    except Exception as e:
        return _server_error("get_articles", e)

    return jsonify({
        "success": True,
        "count": len(result.articles),
        "total": result.total,
        "page": result.page,
        "pages": result.pages,
        "data": [serialize_article(a) for a in result.articles]
    }), 200

@articles_bp.route('/<article_id>', methods=['GET'])
def get_article_detail(article_id):
    """
    API endpoint to retrieve a single article and, for originals, its updated versions.
    """
    try:
        article = article_service.get_article(article_id)
    except ArticleNotFoundError:
        return _not_found()
    except Exception as e:
        return _server_error("get_article", e)
    return jsonify({"success": True, "data": serialize_article(article)}), 200

@articles_bp.route('', methods=['POST'])
def create_article():
    """
    API endpoint to store a new article.
    Expects JSON body: {"title": "...", "content": "...", "type": "updated", "originalArticleId": "..."}
    """
    data = _json_body()
    if data is None:
        return _bad_request("Request body must be a JSON object")

    try:
        article = article_service.create_article(data)
    except ArticleValidationError as e:
        return _bad_request(e.message)
    except Exception as e:
        return _server_error("create_article", e)

    return jsonify({
        "success": True,
        "message": "Article created successfully",
        "data": serialize_article(article)
    }), 201

@articles_bp.route('/<article_id>', methods=['PUT'])
def update_article(article_id):
    """
    API endpoint to overwrite the provided fields of an article.
    """
    data = _json_body()
    if data is None:
        return _bad_request("Request body must be a JSON object")

    try:
        article = article_service.update_article(article_id, data)
    except ArticleNotFoundError:
        return _not_found()
    except ArticleValidationError as e:
        return _bad_request(e.message)
    except Exception as e:
        return _server_error("update_article", e)

    return jsonify({
        "success": True,
        "message": "Article updated successfully",
        "data": serialize_article(article)
    }), 200

@articles_bp.route('/<article_id>', methods=['DELETE'])
def delete_article(article_id):
    """
    API endpoint to delete an article; deleting an original removes its updated versions too.
    """
    try:
        article_service.delete_article(article_id)
    except ArticleNotFoundError:
        return _not_found()
    except Exception as e:
        return _server_error("delete_article", e)

    return jsonify({
        "success": True,
        "message": "Article deleted successfully",
        "data": {}
    }), 200
