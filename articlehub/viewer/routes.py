from flask import Blueprint, current_app, render_template, request

from .client import ArticleFeedClient
from .state import load_feed

viewer_bp = Blueprint('viewer', __name__)


@viewer_bp.route('/', methods=['GET'])
def index():
    """Article pairs page; reloading it is the retry."""
    client = ArticleFeedClient(
        current_app.config.get('ARTICLES_API_URL', 'http://localhost:5000/api/articles'),
        timeout=current_app.config.get('VIEWER_TIMEOUT_SECONDS', 10),
    )
    # Pairing only sees one page: an original whose enhancement falls on
    # another page renders without it, so ask for the largest page the API allows.
    state = load_feed(
        client,
        page=request.args.get('page', type=int),
        limit=current_app.config.get('VIEWER_PAGE_LIMIT', 100),
    )
    return render_template('articles.html', state=state)
