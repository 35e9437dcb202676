"""Shared fixtures: a Flask app backed by an in-memory mongomock client."""

import os

# config.py validates the environment at import time; set required vars before
# any app modules are imported by the test collector.
os.environ.setdefault("MONGODB_URI", "mongodb://localhost:27017")
os.environ.setdefault("FLASK_ENV", "production")

import mongomock
import pytest

from articlehub import create_app
from articlehub.services.article_service import ArticleService
from config import Config


class TestConfig(Config):
    TESTING = True
    DEBUG = False
    MONGO_DB_NAME = "articlehub_test"
    MONGO_TRANSACTIONS = False
    ARTICLES_API_URL = "http://api.test/api/articles"


@pytest.fixture
def mongo_client():
    return mongomock.MongoClient()


@pytest.fixture
def app(mongo_client):
    return create_app(TestConfig, mongo_client=mongo_client)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def service(mongo_client) -> ArticleService:
    return ArticleService(mongo_client["articlehub_test"])


@pytest.fixture
def make_article(service):
    """Creates an article through the service with sensible defaults."""

    def _make(title="An article", content="Some body text", **fields):
        return service.create_article({"title": title, "content": content, **fields})

    return _make
