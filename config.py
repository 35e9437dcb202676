import os
from dotenv import load_dotenv

# Load .env file only in development environment
if os.environ.get('FLASK_ENV') != 'production':
    load_dotenv()

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY', 'a_very_secret_key_for_dev')
    MONGO_URI = os.environ.get('MONGODB_URI')
    MONGO_DB_NAME = os.environ.get('MONGODB_DB_NAME', 'articlehub')
    # Requires a replica set; standalone servers reject transactions
    MONGO_TRANSACTIONS = os.environ.get('MONGODB_TRANSACTIONS', 'False').lower() == 'true'
    FLASK_ENV = os.environ.get('FLASK_ENV', 'development')
    FLASK_DEBUG = os.environ.get('FLASK_DEBUG', 'False').lower() == 'true'
    DEFAULT_PAGE_LIMIT = int(os.environ.get('DEFAULT_PAGE_LIMIT', 15))
    MAX_PAGE_LIMIT = int(os.environ.get('MAX_PAGE_LIMIT', 100))
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*')
    ARTICLES_API_URL = os.environ.get('ARTICLES_API_URL', 'http://localhost:5000/api/articles')
    VIEWER_TIMEOUT_SECONDS = float(os.environ.get('VIEWER_TIMEOUT_SECONDS', 10))
    VIEWER_PAGE_LIMIT = int(os.environ.get('VIEWER_PAGE_LIMIT', 100))

    if not MONGO_URI:
        raise ValueError("No MONGODB_URI provided in environment variables")

class DevelopmentConfig(Config):
    DEBUG = True

class ProductionConfig(Config):
    DEBUG = False
    FLASK_ENV = 'production'

def get_config():
    env = os.environ.get('FLASK_ENV', 'development')
    if env == 'development':
        return DevelopmentConfig
    return ProductionConfig
