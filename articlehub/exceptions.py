"""Errors raised by the article service and translated by the routes."""


class ArticleNotFoundError(Exception):
    """Raised when an article id is malformed or matches no document."""

    def __init__(self, article_id):
        self.article_id = article_id
        super().__init__(f"Article with id '{article_id}' not found")


class ArticleValidationError(Exception):
    """Raised when submitted article fields break the schema or its invariants."""

    def __init__(self, message: str, errors: list | None = None):
        self.message = message
        self.errors = errors or []
        super().__init__(message)


class ArticleStoreError(Exception):
    """Raised when MongoDB fails for any other reason."""

    def __init__(self, operation: str, cause: Exception):
        self.operation = operation
        self.cause = cause
        super().__init__(f"Store failure during {operation}: {cause}")
