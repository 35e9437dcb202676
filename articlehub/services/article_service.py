import logging
from datetime import datetime, timezone
from dataclasses import dataclass

from bson.objectid import ObjectId
from pydantic import ValidationError
from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.errors import PyMongoError

from ..exceptions import ArticleNotFoundError, ArticleStoreError, ArticleValidationError
from ..models.article import ArticleCreate, ArticleType, ArticleUpdate, to_bson_datetime
from .query_builder import ArticleQuery

logger = logging.getLogger(__name__)

# createdAt alone is not unique; _id breaks ties so pages never reorder between calls
NEWEST_FIRST = [("createdAt", DESCENDING), ("_id", DESCENDING)]
LIST_REFERENCE_FIELDS = {"title": 1, "url": 1}
DETAIL_REFERENCE_FIELDS = {"title": 1, "url": 1, "content": 1}


@dataclass
class ArticlePage:
    articles: list
    total: int
    page: int
    limit: int

    @property
    def pages(self) -> int:
        return -(-self.total // self.limit) if self.limit else 0


def _object_id(article_id) -> ObjectId:
    if isinstance(article_id, ObjectId):
        return article_id
    if not ObjectId.is_valid(article_id):
        raise ArticleNotFoundError(article_id)
    return ObjectId(article_id)


def _validation_message(error: ValidationError) -> str:
    details = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"])
        message = item["msg"].removeprefix("Value error, ")
        details.append(f"{location}: {message}" if location else message)
    return "; ".join(details)


class ArticleService:
    def __init__(self, db_client, use_transactions=False):
        self.db = db_client
        self.articles_collection = self.db.get_collection('articles')
        self.use_transactions = use_transactions

    def ensure_indexes(self):
        """Creates the indexes backing the list filter and the dependents lookup."""
        try:
            self.articles_collection.create_index([("type", ASCENDING), ("createdAt", DESCENDING)])
            self.articles_collection.create_index([("originalArticleId", ASCENDING)])
        except PyMongoError as e:
            logger.error(f"Failed to create article indexes: {e}")

    def _populate(self, articles, fields):
        """Replaces originalArticleId on each article with a projection of the referenced document."""
        reference_ids = {a["originalArticleId"] for a in articles if a.get("originalArticleId")}
        if not reference_ids:
            return articles
        referenced = {
            doc["_id"]: doc
            for doc in self.articles_collection.find({"_id": {"$in": list(reference_ids)}}, fields)
        }
        for article in articles:
            if article.get("originalArticleId"):
                # A dangling reference populates to None rather than failing the read
                article["originalArticleId"] = referenced.get(article["originalArticleId"])
        return articles

    def list_articles(self, query: ArticleQuery) -> ArticlePage:
        """
        Retrieves one page of articles matching the query filter, newest first.
        """
        try:
            articles = list(
                self.articles_collection.find(query.filter)
                .sort(NEWEST_FIRST)
                .skip(query.skip)
                .limit(query.limit)
            )
            self._populate(articles, LIST_REFERENCE_FIELDS)
            total = self.articles_collection.count_documents(query.filter)
        except PyMongoError as e:
            logger.error(f"MongoDB error listing articles with filter {query.filter}: {e}")
            raise ArticleStoreError("list", e) from e

        logger.info(f"Retrieved {len(articles)} of {total} articles (page {query.page}, limit {query.limit})")
        return ArticlePage(articles=articles, total=total, page=query.page, limit=query.limit)

    def get_article(self, article_id) -> dict:
        """
        Retrieves a single article; originals also carry their updated versions.
        """
        object_id = _object_id(article_id)
        try:
            article = self.articles_collection.find_one({"_id": object_id})
            if article is None:
                logger.warning(f"Article with ID {article_id} not found.")
                raise ArticleNotFoundError(article_id)
            self._populate([article], DETAIL_REFERENCE_FIELDS)

            updated_versions = []
            if article.get("type") == ArticleType.ORIGINAL.value:
                updated_versions = list(
                    self.articles_collection.find({"originalArticleId": object_id}).sort(NEWEST_FIRST)
                )
        except PyMongoError as e:
            logger.error(f"MongoDB error fetching article by ID {article_id}: {e}")
            raise ArticleStoreError("get", e) from e

        article["updatedVersions"] = updated_versions
        return article

    def create_article(self, fields: dict) -> dict:
        if not fields.get("title") or not fields.get("content"):
            raise ArticleValidationError("Please provide title and content")
        if fields.get("type") == ArticleType.UPDATED.value and not fields.get("originalArticleId"):
            raise ArticleValidationError("originalArticleId is required for updated articles")

        try:
            article = ArticleCreate.model_validate(fields)
        except ValidationError as e:
            raise ArticleValidationError(_validation_message(e), e.errors()) from e

        document = article.to_document()
        now = to_bson_datetime(datetime.now(timezone.utc))
        document["createdAt"] = now
        document["updatedAt"] = now

        try:
            if article.type == ArticleType.UPDATED:
                original = self.articles_collection.find_one(
                    {"_id": document["originalArticleId"], "type": ArticleType.ORIGINAL.value},
                    {"_id": 1},
                )
                if original is None:
                    raise ArticleValidationError("originalArticleId must reference an existing original article")
            result = self.articles_collection.insert_one(document)
        except PyMongoError as e:
            logger.error(f"MongoDB error creating article '{article.title}': {e}")
            raise ArticleStoreError("create", e) from e

        document["_id"] = result.inserted_id
        logger.info(f"Created {article.type.value} article {result.inserted_id}")
        return document

    def update_article(self, article_id, fields: dict) -> dict:
        object_id = _object_id(article_id)
        try:
            changes = ArticleUpdate.model_validate(fields).to_update_document()
        except ValidationError as e:
            raise ArticleValidationError(_validation_message(e), e.errors()) from e
        changes["updatedAt"] = to_bson_datetime(datetime.now(timezone.utc))

        try:
            article = self.articles_collection.find_one_and_update(
                {"_id": object_id},
                {"$set": changes},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            logger.error(f"MongoDB error updating article {article_id}: {e}")
            raise ArticleStoreError("update", e) from e

        if article is None:
            raise ArticleNotFoundError(article_id)
        logger.info(f"Updated article {article_id} ({', '.join(sorted(changes))})")
        return article

    def delete_article(self, article_id) -> int:
        """
        Deletes an article. Deleting an original also deletes every updated
        article that references it; dependents go first so a failure midway
        never leaves an updated article pointing at a missing original.

        Returns the number of dependents removed.
        """
        object_id = _object_id(article_id)
        try:
            article = self.articles_collection.find_one({"_id": object_id}, {"type": 1})
            if article is None:
                raise ArticleNotFoundError(article_id)
            cascade = article.get("type") == ArticleType.ORIGINAL.value

            if self.use_transactions:
                with self.db.client.start_session() as session:
                    removed = session.with_transaction(
                        lambda s: self._delete_with_dependents(object_id, cascade, s)
                    )
            else:
                removed = self._delete_with_dependents(object_id, cascade)
        except PyMongoError as e:
            logger.error(f"MongoDB error deleting article {article_id}: {e}")
            raise ArticleStoreError("delete", e) from e

        logger.info(f"Deleted article {article_id} and {removed} updated version(s)")
        return removed

    def _delete_with_dependents(self, object_id, cascade, session=None) -> int:
        options = {"session": session} if session is not None else {}
        removed = 0
        if cascade:
            result = self.articles_collection.delete_many({"originalArticleId": object_id}, **options)
            removed = result.deleted_count
        self.articles_collection.delete_one({"_id": object_id}, **options)
        return removed
