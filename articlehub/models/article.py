from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from bson.objectid import ObjectId
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class ArticleType(str, Enum):
    ORIGINAL = "original"
    UPDATED = "updated"


def _strip(value):
    return value.strip() if isinstance(value, str) else value


def _check_object_id(value):
    if value is not None and not ObjectId.is_valid(value):
        raise ValueError("originalArticleId must be a valid article id")
    return value


def to_bson_datetime(value):
    """Normalises a datetime to what BSON stores: UTC with millisecond precision."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


class ArticleCreate(BaseModel):
    """Fields accepted when storing a new article."""

    title: str
    content: str
    url: Optional[str] = None
    author: str = "Unknown"
    published_date: Optional[datetime] = Field(default=None, alias="publishedDate")
    image_url: Optional[str] = Field(default=None, alias="imageUrl")
    type: ArticleType = ArticleType.ORIGINAL
    original_article_id: Optional[str] = Field(default=None, alias="originalArticleId")
    references: List[str] = Field(default_factory=list)
    scraped: bool = True

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        json_schema_extra={
            "example": {
                "title": "Why chatbots fail",
                "content": "Full article content...",
                "url": "https://example.com/blog/why-chatbots-fail",
                "author": "Jane Doe",
                "publishedDate": "2024-12-01T10:00:00Z",
                "type": "updated",
                "originalArticleId": "6760a0c2f1d2e3a4b5c6d7e8",
                "references": ["https://example.com/source-1"],
            }
        },
    )

    @field_validator("title", "url", mode="before")
    @classmethod
    def strip_text(cls, value):
        return _strip(value)

    @field_validator("title", "content")
    @classmethod
    def require_text(cls, value):
        if not value:
            raise ValueError("must not be empty")
        return value

    @field_validator("author", mode="before")
    @classmethod
    def default_author(cls, value):
        value = _strip(value)
        return "Unknown" if value is None else value

    @field_validator("references", mode="before")
    @classmethod
    def default_references(cls, value):
        return [] if value is None else value

    @field_validator("original_article_id")
    @classmethod
    def check_reference(cls, value):
        return _check_object_id(value)

    @field_validator("published_date")
    @classmethod
    def normalise_published_date(cls, value):
        return to_bson_datetime(value)

    @model_validator(mode="after")
    def check_type_reference(self):
        if self.type == ArticleType.UPDATED and not self.original_article_id:
            raise ValueError("originalArticleId is required for updated articles")
        if self.type == ArticleType.ORIGINAL and self.original_article_id:
            raise ValueError("originalArticleId is only allowed on updated articles")
        return self

    def to_document(self) -> dict:
        document = self.model_dump(by_alias=True)
        document["type"] = self.type.value
        if self.original_article_id:
            document["originalArticleId"] = ObjectId(self.original_article_id)
        return document


class ArticleUpdate(BaseModel):
    """Partial update; only fields present in the request are written."""

    title: Optional[str] = None
    content: Optional[str] = None
    url: Optional[str] = None
    author: Optional[str] = None
    published_date: Optional[datetime] = Field(default=None, alias="publishedDate")
    image_url: Optional[str] = Field(default=None, alias="imageUrl")
    type: Optional[ArticleType] = None
    original_article_id: Optional[str] = Field(default=None, alias="originalArticleId")
    references: Optional[List[str]] = None
    scraped: Optional[bool] = None

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator("title", "url", "author", mode="before")
    @classmethod
    def strip_text(cls, value):
        return _strip(value)

    @field_validator("title", "content", "type", "scraped")
    @classmethod
    def reject_null(cls, value):
        if value is None or value == "":
            raise ValueError("must not be empty")
        return value

    @field_validator("original_article_id")
    @classmethod
    def check_reference(cls, value):
        return _check_object_id(value)

    @field_validator("published_date")
    @classmethod
    def normalise_published_date(cls, value):
        return to_bson_datetime(value)

    def to_update_document(self) -> dict:
        changes = self.model_dump(by_alias=True, exclude_unset=True)
        if "type" in changes:
            changes["type"] = self.type.value
        if changes.get("references") is None and "references" in changes:
            changes["references"] = []
        if changes.get("originalArticleId"):
            changes["originalArticleId"] = ObjectId(changes["originalArticleId"])
        return changes
