"""Schemas for article payloads as the viewer receives them from the API.

``originalArticleId`` arrives either as a bare id string or as a populated
projection of the original article. Both shapes are normalised into a tagged
union at validation time so that nothing downstream has to inspect raw JSON.
"""
from datetime import datetime
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .article import ArticleType


class UnresolvedReference(BaseModel):
    kind: Literal["unresolved"] = "unresolved"
    id: str


class ResolvedReference(BaseModel):
    kind: Literal["resolved"] = "resolved"
    id: str = Field(alias="_id")
    title: Optional[str] = None
    url: Optional[str] = None
    content: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


ArticleReference = Annotated[
    Union[UnresolvedReference, ResolvedReference],
    Field(discriminator="kind"),
]


class ArticleView(BaseModel):
    id: str = Field(alias="_id")
    title: str
    content: str
    url: Optional[str] = None
    author: Optional[str] = None
    published_date: Optional[datetime] = Field(default=None, alias="publishedDate")
    image_url: Optional[str] = Field(default=None, alias="imageUrl")
    type: ArticleType
    original_article_id: Optional[ArticleReference] = Field(default=None, alias="originalArticleId")
    references: List[str] = Field(default_factory=list)
    scraped: bool = True
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator("original_article_id", mode="before")
    @classmethod
    def tag_reference(cls, value):
        if isinstance(value, str):
            return {"kind": "unresolved", "id": value}
        if isinstance(value, dict) and "kind" not in value:
            return {**value, "kind": "resolved"}
        return value

    @property
    def reference_id(self) -> Optional[str]:
        """Id of the original this article derives from, whichever shape it arrived in."""
        if self.original_article_id is None:
            return None
        return self.original_article_id.id

    @property
    def resolved_original(self) -> Optional[ResolvedReference]:
        if isinstance(self.original_article_id, ResolvedReference):
            return self.original_article_id
        return None


class ArticleListResponse(BaseModel):
    success: bool
    count: int
    total: int
    page: int
    pages: int
    data: List[ArticleView]

    model_config = ConfigDict(extra="forbid")


class ArticlePair(BaseModel):
    original: Optional[Union[ArticleView, ResolvedReference]] = None
    enhanced: Optional[ArticleView] = None


class FeedStats(BaseModel):
    total_count: int = 0
    original_count: int = 0
    enhanced_count: int = 0
