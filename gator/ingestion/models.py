"""Data models for ingestion."""

from typing import List

from pydantic import BaseModel, Field


class FeedDocumentItem(BaseModel):
    """Parsed RSS feed item."""

    title: str = Field("", description="Item title")
    link: str = Field("", description="Item URL")
    description: str = Field("", description="Item description")
    pub_date: str = Field("", description="Publication date as published")


class FeedDocument(BaseModel):
    """Parsed RSS channel."""

    channel_title: str = Field("", description="Channel title")
    channel_link: str = Field("", description="Channel URL")
    channel_description: str = Field("", description="Channel description")
    items: List[FeedDocumentItem] = Field(default_factory=list, description="Channel items")
