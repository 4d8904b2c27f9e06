"""Blog post models."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class PostInput(BaseModel):
    """Payload for creating or replacing a post."""

    title: str = Field(..., min_length=1, description="Post title")
    content: str = Field(..., min_length=1, description="Post body")


class Post(BaseModel):
    """A persisted post. Serialized with ``_id`` and ``createdAt`` keys."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    title: str
    content: str
    created_at: datetime = Field(..., alias="createdAt")

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "Post":
        """Create a Post from a ``posts`` document.

        Args:
            document: Raw MongoDB document

        Returns:
            Post: Parsed model instance
        """
        return cls(
            id=str(document["_id"]),
            title=document["title"],
            content=document["content"],
            created_at=document["createdAt"],
        )
