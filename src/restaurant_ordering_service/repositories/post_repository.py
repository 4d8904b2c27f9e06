"""MongoDB repository for blog posts."""

import logging
from datetime import datetime

from bson import ObjectId
from pymongo import DESCENDING
from pymongo.database import Database

from restaurant_ordering_service.models.post_models import Post

logger = logging.getLogger(__name__)

POSTS_COLLECTION = "posts"


class PostRepository:
    """Repository for post CRUD operations."""

    def __init__(self, database: Database, collection_name: str = POSTS_COLLECTION) -> None:
        """Initialize repository.

        Args:
            database: PyMongo database handle
            collection_name: Name of the posts collection
        """
        self.collection_name = collection_name
        self.collection = database[collection_name]

    def list_posts(self) -> list[Post]:
        """List every post, newest first."""
        cursor = self.collection.find().sort("createdAt", DESCENDING)
        return [Post.from_document(document) for document in cursor]

    def get_post(self, post_id: ObjectId) -> Post | None:
        """Retrieve a post by id.

        Args:
            post_id: Document id

        Returns:
            Post if found, None otherwise
        """
        document = self.collection.find_one({"_id": post_id})
        if document is None:
            return None
        return Post.from_document(document)

    def insert_post(self, title: str, content: str, created_at: datetime) -> Post:
        """Insert a new post.

        Returns:
            Post: The stored post including its generated id
        """
        document = {"title": title, "content": content, "createdAt": created_at}
        result = self.collection.insert_one(document)
        return Post.from_document({**document, "_id": result.inserted_id})

    def update_post(self, post_id: ObjectId, title: str, content: str) -> bool:
        """Replace the title and content of a post.

        Returns:
            bool: True if a document matched, False otherwise
        """
        result = self.collection.update_one(
            {"_id": post_id}, {"$set": {"title": title, "content": content}}
        )
        return result.matched_count > 0

    def delete_post(self, post_id: ObjectId) -> bool:
        """Delete a post.

        Returns:
            bool: True if a document was deleted, False otherwise
        """
        result = self.collection.delete_one({"_id": post_id})
        return result.deleted_count > 0
