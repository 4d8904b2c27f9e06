"""Service for the blog posts module. Plain CRUD, no business rules."""

import logging
from datetime import UTC, datetime

from restaurant_ordering_service.errors import NotFoundError
from restaurant_ordering_service.models.post_models import Post, PostInput
from restaurant_ordering_service.repositories.post_repository import PostRepository
from restaurant_ordering_service.services.ids import parse_object_id

logger = logging.getLogger(__name__)


class PostService:
    """Service for post CRUD operations."""

    def __init__(self, post_repository: PostRepository) -> None:
        self.post_repository = post_repository

    async def list_posts(self) -> list[Post]:
        return self.post_repository.list_posts()

    async def get_post(self, post_id: str) -> Post:
        post = self.post_repository.get_post(parse_object_id(post_id, "post"))
        if post is None:
            raise NotFoundError("Post not found")
        return post

    async def create_post(self, payload: PostInput) -> Post:
        post = self.post_repository.insert_post(payload.title, payload.content, datetime.now(UTC))
        logger.info(f"Created post {post.id}")
        return post

    async def update_post(self, post_id: str, payload: PostInput) -> Post:
        """Replace title and content; raises NotFoundError for unknown ids."""
        object_id = parse_object_id(post_id, "post")
        if not self.post_repository.update_post(object_id, payload.title, payload.content):
            raise NotFoundError("Post not found")
        post = self.post_repository.get_post(object_id)
        if post is None:
            raise NotFoundError("Post not found")
        return post

    async def delete_post(self, post_id: str) -> None:
        if not self.post_repository.delete_post(parse_object_id(post_id, "post")):
            raise NotFoundError("Post not found")
        logger.info(f"Deleted post {post_id}")
