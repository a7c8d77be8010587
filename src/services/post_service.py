"""Post service for blog post reads, search, creation and deletion."""

import logging

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session

from src.exceptions import ForbiddenError, InternalError, NotFoundError, UnauthenticatedError
from src.models.post import Post
from src.services.auth import TokenClaims, get_user_by_id

logger = logging.getLogger(__name__)


class PostService:
    """Service for post-related operations."""

    def __init__(self, db: Session):
        self.db = db

    def _newest_first(self, query: Query) -> list[Post]:
        return query.order_by(Post.created_at.desc(), Post.id.desc()).all()

    def list_posts(self) -> list[Post]:
        """Return every post, newest first."""
        return self._newest_first(self.db.query(Post))

    def get_post(self, post_id: int) -> Post:
        """Get a post by id.

        Raises:
            NotFoundError: no post has this id
        """
        post = self.db.query(Post).filter(Post.id == post_id).first()
        if not post:
            raise NotFoundError("Post not found")
        return post

    def search_posts(self, query: str) -> list[Post]:
        """Case-insensitive substring search over title, content and author name.

        ``%`` and ``_`` in ``query`` are passed through to LIKE unescaped and
        behave as wildcards.
        """
        pattern = f"%{query}%"
        return self._newest_first(
            self.db.query(Post).filter(
                or_(
                    Post.title.ilike(pattern),
                    Post.content.ilike(pattern),
                    Post.author_name.ilike(pattern),
                )
            )
        )

    def create_post(self, caller: TokenClaims, title: str, content: str) -> Post:
        """Create a post authored by the caller.

        The author fields come from the token claims, never from the request body.
        """
        if get_user_by_id(self.db, caller.user_id) is None:
            raise UnauthenticatedError("User not found")

        post = Post(
            title=title,
            content=content,
            author_id=caller.user_id,
            author_name=caller.username,
        )
        self.db.add(post)
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to save post for user {caller.user_id}: {e}")
            raise InternalError("Server error") from e
        self.db.refresh(post)
        return post

    def delete_post(self, caller: TokenClaims, post_id: int) -> None:
        """Delete a post if and only if the caller wrote it.

        The ownership check and the delete are one conditional statement, so
        two concurrent deletes cannot both succeed.

        Raises:
            NotFoundError: no post has this id
            ForbiddenError: the post belongs to another user
        """
        deleted = (
            self.db.query(Post)
            .filter(Post.id == post_id, Post.author_id == caller.user_id)
            .delete(synchronize_session=False)
        )
        self.db.commit()

        if deleted:
            logger.info(f"User {caller.user_id} deleted post {post_id}")
            return

        if self.db.query(Post.id).filter(Post.id == post_id).first() is None:
            raise NotFoundError("Post not found")
        raise ForbiddenError("Not authorized to delete this post")
