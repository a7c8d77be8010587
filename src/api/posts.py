"""Blog post API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_current_user, get_post_service
from src.exceptions import NotFoundError
from src.schemas.post import PostCreate, PostCreateResponse, PostResponse
from src.services.auth import TokenClaims
from src.services.post_service import PostService

router = APIRouter(prefix="/api/posts", tags=["posts"])


def parse_post_id(post_id: str) -> int:
    """Turn a path segment into a post id; anything non-numeric names no post."""
    if not (post_id.isascii() and post_id.isdecimal()):
        raise NotFoundError("Post not found")
    return int(post_id)


@router.get("", response_model=list[PostResponse])
def list_posts(
    service: Annotated[PostService, Depends(get_post_service)],
):
    """Get all posts, newest first."""
    return service.list_posts()


@router.get("/search/{query}", response_model=list[PostResponse])
def search_posts(
    query: str,
    service: Annotated[PostService, Depends(get_post_service)],
):
    """Search posts by title, content or author name."""
    return service.search_posts(query)


@router.get("/{post_id}", response_model=PostResponse)
def get_post(
    post_id: str,
    service: Annotated[PostService, Depends(get_post_service)],
):
    """Get a specific post."""
    return service.get_post(parse_post_id(post_id))


@router.post("", response_model=PostCreateResponse, status_code=status.HTTP_201_CREATED)
def create_post(
    post_data: PostCreate,
    current_user: Annotated[TokenClaims, Depends(get_current_user)],
    service: Annotated[PostService, Depends(get_post_service)],
):
    """Create a post authored by the current user."""
    post = service.create_post(current_user, post_data.title, post_data.content)
    return PostCreateResponse(
        message="Post created successfully",
        post=PostResponse.model_validate(post),
    )


@router.delete("/{post_id}")
def delete_post(
    post_id: str,
    current_user: Annotated[TokenClaims, Depends(get_current_user)],
    service: Annotated[PostService, Depends(get_post_service)],
):
    """Delete a post. Only its author may do this."""
    service.delete_post(current_user, parse_post_id(post_id))
    return {"message": "Post deleted successfully"}
