"""Post API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_post_service
from api.v1.schemas.post import (
    CommentCreate,
    CommentListResponse,
    CommentResponse,
    LikeListResponse,
    LikeResponse,
    PostCreate,
    PostDetailResponse,
    PostListResponse,
    PostResponse,
)
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.services.post_service import PostService

router = APIRouter(prefix="/posts", tags=["posts"])


@router.post(
    "",
    response_model=PostDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a post",
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def create_post(
    request: Request,
    body: PostCreate,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> PostDetailResponse:
    """Publish a post as the authenticated user."""
    post = await service.create(user_id=user.id, text=body.text)
    return PostDetailResponse(data=PostResponse.model_validate(post))


@router.get(
    "",
    response_model=PostListResponse,
    summary="List all posts",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_posts(
    request: Request,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> PostListResponse:
    """Get every post, newest first."""
    posts = await service.get_all()
    return PostListResponse(data=[PostResponse.model_validate(post) for post in posts])


@router.get(
    "/user/{user_id}",
    response_model=PostListResponse,
    summary="List the posts of a user",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_user_posts(
    request: Request,
    user_id: UUID,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> PostListResponse:
    """Get the posts written by ``user_id``, newest first."""
    posts = await service.get_all_for_user(user_id)
    return PostListResponse(data=[PostResponse.model_validate(post) for post in posts])


@router.get(
    "/{post_id}",
    response_model=PostDetailResponse,
    summary="Get a post",
    responses={404: {"description": "Post not found"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_post(
    request: Request,
    post_id: UUID,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> PostDetailResponse:
    """Get a single post with its likes and comments."""
    post = await service.get_by_id(post_id)
    return PostDetailResponse(data=PostResponse.model_validate(post))


@router.delete(
    "/{post_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a post",
    responses={
        204: {"description": "Post deleted successfully"},
        403: {"description": "Caller is not the author"},
        404: {"description": "Post not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_post(
    request: Request,
    post_id: UUID,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> None:
    """Delete one of the caller's own posts."""
    await service.delete(post_id, user.id)
    return None


@router.put(
    "/{post_id}/like",
    response_model=LikeListResponse,
    summary="Like a post",
    responses={
        400: {"description": "Post already liked"},
        404: {"description": "Post not found"},
        409: {"description": "Post changed concurrently"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def like_post(
    request: Request,
    post_id: UUID,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> LikeListResponse:
    """Like a post. Liking twice is rejected."""
    likes = await service.like(post_id, user.id)
    return LikeListResponse(data=[LikeResponse.model_validate(like) for like in likes])


@router.put(
    "/{post_id}/unlike",
    response_model=LikeListResponse,
    summary="Unlike a post",
    responses={
        400: {"description": "Post has not yet been liked"},
        404: {"description": "Post not found"},
        409: {"description": "Post changed concurrently"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def unlike_post(
    request: Request,
    post_id: UUID,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> LikeListResponse:
    """Withdraw the caller's like."""
    likes = await service.unlike(post_id, user.id)
    return LikeListResponse(data=[LikeResponse.model_validate(like) for like in likes])


@router.post(
    "/{post_id}/comments",
    response_model=CommentListResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Comment on a post",
    responses={
        404: {"description": "Post not found"},
        409: {"description": "Post changed concurrently"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def add_comment(
    request: Request,
    post_id: UUID,
    body: CommentCreate,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> CommentListResponse:
    """Add a comment; returns all comments, newest first."""
    comments = await service.add_comment(post_id, user.id, body.text)
    return CommentListResponse(
        data=[CommentResponse.model_validate(comment) for comment in comments]
    )


@router.delete(
    "/{post_id}/comments/{comment_id}",
    response_model=CommentListResponse,
    summary="Delete a comment",
    responses={
        403: {"description": "Caller is not the comment author"},
        404: {"description": "Post or comment not found"},
        409: {"description": "Post changed concurrently"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def remove_comment(
    request: Request,
    post_id: UUID,
    comment_id: UUID,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> CommentListResponse:
    """Delete one of the caller's own comments."""
    comments = await service.remove_comment(post_id, comment_id, user.id)
    return CommentListResponse(
        data=[CommentResponse.model_validate(comment) for comment in comments]
    )
