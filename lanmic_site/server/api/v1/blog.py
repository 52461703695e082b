"""
Blog Post API Endpoints.

CRUD for the dashboard owner's blog posts plus the public listing of
published posts. Every mutation is broadcast on the event relay.
"""

from typing import List

from fastapi import APIRouter, HTTPException, status

from lanmic_site.core.database.entities.blog_posts import BlogPost
from lanmic_site.core.database.repositories import BlogPostRepository
from lanmic_site.core.logging_config import get_logger
from lanmic_site.core.models.io.blog_posts import BlogPostCreate, BlogPostRead, BlogPostUpdate
from lanmic_site.core.models.io.common import MessageResponse
from lanmic_site.server.services.deps import RelayDep, SessionDep, VerifiedUser
from lanmic_site.server.services.relay import BLOG_EVENTS

logger = get_logger(__name__)

router = APIRouter()

NOT_FOUND = "Blog post not found"


async def _get_owned(repo: BlogPostRepository, post_id: int, owner_id: int) -> BlogPost:
    post = await repo.get_for_owner(post_id, owner_id)
    if not post:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return post


@router.get(
    "",
    response_model=List[BlogPostRead],
    summary="List My Blog Posts",
    description="All blog posts owned by the authenticated user, newest first.",
)
async def list_blog_posts(user: VerifiedUser, session: SessionDep) -> List[BlogPostRead]:
    posts = await BlogPostRepository(session).list_for_owner(user.id)
    logger.debug(f"Retrieved {len(posts)} blog posts for user {user.id}")
    return [BlogPostRead.model_validate(post) for post in posts]


@router.get(
    "/published",
    response_model=List[BlogPostRead],
    summary="List Published Blog Posts",
    description="Public listing of every published post, newest first. No authentication required.",
)
async def list_published_blog_posts(session: SessionDep) -> List[BlogPostRead]:
    posts = await BlogPostRepository(session).list_public()
    return [BlogPostRead.model_validate(post) for post in posts]


@router.get(
    "/{post_id}",
    response_model=BlogPostRead,
    summary="Get Blog Post",
    responses={404: {"description": NOT_FOUND}},
)
async def get_blog_post(post_id: int, user: VerifiedUser, session: SessionDep) -> BlogPostRead:
    post = await _get_owned(BlogPostRepository(session), post_id, user.id)
    return BlogPostRead.model_validate(post)


@router.post(
    "",
    response_model=BlogPostRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Blog Post",
    description="Create a blog post owned by the authenticated user. Posts are drafts unless `published` is set.",
)
async def create_blog_post(
    body: BlogPostCreate, user: VerifiedUser, session: SessionDep, relay: RelayDep
) -> BlogPostRead:
    post = await BlogPostRepository(session).create(BlogPost(**body.model_dump(), user_id=user.id))
    result = BlogPostRead.model_validate(post)
    relay.publish(BLOG_EVENTS.created, result)
    logger.info(f"User {user.id} created blog post {post.id}")
    return result


@router.put(
    "/{post_id}",
    response_model=BlogPostRead,
    summary="Update Blog Post",
    description="Partially update a blog post; only fields present in the body change.",
    responses={404: {"description": NOT_FOUND}},
)
async def update_blog_post(
    post_id: int, body: BlogPostUpdate, user: VerifiedUser, session: SessionDep, relay: RelayDep
) -> BlogPostRead:
    repo = BlogPostRepository(session)
    post = await _get_owned(repo, post_id, user.id)
    post = await repo.apply_changes(post, body.model_dump(exclude_unset=True))
    result = BlogPostRead.model_validate(post)
    relay.publish(BLOG_EVENTS.updated, result)
    return result


@router.delete(
    "/{post_id}",
    response_model=MessageResponse,
    summary="Delete Blog Post",
    responses={404: {"description": NOT_FOUND}},
)
async def delete_blog_post(post_id: int, user: VerifiedUser, session: SessionDep, relay: RelayDep) -> MessageResponse:
    repo = BlogPostRepository(session)
    post = await _get_owned(repo, post_id, user.id)
    await repo.delete(post)
    relay.publish(BLOG_EVENTS.deleted, {"id": post_id})
    logger.info(f"User {user.id} deleted blog post {post_id}")
    return MessageResponse(message="Blog post deleted successfully")


@router.put(
    "/{post_id}/publish",
    response_model=BlogPostRead,
    summary="Toggle Publish",
    description="Flip the published flag of a blog post.",
    responses={404: {"description": NOT_FOUND}},
)
async def toggle_publish(post_id: int, user: VerifiedUser, session: SessionDep, relay: RelayDep) -> BlogPostRead:
    repo = BlogPostRepository(session)
    post = await repo.toggle_public_flag(await _get_owned(repo, post_id, user.id))
    result = BlogPostRead.model_validate(post)
    relay.publish(BLOG_EVENTS.toggled, result)
    return result
