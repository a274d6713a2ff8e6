from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
import logging
from typing import TypeVar
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from photogram.core.config import settings
from photogram.core.pagination import PageWindow, resolve_page
from photogram.db.session import optional_read
from photogram.models.comment import Comment
from photogram.models.stats import PostStats
from photogram.models.user import User
from photogram.repositories.comment_repo import CommentRepository
from photogram.repositories.interaction_repo import InteractionRepository
from photogram.repositories.post_repo import PostRepository
from photogram.repositories.user_repo import UserRepository
from photogram.schemas.post import (
    CommentWithUser,
    Pagination,
    PostDetailResponse,
    PostListResponse,
    PostWithDetails,
)
from photogram.schemas.user import UserPublic

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class ViewerFlags:
    liked: set[UUID] = field(default_factory=set)
    bookmarked: set[UUID] = field(default_factory=set)


class FeedService:
    def __init__(self, db: Session) -> None:
        self.db = db
        self.post_repo = PostRepository(db)
        self.user_repo = UserRepository(db)
        self.comment_repo = CommentRepository(db)
        self.interaction_repo = InteractionRepository(db)

    def list_feed(
        self,
        *,
        viewer: User | None,
        user_id: UUID | None,
        page: int | None,
        limit: int | None,
    ) -> PostListResponse:
        window = self._window(page, limit)
        rows = self.post_repo.list_stats(user_id=user_id, offset=window.offset, limit=window.limit)
        if not rows:
            return self._empty_page(window)

        posts = self._build_posts(viewer=viewer, rows=rows)
        total = self._degrade(
            "post count query failed",
            lambda: self.post_repo.count_stats(user_id=user_id),
            default=0,
            context={"user_id": str(user_id) if user_id else None},
        )
        return PostListResponse(
            posts=posts,
            pagination=Pagination(
                page=window.page,
                limit=window.limit,
                total=total,
                has_more=window.has_more(total),
            ),
        )

    def list_bookmarks(self, *, viewer: User, page: int | None, limit: int | None) -> PostListResponse:
        window = self._window(page, limit)
        rows = self.post_repo.list_bookmarked_stats(user_id=viewer.id, offset=window.offset, limit=window.limit)
        if not rows:
            return self._empty_page(window)

        posts = self._build_posts(viewer=viewer, rows=rows)
        total = self.post_repo.count_bookmarked(user_id=viewer.id)
        return PostListResponse(
            posts=posts,
            pagination=Pagination(
                page=window.page,
                limit=window.limit,
                total=total,
                has_more=window.has_more(total),
            ),
        )

    def get_post_detail(self, *, viewer: User | None, post_id: UUID) -> PostDetailResponse:
        row = self.post_repo.get_stats(post_id)
        if not row:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")

        author = self.user_repo.get_by_id(row.user_id)
        if not author:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

        comments = self.comment_repo.list_for_post(post_id)
        post = self._build_posts(
            viewer=viewer,
            rows=[row],
            authors={author.id: author},
            comments_by_post={post_id: comments},
        )[0]
        return PostDetailResponse(post=post)

    def _build_posts(
        self,
        *,
        viewer: User | None,
        rows: list[PostStats],
        authors: dict[UUID, User] | None = None,
        comments_by_post: dict[UUID, list[Comment]] | None = None,
    ) -> list[PostWithDetails]:
        post_ids = [row.post_id for row in rows]
        if authors is None:
            authors = self.user_repo.get_many([row.user_id for row in rows])
        if comments_by_post is None:
            comments_by_post = self._load_comment_previews(post_ids)

        commenter_ids = [comment.user_id for comments in comments_by_post.values() for comment in comments]
        commenters = self.user_repo.get_many(commenter_ids)
        flags = self._load_viewer_flags(viewer=viewer, post_ids=post_ids)

        posts: list[PostWithDetails] = []
        for row in rows:
            author = authors.get(row.user_id)
            if author is None:
                logger.error("post author missing", extra={"post_id": str(row.post_id), "user_id": str(row.user_id)})
                raise HTTPException(
                    status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                    detail=f"User not found for post {row.post_id}",
                )
            posts.append(
                PostWithDetails(
                    post_id=row.post_id,
                    user_id=row.user_id,
                    image_url=row.image_url,
                    caption=row.caption,
                    created_at=row.created_at,
                    updated_at=row.updated_at,
                    likes_count=int(row.likes_count or 0),
                    comments_count=int(row.comments_count or 0),
                    user=UserPublic.model_validate(author),
                    comments=self._attach_comment_authors(comments_by_post.get(row.post_id, []), commenters),
                    user_liked=row.post_id in flags.liked,
                    user_bookmarked=row.post_id in flags.bookmarked,
                )
            )
        return posts

    def _load_comment_previews(self, post_ids: list[UUID]) -> dict[UUID, list[Comment]]:
        return self._degrade(
            "comment preview query failed",
            lambda: self.comment_repo.latest_per_post(post_ids, per_post=settings.comment_preview_count),
            default={},
            context={"post_count": len(post_ids)},
        )

    def _load_viewer_flags(self, *, viewer: User | None, post_ids: list[UUID]) -> ViewerFlags:
        if viewer is None or not post_ids:
            return ViewerFlags()
        return self._degrade(
            "viewer interaction query failed",
            lambda: ViewerFlags(
                liked=self.interaction_repo.liked_post_ids(user_id=viewer.id, post_ids=post_ids),
                bookmarked=self.interaction_repo.bookmarked_post_ids(user_id=viewer.id, post_ids=post_ids),
            ),
            default=ViewerFlags(),
            context={"viewer_id": str(viewer.id)},
        )

    @staticmethod
    def _attach_comment_authors(comments: list[Comment], commenters: dict[UUID, User]) -> list[CommentWithUser]:
        attached: list[CommentWithUser] = []
        for comment in comments:
            author = commenters.get(comment.user_id)
            if author is None:
                continue
            attached.append(
                CommentWithUser(
                    id=comment.id,
                    post_id=comment.post_id,
                    user_id=comment.user_id,
                    content=comment.content,
                    created_at=comment.created_at,
                    updated_at=comment.updated_at,
                    user=UserPublic.model_validate(author),
                )
            )
        return attached

    def _degrade(self, message: str, load: Callable[[], T], *, default: T, context: dict) -> T:
        return optional_read(self.db, load, default=default, log=logger, message=message, context=context)

    @staticmethod
    def _window(page: int | None, limit: int | None) -> PageWindow:
        return resolve_page(
            page,
            limit,
            default_limit=settings.feed_default_limit,
            max_limit=settings.feed_max_limit,
        )

    @staticmethod
    def _empty_page(window: PageWindow) -> PostListResponse:
        return PostListResponse(
            posts=[],
            pagination=Pagination(page=window.page, limit=window.limit, total=0, has_more=False),
        )
