import uuid

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from photogram.models.post import Post
from photogram.models.post_bookmark import PostBookmark
from photogram.models.stats import PostStats


class PostRepository:
    def __init__(self, db: Session) -> None:
        self.db = db

    def list_stats(self, *, user_id: uuid.UUID | None, offset: int, limit: int) -> list[PostStats]:
        stmt = select(PostStats)
        if user_id is not None:
            stmt = stmt.where(PostStats.user_id == user_id)
        stmt = stmt.order_by(PostStats.created_at.desc(), PostStats.post_id.desc()).offset(offset).limit(limit)
        return list(self.db.scalars(stmt))

    def count_stats(self, *, user_id: uuid.UUID | None) -> int:
        stmt = select(func.count()).select_from(PostStats)
        if user_id is not None:
            stmt = stmt.where(PostStats.user_id == user_id)
        return int(self.db.scalar(stmt) or 0)

    def get_stats(self, post_id: uuid.UUID) -> PostStats | None:
        return self.db.scalar(select(PostStats).where(PostStats.post_id == post_id))

    def list_bookmarked_stats(self, *, user_id: uuid.UUID, offset: int, limit: int) -> list[PostStats]:
        stmt = (
            select(PostStats)
            .join(PostBookmark, PostBookmark.post_id == PostStats.post_id)
            .where(PostBookmark.user_id == user_id)
            .order_by(PostBookmark.created_at.desc())
            .offset(offset)
            .limit(limit)
        )
        return list(self.db.scalars(stmt))

    def count_bookmarked(self, *, user_id: uuid.UUID) -> int:
        stmt = select(func.count(PostBookmark.id)).where(PostBookmark.user_id == user_id)
        return int(self.db.scalar(stmt) or 0)

    def search_by_caption(self, keyword: str, *, offset: int, limit: int) -> list[PostStats]:
        stmt = (
            select(PostStats)
            .where(PostStats.caption.ilike(self._like_pattern(keyword)))
            .order_by(PostStats.created_at.desc())
            .offset(offset)
            .limit(limit)
        )
        return list(self.db.scalars(stmt))

    def count_by_caption(self, keyword: str) -> int:
        stmt = select(func.count()).select_from(PostStats).where(PostStats.caption.ilike(self._like_pattern(keyword)))
        return int(self.db.scalar(stmt) or 0)

    def get_by_id(self, post_id: uuid.UUID) -> Post | None:
        return self.db.scalar(select(Post).where(Post.id == post_id))

    def exists(self, post_id: uuid.UUID) -> bool:
        return self.db.scalar(select(Post.id).where(Post.id == post_id)) is not None

    def create(self, *, user_id: uuid.UUID, image_url: str, caption: str | None) -> Post:
        post = Post(user_id=user_id, image_url=image_url, caption=caption)
        self.db.add(post)
        self.db.flush()
        return post

    def delete(self, post_id: uuid.UUID) -> int:
        result = self.db.execute(delete(Post).where(Post.id == post_id))
        return result.rowcount or 0

    @staticmethod
    def _like_pattern(keyword: str) -> str:
        escaped = keyword.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        return f"%{escaped}%"
