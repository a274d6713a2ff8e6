import uuid
from collections import defaultdict

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from photogram.models.comment import Comment


class CommentRepository:
    def __init__(self, db: Session) -> None:
        self.db = db

    def latest_per_post(self, post_ids: list[uuid.UUID], *, per_post: int) -> dict[uuid.UUID, list[Comment]]:
        """Return the ``per_post`` newest comments of each post in one ranked query."""
        if not post_ids or per_post <= 0:
            return {}

        ranked = (
            select(
                Comment.id.label("comment_id"),
                func.row_number()
                .over(
                    partition_by=Comment.post_id,
                    order_by=(Comment.created_at.desc(), Comment.id.desc()),
                )
                .label("rank"),
            )
            .where(Comment.post_id.in_(post_ids))
            .subquery()
        )
        stmt = (
            select(Comment)
            .join(ranked, ranked.c.comment_id == Comment.id)
            .where(ranked.c.rank <= per_post)
            .order_by(Comment.post_id, ranked.c.rank)
        )

        grouped: dict[uuid.UUID, list[Comment]] = defaultdict(list)
        for comment in self.db.scalars(stmt):
            grouped[comment.post_id].append(comment)
        return dict(grouped)

    def list_for_post(self, post_id: uuid.UUID, *, offset: int = 0, limit: int | None = None) -> list[Comment]:
        stmt = (
            select(Comment)
            .where(Comment.post_id == post_id)
            .order_by(Comment.created_at.desc(), Comment.id.desc())
            .offset(offset)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        return list(self.db.scalars(stmt))

    def count_for_post(self, post_id: uuid.UUID) -> int:
        return int(self.db.scalar(select(func.count(Comment.id)).where(Comment.post_id == post_id)) or 0)

    def get_by_id(self, comment_id: uuid.UUID) -> Comment | None:
        return self.db.scalar(select(Comment).where(Comment.id == comment_id))

    def create(self, *, post_id: uuid.UUID, user_id: uuid.UUID, content: str) -> Comment:
        comment = Comment(post_id=post_id, user_id=user_id, content=content)
        self.db.add(comment)
        self.db.flush()
        return comment

    def delete(self, comment_id: uuid.UUID) -> int:
        result = self.db.execute(delete(Comment).where(Comment.id == comment_id))
        return result.rowcount or 0
