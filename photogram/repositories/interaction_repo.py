import uuid

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.orm import Session

from photogram.models.post_bookmark import PostBookmark
from photogram.models.post_like import PostLike
from photogram.models.user_follow import UserFollow


class InteractionRepository:
    """Like, bookmark and follow rows.

    Creates are idempotent upserts against the unique constraints; they
    return whether a row was actually inserted. Deletes return whether a row
    was removed.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def liked_post_ids(self, *, user_id: uuid.UUID, post_ids: list[uuid.UUID]) -> set[uuid.UUID]:
        if not post_ids:
            return set()
        stmt = select(PostLike.post_id).where(PostLike.user_id == user_id, PostLike.post_id.in_(post_ids))
        return set(self.db.scalars(stmt))

    def bookmarked_post_ids(self, *, user_id: uuid.UUID, post_ids: list[uuid.UUID]) -> set[uuid.UUID]:
        if not post_ids:
            return set()
        stmt = select(PostBookmark.post_id).where(
            PostBookmark.user_id == user_id,
            PostBookmark.post_id.in_(post_ids),
        )
        return set(self.db.scalars(stmt))

    def add_like(self, *, post_id: uuid.UUID, user_id: uuid.UUID) -> bool:
        stmt = (
            insert(PostLike)
            .values(id=uuid.uuid4(), post_id=post_id, user_id=user_id)
            .on_conflict_do_nothing(constraint="uq_likes_post_user")
            .returning(PostLike.id)
        )
        return self.db.execute(stmt).scalar_one_or_none() is not None

    def remove_like(self, *, post_id: uuid.UUID, user_id: uuid.UUID) -> bool:
        stmt = delete(PostLike).where(PostLike.post_id == post_id, PostLike.user_id == user_id)
        return (self.db.execute(stmt).rowcount or 0) > 0

    def add_bookmark(self, *, post_id: uuid.UUID, user_id: uuid.UUID) -> bool:
        stmt = (
            insert(PostBookmark)
            .values(id=uuid.uuid4(), post_id=post_id, user_id=user_id)
            .on_conflict_do_nothing(constraint="uq_bookmarks_post_user")
            .returning(PostBookmark.id)
        )
        return self.db.execute(stmt).scalar_one_or_none() is not None

    def remove_bookmark(self, *, post_id: uuid.UUID, user_id: uuid.UUID) -> bool:
        stmt = delete(PostBookmark).where(PostBookmark.post_id == post_id, PostBookmark.user_id == user_id)
        return (self.db.execute(stmt).rowcount or 0) > 0

    def add_follow(self, *, follower_id: uuid.UUID, following_id: uuid.UUID) -> bool:
        stmt = (
            insert(UserFollow)
            .values(id=uuid.uuid4(), follower_id=follower_id, following_id=following_id)
            .on_conflict_do_nothing(constraint="uq_follows_pair")
            .returning(UserFollow.id)
        )
        return self.db.execute(stmt).scalar_one_or_none() is not None

    def remove_follow(self, *, follower_id: uuid.UUID, following_id: uuid.UUID) -> bool:
        stmt = delete(UserFollow).where(
            UserFollow.follower_id == follower_id,
            UserFollow.following_id == following_id,
        )
        return (self.db.execute(stmt).rowcount or 0) > 0

    def is_following(self, *, follower_id: uuid.UUID, following_id: uuid.UUID) -> bool:
        stmt = select(UserFollow.id).where(
            UserFollow.follower_id == follower_id,
            UserFollow.following_id == following_id,
        )
        return self.db.scalar(stmt) is not None
