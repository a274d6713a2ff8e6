import uuid
from datetime import datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.orm import Session

from photogram.models.stats import UserStats
from photogram.models.user import User
from photogram.models.user_follow import UserFollow


class UserRepository:
    def __init__(self, db: Session) -> None:
        self.db = db

    def get_by_id(self, user_pk: uuid.UUID) -> User | None:
        return self.db.scalar(select(User).where(User.id == user_pk))

    def get_by_external_id(self, external_id: str) -> User | None:
        return self.db.scalar(select(User).where(User.external_id == external_id))

    def get_many(self, user_pks: list[uuid.UUID]) -> dict[uuid.UUID, User]:
        ids = list(dict.fromkeys(user_pks))
        if not ids:
            return {}
        return {user.id: user for user in self.db.scalars(select(User).where(User.id.in_(ids)))}

    def get_stats(self, user_pk: uuid.UUID) -> UserStats | None:
        return self.db.scalar(select(UserStats).where(UserStats.user_id == user_pk))

    def search_by_name(self, keyword: str, *, offset: int, limit: int) -> list[User]:
        stmt = (
            select(User)
            .where(User.name.ilike(self._like_pattern(keyword)))
            .order_by(User.created_at.desc())
            .offset(offset)
            .limit(limit)
        )
        return list(self.db.scalars(stmt))

    def count_by_name(self, keyword: str) -> int:
        stmt = select(func.count(User.id)).where(User.name.ilike(self._like_pattern(keyword)))
        return int(self.db.scalar(stmt) or 0)

    def list_followers(self, user_pk: uuid.UUID) -> list[User]:
        stmt = (
            select(User)
            .join(UserFollow, UserFollow.follower_id == User.id)
            .where(UserFollow.following_id == user_pk)
            .order_by(UserFollow.created_at.desc())
        )
        return list(self.db.scalars(stmt))

    def list_following(self, user_pk: uuid.UUID) -> list[User]:
        stmt = (
            select(User)
            .join(UserFollow, UserFollow.following_id == User.id)
            .where(UserFollow.follower_id == user_pk)
            .order_by(UserFollow.created_at.desc())
        )
        return list(self.db.scalars(stmt))

    def upsert_from_identity(self, *, external_id: str, name: str) -> User:
        now = datetime.now(timezone.utc)
        stmt = (
            insert(User)
            .values(id=uuid.uuid4(), external_id=external_id, name=name, created_at=now, updated_at=now)
            .on_conflict_do_update(
                index_elements=[User.external_id],
                set_={"name": name, "updated_at": now},
            )
        )
        self.db.execute(stmt)
        self.db.flush()
        user = self.db.scalar(
            select(User).where(User.external_id == external_id).execution_options(populate_existing=True)
        )
        if user is None:
            raise LookupError(f"user {external_id} missing after upsert")
        return user

    @staticmethod
    def _like_pattern(keyword: str) -> str:
        escaped = keyword.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        return f"%{escaped.lower()}%"
