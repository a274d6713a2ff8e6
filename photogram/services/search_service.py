import logging

from sqlalchemy.orm import Session

from photogram.core.config import settings
from photogram.core.pagination import clamp_offset_limit
from photogram.db.session import optional_read
from photogram.repositories.post_repo import PostRepository
from photogram.repositories.user_repo import UserRepository
from photogram.schemas.search import PostSearchResult, SearchResponse, SearchResults, SearchType
from photogram.schemas.user import UserPublic

logger = logging.getLogger(__name__)


class SearchService:
    def __init__(self, db: Session) -> None:
        self.db = db
        self.user_repo = UserRepository(db)
        self.post_repo = PostRepository(db)

    def search(
        self,
        *,
        query: str | None,
        search_type: SearchType = "users",
        offset: int | None = None,
        limit: int | None = None,
    ) -> SearchResponse:
        keyword = (query or "").strip()
        if not keyword:
            return SearchResponse(results=SearchResults(), query="", type=search_type)

        offset_value, limit_value = clamp_offset_limit(
            offset,
            limit,
            default_limit=settings.search_default_limit,
            max_limit=settings.feed_max_limit,
        )
        results = SearchResults()
        if search_type in ("users", "all"):
            users = self.user_repo.search_by_name(keyword, offset=offset_value, limit=limit_value)
            results.users = [UserPublic.model_validate(user) for user in users]
            results.total = self._count(
                "user search count failed",
                lambda: self.user_repo.count_by_name(keyword),
                keyword,
            )
        if search_type in ("posts", "all"):
            results.posts = self._search_posts(keyword, offset=offset_value, limit=limit_value)
            results.posts_total = self._count(
                "post search count failed",
                lambda: self.post_repo.count_by_caption(keyword),
                keyword,
            )
        return SearchResponse(results=results, query=keyword, type=search_type)

    def _search_posts(self, keyword: str, *, offset: int, limit: int) -> list[PostSearchResult]:
        rows = self.post_repo.search_by_caption(keyword, offset=offset, limit=limit)
        authors = self.user_repo.get_many([row.user_id for row in rows])
        return [
            PostSearchResult(
                post_id=row.post_id,
                user_id=row.user_id,
                image_url=row.image_url,
                caption=row.caption,
                created_at=row.created_at,
                likes_count=int(row.likes_count or 0),
                comments_count=int(row.comments_count or 0),
                user=UserPublic.model_validate(authors[row.user_id]),
            )
            for row in rows
            if row.user_id in authors
        ]

    def _count(self, message: str, load, keyword: str) -> int:
        return optional_read(self.db, load, default=0, log=logger, message=message, context={"query": keyword})
