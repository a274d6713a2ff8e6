from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from photogram.db.session import get_db
from photogram.schemas.search import SearchResponse, SearchType
from photogram.services.search_service import SearchService

router = APIRouter(prefix="/search", tags=["search"])


@router.get("", response_model=SearchResponse)
def search(
    q: str | None = Query(default=None),
    search_type: SearchType = Query(default="users", alias="type"),
    limit: int | None = Query(default=None),
    offset: int | None = Query(default=None),
    db: Session = Depends(get_db),
):
    return SearchService(db).search(query=q, search_type=search_type, offset=offset, limit=limit)
