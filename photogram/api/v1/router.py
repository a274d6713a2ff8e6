from fastapi import APIRouter

from photogram.api.v1.bookmarks import router as bookmarks_router
from photogram.api.v1.comments import router as comments_router
from photogram.api.v1.follows import router as follows_router
from photogram.api.v1.likes import router as likes_router
from photogram.api.v1.posts import router as posts_router
from photogram.api.v1.search import router as search_router
from photogram.api.v1.users import router as users_router

api_router = APIRouter()
api_router.include_router(posts_router)
api_router.include_router(likes_router)
api_router.include_router(bookmarks_router)
api_router.include_router(follows_router)
api_router.include_router(comments_router)
api_router.include_router(search_router)
api_router.include_router(users_router)
