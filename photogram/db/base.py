from photogram.models.base import Base, ViewBase
from photogram.models.comment import Comment
from photogram.models.post import Post
from photogram.models.post_bookmark import PostBookmark
from photogram.models.post_like import PostLike
from photogram.models.stats import PostStats, UserStats
from photogram.models.user import User
from photogram.models.user_follow import UserFollow

__all__ = [
    "Base",
    "ViewBase",
    "User",
    "Post",
    "Comment",
    "PostLike",
    "PostBookmark",
    "UserFollow",
    "PostStats",
    "UserStats",
]
