# Import all models to register them with SQLModel
from inkpress.models.user import User, AuthorSummary
from inkpress.models.blog import (
    Blog,
    BlogStatus,
    BlogCategory,
    Sentiment,
    BlogCard,
    BlogDetail,
    PendingBlog,
    UserStats,
    AdminStats,
)
from inkpress.models.comment import Comment, CommentRead
from inkpress.models.like import Like

__all__ = [
    "User",
    "AuthorSummary",
    "Blog",
    "BlogStatus",
    "BlogCategory",
    "Sentiment",
    "BlogCard",
    "BlogDetail",
    "PendingBlog",
    "UserStats",
    "AdminStats",
    "Comment",
    "CommentRead",
    "Like",
]
