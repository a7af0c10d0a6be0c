import logging
from typing import List
from sqlmodel import Session, select, col
from sqlalchemy import delete, func, update
from sqlalchemy.exc import IntegrityError
from inkpress.core.time import utcnow
from inkpress.models.blog import Blog
from inkpress.models.like import Like

logger = logging.getLogger(__name__)

class LikeService:
    """
    Like facts are the source of truth; ``Blog.likes`` is a cached counter
    moved by exactly one in the same transaction as the fact it mirrors.
    """

    def __init__(self, session: Session):
        self.session = session

    def _shift_counter(self, blog_id: str, delta: int):
        self.session.exec(
            update(Blog)
            .where(col(Blog.id) == blog_id)
            .values(likes=col(Blog.likes) + delta, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )

    def toggle_like(self, user_id: str, blog_id: str) -> bool:
        """Flip the like for (user, blog). Returns True when the blog is now liked."""
        removed = self.session.exec(
            delete(Like).where(col(Like.user_id) == user_id, col(Like.blog_id) == blog_id)
        )
        if removed.rowcount:
            self._shift_counter(blog_id, -1)
            self.session.commit()
            return False

        try:
            self.session.add(Like(user_id=user_id, blog_id=blog_id))
            self.session.flush()
        except IntegrityError:
            # A concurrent toggle inserted the same pair first; its increment stands
            self.session.rollback()
            logger.info(f"Like for user {user_id} on blog {blog_id} already recorded")
            return True

        self._shift_counter(blog_id, 1)
        self.session.commit()
        return True

    def has_liked(self, user_id: str, blog_id: str) -> bool:
        return self.session.exec(
            select(Like).where(col(Like.user_id) == user_id, col(Like.blog_id) == blog_id)
        ).first() is not None

    def likes_count(self, blog_id: str) -> int:
        """Recount the like facts for a blog, independent of the cached counter."""
        return self.session.exec(
            select(func.count(Like.id)).where(col(Like.blog_id) == blog_id)
        ).first() or 0

    def reconcile(self, blog_id: str) -> int:
        """Rewrite the cached counter from the fact table and return the corrected value."""
        actual = self.likes_count(blog_id)
        blog = self.session.get(Blog, blog_id)
        if blog is not None and blog.likes != actual:
            logger.warning(f"Like counter drift on blog {blog_id}: cached {blog.likes}, actual {actual}")
            self.session.exec(
                update(Blog)
                .where(col(Blog.id) == blog_id)
                .values(likes=actual, updated_at=utcnow())
                .execution_options(synchronize_session=False)
            )
            self.session.commit()
        return actual

    def liked_blog_ids(self, user_id: str) -> List[str]:
        return self.session.exec(
            select(Like.blog_id).where(col(Like.user_id) == user_id).order_by(col(Like.created_at).desc())
        ).all()
