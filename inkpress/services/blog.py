import logging
from typing import List, Optional
from sqlmodel import Session, select, col
from sqlalchemy import String, cast, desc, func, literal, or_, update
from inkpress.core.config import settings
from inkpress.core.time import utcnow
from inkpress.models.blog import (
    AdminStats,
    Blog,
    BlogCard,
    BlogCategory,
    BlogDetail,
    BlogStatus,
    PendingBlog,
    Sentiment,
    UserStats,
)
from inkpress.models.user import AuthorSummary, User
from inkpress.services.ranking import trending_order_by

logger = logging.getLogger(__name__)

LIKE_ESCAPE = "\\"


def escape_like(value: str) -> str:
    """Make ``%`` and ``_`` match literally inside a LIKE pattern."""
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def author_summary(user: User) -> AuthorSummary:
    return AuthorSummary(
        id=user.id,
        first_name=user.first_name,
        last_name=user.last_name,
        profile_image_url=user.profile_image_url,
    )


def to_card(blog: Blog, author: User) -> BlogCard:
    return BlogCard(
        id=blog.id,
        title=blog.title,
        excerpt=blog.excerpt,
        category=blog.category,
        status=blog.status,
        views=blog.views,
        likes=blog.likes,
        ai_sentiment=blog.ai_sentiment,
        ai_score=blog.ai_score,
        published_at=blog.published_at,
        created_at=blog.created_at,
        author=author_summary(author),
    )


class BlogService:
    def __init__(self, session: Session):
        self.session = session

    def _with_author(self):
        return select(Blog, User).join(User, col(Blog.author_id) == col(User.id))

    def _update(self, blog_id: str, **values) -> bool:
        values["updated_at"] = utcnow()
        result = self.session.exec(
            update(Blog)
            .where(col(Blog.id) == blog_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        self.session.commit()
        return result.rowcount > 0

    # Writes

    def create(
        self,
        author_id: str,
        title: str,
        content: str,
        category: BlogCategory,
        status: BlogStatus = BlogStatus.DRAFT,
        excerpt: Optional[str] = None,
    ) -> Blog:
        blog = Blog(
            author_id=author_id,
            title=title,
            content=content,
            category=category,
            status=status,
            excerpt=excerpt,
        )
        self.session.add(blog)
        self.session.commit()
        self.session.refresh(blog)
        return blog

    def increment_views(self, blog_id: str) -> bool:
        # Single UPDATE so concurrent readers never lose an increment
        return self._update(blog_id, views=col(Blog.views) + 1)

    def set_ai_analysis(self, blog_id: str, sentiment: Sentiment, score: int, analysis: str) -> bool:
        """Overwrite the AI fields. Status is left untouched."""
        return self._update(
            blog_id,
            ai_sentiment=Sentiment(sentiment),
            ai_score=max(0, min(100, int(score))),
            ai_analysis=analysis,
        )

    def set_status(self, blog_id: str, status: BlogStatus, rejection_reason: Optional[str] = None) -> bool:
        """
        Move a blog to ``status`` in one statement.

        Approving stamps ``published_at`` only when it is still empty, so a
        re-approved blog keeps its original publish date. The rejection reason
        is stored for ``rejected`` and cleared for every other status.
        """
        status = BlogStatus(status)
        values = {
            "status": status,
            "rejection_reason": rejection_reason if status == BlogStatus.REJECTED else None,
        }
        if status == BlogStatus.APPROVED:
            published_at = col(Blog.published_at)
            values["published_at"] = func.coalesce(published_at, literal(utcnow(), type_=published_at.type))
        return self._update(blog_id, **values)

    # Reads

    def get(self, blog_id: str) -> Optional[Blog]:
        return self.session.get(Blog, blog_id)

    def get_with_author(self, blog_id: str) -> Optional[BlogDetail]:
        row = self.session.exec(self._with_author().where(col(Blog.id) == blog_id)).first()
        if not row:
            return None
        blog, author = row
        return BlogDetail(
            **to_card(blog, author).model_dump(exclude={"author"}),
            author=author_summary(author),
            content=blog.content,
            ai_analysis=blog.ai_analysis,
            rejection_reason=blog.rejection_reason,
            updated_at=blog.updated_at,
        )

    def list_by_status(self, status: Optional[BlogStatus] = None) -> List[BlogCard]:
        """Newest first. ``None`` returns every status and is for privileged callers only."""
        query = self._with_author()
        if status is not None:
            query = query.where(col(Blog.status) == BlogStatus(status))
        rows = self.session.exec(query.order_by(desc(Blog.created_at), col(Blog.id))).all()
        return [to_card(blog, author) for blog, author in rows]

    def list_by_author(self, author_id: str) -> List[Blog]:
        return self.session.exec(
            select(Blog).where(col(Blog.author_id) == author_id).order_by(desc(Blog.created_at), col(Blog.id))
        ).all()

    def list_pending(self) -> List[PendingBlog]:
        rows = self.session.exec(
            self._with_author()
            .where(col(Blog.status) == BlogStatus.PENDING)
            .order_by(desc(Blog.created_at), col(Blog.id))
        ).all()
        return [
            PendingBlog(
                id=blog.id,
                title=blog.title,
                excerpt=blog.excerpt,
                category=blog.category,
                ai_sentiment=blog.ai_sentiment,
                ai_score=blog.ai_score,
                created_at=blog.created_at,
                author=author_summary(author),
            )
            for blog, author in rows
        ]

    def search(self, query: Optional[str]) -> List[BlogCard]:
        q = (query or "").strip()
        if not q:
            return []

        pattern = f"%{escape_like(q)}%"
        rows = self.session.exec(
            self._with_author()
            .where(
                col(Blog.status) == BlogStatus.APPROVED,
                or_(
                    col(Blog.title).ilike(pattern, escape=LIKE_ESCAPE),
                    col(Blog.content).ilike(pattern, escape=LIKE_ESCAPE),
                    cast(col(Blog.category), String).ilike(pattern, escape=LIKE_ESCAPE),
                ),
            )
            .order_by(desc(Blog.published_at), col(Blog.id))
        ).all()
        return [to_card(blog, author) for blog, author in rows]

    def trending(self, limit: Optional[int] = None) -> List[BlogCard]:
        if limit is None:
            limit = settings.TRENDING_LIMIT
        if limit <= 0:
            return []
        rows = self.session.exec(
            self._with_author()
            .where(col(Blog.status) == BlogStatus.APPROVED)
            .order_by(*trending_order_by())
            .limit(limit)
        ).all()
        return [to_card(blog, author) for blog, author in rows]

    # Analytics

    def _count(self, *criteria) -> int:
        return self.session.exec(select(func.count(Blog.id)).where(*criteria)).first() or 0

    def _sum(self, column, *criteria) -> int:
        return self.session.exec(select(func.coalesce(func.sum(column), 0)).where(*criteria)).first() or 0

    def user_stats(self, author_id: str) -> UserStats:
        mine = col(Blog.author_id) == author_id
        approved = col(Blog.status) == BlogStatus.APPROVED
        return UserStats(
            published=self._count(mine, approved),
            pending=self._count(mine, col(Blog.status) == BlogStatus.PENDING),
            total_views=self._sum(Blog.views, mine, approved),
            total_likes=self._sum(Blog.likes, mine, approved),
        )

    def admin_stats(self) -> AdminStats:
        average = self.session.exec(
            select(func.avg(Blog.ai_score)).where(col(Blog.status) == BlogStatus.APPROVED)
        ).first()
        return AdminStats(
            total_blogs=self._count(),
            pending_review=self._count(col(Blog.status) == BlogStatus.PENDING),
            average_ai_score=round(float(average or 0), 2),
        )
