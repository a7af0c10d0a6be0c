from typing import List
from sqlmodel import Session, select, col
from sqlalchemy import desc
from inkpress.models.comment import Comment, CommentRead
from inkpress.models.user import User
from inkpress.services.blog import author_summary

class CommentService:
    def __init__(self, session: Session):
        self.session = session

    def create(self, blog_id: str, author_id: str, content: str) -> Comment:
        comment = Comment(blog_id=blog_id, author_id=author_id, content=content)
        self.session.add(comment)
        self.session.commit()
        self.session.refresh(comment)
        return comment

    def list_for_blog(self, blog_id: str) -> List[CommentRead]:
        rows = self.session.exec(
            select(Comment, User)
            .join(User, col(Comment.author_id) == col(User.id))
            .where(col(Comment.blog_id) == blog_id)
            .order_by(desc(Comment.created_at), col(Comment.id))
        ).all()
        return [
            CommentRead(
                id=comment.id,
                content=comment.content,
                created_at=comment.created_at,
                author=author_summary(author),
            )
            for comment, author in rows
        ]
