from datetime import datetime
from sqlmodel import Field, SQLModel, Column
from sqlalchemy import Text
from inkpress.core.time import utcnow
from inkpress.models.blog import new_id
from inkpress.models.user import AuthorSummary

class Comment(SQLModel, table=True):
    id: str = Field(default_factory=new_id, primary_key=True)

    # References
    blog_id: str = Field(foreign_key="blog.id", index=True)
    author_id: str = Field(foreign_key="user.id", index=True)

    content: str = Field(sa_column=Column(Text, nullable=False))

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, index=True)

class CommentRead(SQLModel):
    id: str
    content: str
    created_at: datetime
    author: AuthorSummary
