from datetime import datetime
from sqlmodel import Field, SQLModel
from sqlalchemy import UniqueConstraint
from inkpress.core.time import utcnow
from inkpress.models.blog import new_id

class Like(SQLModel, table=True):
    __table_args__ = (UniqueConstraint("user_id", "blog_id", name="like_user_blog_unique"),)

    id: str = Field(default_factory=new_id, primary_key=True)

    # References
    user_id: str = Field(foreign_key="user.id", index=True)
    blog_id: str = Field(foreign_key="blog.id", index=True)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow)
