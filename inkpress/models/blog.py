import uuid
from typing import Optional
from datetime import datetime
from enum import Enum
from sqlmodel import Field, SQLModel, Column
from sqlalchemy import Text
from inkpress.core.time import utcnow
from inkpress.models.user import AuthorSummary

class BlogStatus(str, Enum):
    DRAFT = "draft"
    PENDING = "pending"  # Waiting for admin review
    APPROVED = "approved"  # Publicly visible
    REJECTED = "rejected"

class Sentiment(str, Enum):
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"

class BlogCategory(str, Enum):
    TECHNOLOGY = "technology"
    LIFESTYLE = "lifestyle"
    BUSINESS = "business"
    HEALTH = "health"
    TRAVEL = "travel"
    EDUCATION = "education"
    ENTERTAINMENT = "entertainment"
    OTHER = "other"

def new_id() -> str:
    return str(uuid.uuid4())

class Blog(SQLModel, table=True):
    id: str = Field(default_factory=new_id, primary_key=True)

    # Author
    author_id: str = Field(foreign_key="user.id", index=True)

    # Content
    title: str = Field(index=True)
    content: str = Field(sa_column=Column(Text, nullable=False))
    excerpt: Optional[str] = Field(default=None, sa_column=Column(Text))
    category: BlogCategory = Field(index=True)

    # Status
    status: BlogStatus = Field(default=BlogStatus.DRAFT, index=True)
    rejection_reason: Optional[str] = Field(default=None, sa_column=Column(Text))
    published_at: Optional[datetime] = None

    # Engagement counters (likes mirrors the Like table)
    views: int = Field(default=0)
    likes: int = Field(default=0)

    # AI classification
    ai_sentiment: Optional[Sentiment] = None
    ai_score: Optional[int] = Field(default=None, ge=0, le=100)
    ai_analysis: Optional[str] = Field(default=None, sa_column=Column(Text))

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, index=True)
    updated_at: datetime = Field(default_factory=utcnow)


# Read shapes, one per query projection

class BlogCard(SQLModel):
    """Listing row: everything but the body."""
    id: str
    title: str
    excerpt: Optional[str] = None
    category: BlogCategory
    status: BlogStatus
    views: int = 0
    likes: int = 0
    ai_sentiment: Optional[Sentiment] = None
    ai_score: Optional[int] = None
    published_at: Optional[datetime] = None
    created_at: datetime
    author: AuthorSummary

class BlogDetail(BlogCard):
    content: str
    ai_analysis: Optional[str] = None
    rejection_reason: Optional[str] = None
    updated_at: datetime

class PendingBlog(SQLModel):
    id: str
    title: str
    excerpt: Optional[str] = None
    category: BlogCategory
    ai_sentiment: Optional[Sentiment] = None
    ai_score: Optional[int] = None
    created_at: datetime
    author: AuthorSummary

class UserStats(SQLModel):
    published: int = 0
    pending: int = 0
    total_views: int = 0
    total_likes: int = 0

class AdminStats(SQLModel):
    total_blogs: int = 0
    pending_review: int = 0
    average_ai_score: float = 0.0
