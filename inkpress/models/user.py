from typing import Optional
from datetime import datetime
from sqlmodel import Field, SQLModel
from inkpress.core.time import utcnow

class User(SQLModel, table=True):
    # Subject claim issued by the identity provider
    id: str = Field(primary_key=True)

    # Basic Info
    email: Optional[str] = Field(default=None, unique=True, index=True)
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    # Profile
    profile_image_url: Optional[str] = None

    # Account Status
    is_admin: bool = Field(default=False)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

class AuthorSummary(SQLModel):
    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None
