"""
Pytest configuration and shared fixtures.
"""

from datetime import datetime, timedelta, timezone
from typing import List, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

import inkpress.models  # noqa: F401
from inkpress.db.session import get_session
from inkpress.main import app
from inkpress.models.blog import Blog, BlogCategory, BlogStatus
from inkpress.models.user import User
from inkpress.routers.deps import get_classifier
from inkpress.services.auth import AuthService
from inkpress.services.classifier import ClassifierGateway, Verdict
from inkpress.services.user import UserService

BASE_TIME = datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


class FakeClassifier(ClassifierGateway):
    """Classifier double returning canned results and recording what it saw."""

    def __init__(self, verdict: Optional[Verdict] = None, excerpt: str = "Generated excerpt", suggestions: Optional[List[str]] = None):
        super().__init__(client=None, model="fake-model")
        self.verdict = verdict or Verdict(sentiment="positive", score=90, analysis="Well written", flagged=False)
        self.excerpt = excerpt
        self.suggestions = suggestions or []
        self.classified = []
        self.summarized = []

    def classify(self, content: str) -> Verdict:
        self.classified.append(content)
        return self.verdict

    def summarize(self, content: str) -> str:
        self.summarized.append(content)
        return self.excerpt

    def suggest_improvements(self, content: str) -> List[str]:
        return list(self.suggestions)


@pytest.fixture(name="engine")
def engine_fixture():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture(name="session")
def session_fixture(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def classifier():
    return FakeClassifier()


@pytest.fixture(name="client")
def client_fixture(session, classifier):
    app.dependency_overrides[get_session] = lambda: session
    app.dependency_overrides[get_classifier] = lambda: classifier
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


def make_user(session: Session, sub: str, admin: bool = False, **claims) -> User:
    users = UserService(session)
    user = users.upsert({"sub": sub, "first_name": sub.title(), **claims})
    if admin:
        user = users.set_admin(sub, True)
    return user


def make_blog(
    session: Session,
    author: User,
    title: str = "Untitled",
    content: str = "Some content",
    category: BlogCategory = BlogCategory.OTHER,
    status: BlogStatus = BlogStatus.APPROVED,
    views: int = 0,
    likes: int = 0,
    age_minutes: int = 0,
    published: Optional[bool] = None,
) -> Blog:
    """Insert a blog directly. ``age_minutes`` pushes created/published times into the past."""
    stamp = BASE_TIME - timedelta(minutes=age_minutes)
    if published is None:
        published = status == BlogStatus.APPROVED
    blog = Blog(
        author_id=author.id,
        title=title,
        content=content,
        category=category,
        status=status,
        views=views,
        likes=likes,
        created_at=stamp,
        updated_at=stamp,
        published_at=stamp if published else None,
    )
    session.add(blog)
    session.commit()
    session.refresh(blog)
    return blog


def auth_headers(sub: str, expires_delta: Optional[timedelta] = None, **claims) -> dict:
    token = AuthService().create_access_token({"sub": sub, **claims}, expires_delta=expires_delta)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def author(session):
    return make_user(session, "author-1", email="author@example.com")


@pytest.fixture
def reader(session):
    return make_user(session, "reader-1", email="reader@example.com")


@pytest.fixture
def admin(session):
    return make_user(session, "admin-1", admin=True, email="admin@example.com")
