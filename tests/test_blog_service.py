"""
Tests for inkpress.services.blog.
"""

from concurrent.futures import ThreadPoolExecutor
from datetime import timedelta

import pytest
from sqlmodel import Session, SQLModel, create_engine

from inkpress.core.time import utcnow
from inkpress.models.blog import Blog, BlogCategory, BlogStatus, Sentiment
from inkpress.services.blog import BlogService
from tests.conftest import make_blog, make_user


class TestSearch:
    @pytest.fixture
    def blogs(self, session, author):
        return {
            "python": make_blog(session, author, title="Learning Python", content="Generators and decorators", category=BlogCategory.TECHNOLOGY, age_minutes=10),
            "travel": make_blog(session, author, title="Two weeks in Lisbon", content="Trams, pastries and python-free holidays", category=BlogCategory.TRAVEL, age_minutes=5),
            "health": make_blog(session, author, title="Morning routines", content="Sleep matters", category=BlogCategory.HEALTH, age_minutes=1),
            "pending": make_blog(session, author, title="Python internals", content="Bytecode", status=BlogStatus.PENDING),
        }

    @pytest.mark.parametrize("query", ["", "   ", None])
    def test_blank_query_returns_nothing(self, session, blogs, query):
        assert BlogService(session).search(query) == []

    def test_no_match(self, session, blogs):
        assert BlogService(session).search("kubernetes") == []

    def test_title_and_content_are_case_insensitive(self, session, blogs):
        ids = [card.id for card in BlogService(session).search("PYTHON")]
        # Most recently published first
        assert ids == [blogs["travel"].id, blogs["python"].id]

    def test_excludes_unapproved(self, session, blogs):
        ids = [card.id for card in BlogService(session).search("bytecode")]
        assert ids == []

    def test_matches_category(self, session, blogs):
        ids = [card.id for card in BlogService(session).search("health")]
        assert ids == [blogs["health"].id]

    @pytest.mark.parametrize("query", ["%", "_", "\\", "%%"])
    def test_like_wildcards_match_literally(self, session, blogs, query):
        assert BlogService(session).search(query) == []

    def test_percent_sign_in_text(self, session, author, blogs):
        match = make_blog(session, author, title="100% sourdough", content="Flour, water, salt")
        make_blog(session, author, title="1000 loaves", content="Scaling a bakery")

        assert [card.id for card in BlogService(session).search("100%")] == [match.id]

    def test_underscore_in_text(self, session, author, blogs):
        match = make_blog(session, author, title="Using snake_case", content="Naming things")
        make_blog(session, author, title="Using snakeXcase", content="Naming other things")

        assert [card.id for card in BlogService(session).search("snake_case")] == [match.id]

    def test_results_carry_author(self, session, author, blogs):
        card = BlogService(session).search("routines")[0]
        assert card.author.id == author.id
        assert card.author.first_name == author.first_name


class TestListing:
    def test_list_by_status_newest_first(self, session, author):
        old = make_blog(session, author, title="Old", age_minutes=30)
        new = make_blog(session, author, title="New", age_minutes=1)
        make_blog(session, author, title="Waiting", status=BlogStatus.PENDING)

        ids = [card.id for card in BlogService(session).list_by_status(BlogStatus.APPROVED)]
        assert ids == [new.id, old.id]

    def test_list_every_status(self, session, author):
        for status in BlogStatus:
            make_blog(session, author, status=status)
        assert len(BlogService(session).list_by_status()) == len(BlogStatus)

    def test_list_by_author(self, session, author, reader):
        mine = make_blog(session, author, status=BlogStatus.DRAFT)
        make_blog(session, reader)
        assert [blog.id for blog in BlogService(session).list_by_author(author.id)] == [mine.id]

    def test_list_pending(self, session, author):
        first = make_blog(session, author, status=BlogStatus.PENDING, age_minutes=20)
        second = make_blog(session, author, status=BlogStatus.PENDING, age_minutes=10)
        make_blog(session, author, status=BlogStatus.REJECTED)

        pending = BlogService(session).list_pending()
        assert [blog.id for blog in pending] == [second.id, first.id]
        assert pending[0].author.id == author.id

    def test_get_with_author(self, session, author):
        blog = make_blog(session, author, title="Full read", content="Body text")
        detail = BlogService(session).get_with_author(blog.id)

        assert detail.content == "Body text"
        assert detail.author.id == author.id

    def test_get_with_author_unknown(self, session):
        assert BlogService(session).get_with_author("missing") is None


class TestCounters:
    def test_increment_views(self, session, author):
        blog = make_blog(session, author, views=3)
        service = BlogService(session)

        assert service.increment_views(blog.id) is True
        session.refresh(blog)
        assert blog.views == 4

    def test_increment_unknown_blog(self, session):
        assert BlogService(session).increment_views("missing") is False

    def test_concurrent_views_are_not_lost(self, tmp_path):
        engine = create_engine(
            f"sqlite:///{tmp_path / 'views.db'}",
            connect_args={"check_same_thread": False, "timeout": 30},
        )
        SQLModel.metadata.create_all(engine)
        with Session(engine) as session:
            author = make_user(session, "author-1")
            blog_id = make_blog(session, author).id

        def view(_):
            with Session(engine) as session:
                BlogService(session).increment_views(blog_id)

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(view, range(100)))

        with Session(engine) as session:
            assert BlogService(session).get(blog_id).views == 100
        engine.dispose()

    def test_set_ai_analysis_clamps_score(self, session, author):
        blog = make_blog(session, author)
        BlogService(session).set_ai_analysis(blog.id, Sentiment.POSITIVE, 140, "Great")

        session.refresh(blog)
        assert blog.ai_score == 100
        assert blog.ai_analysis == "Great"


class TestTimestamps:
    def test_defaults_are_aware_utc(self, author):
        blog = Blog(author_id=author.id, title="t", content="c", category=BlogCategory.OTHER)
        assert blog.created_at.utcoffset() == timedelta(0)
        assert blog.updated_at.utcoffset() == timedelta(0)
        assert utcnow().tzinfo is not None

    def test_service_writes_store_timestamps(self, session, author):
        service = BlogService(session)
        blog = service.create(author.id, "Title", "Body", BlogCategory.OTHER, status=BlogStatus.PENDING)

        assert service.increment_views(blog.id)
        assert service.set_status(blog.id, BlogStatus.APPROVED)

        stored = service.get(blog.id)
        session.refresh(stored)
        assert stored.views == 1
        assert stored.published_at is not None
        assert stored.updated_at is not None


class TestStats:
    def test_user_stats(self, session, author, reader):
        make_blog(session, author, views=10, likes=2)
        make_blog(session, author, views=5, likes=1)
        make_blog(session, author, status=BlogStatus.PENDING, views=100, likes=100, published=False)
        make_blog(session, author, status=BlogStatus.DRAFT)
        make_blog(session, reader, views=1000)

        stats = BlogService(session).user_stats(author.id)
        assert stats.published == 2
        assert stats.pending == 1
        assert stats.total_views == 15
        assert stats.total_likes == 3

    def test_user_stats_for_new_user(self, session, reader):
        stats = BlogService(session).user_stats(reader.id)
        assert (stats.published, stats.pending, stats.total_views, stats.total_likes) == (0, 0, 0, 0)

    def test_admin_stats(self, session, author):
        service = BlogService(session)
        for score in (90, 81):
            blog = make_blog(session, author)
            service.set_ai_analysis(blog.id, Sentiment.POSITIVE, score, "ok")
        pending = make_blog(session, author, status=BlogStatus.PENDING)
        service.set_ai_analysis(pending.id, Sentiment.NEGATIVE, 10, "weak")

        stats = service.admin_stats()
        assert stats.total_blogs == 3
        assert stats.pending_review == 1
        assert stats.average_ai_score == 85.5

    def test_admin_stats_empty(self, session):
        stats = BlogService(session).admin_stats()
        assert stats.total_blogs == 0
        assert stats.average_ai_score == 0.0
