import logging
from typing import Optional
from fastapi import HTTPException
from pydantic import BaseModel, ConfigDict, Field
from sqlmodel import Session
from inkpress.core.config import settings
from inkpress.models.blog import Blog, BlogCategory, BlogStatus
from inkpress.services.blog import BlogService
from inkpress.services.classifier import ClassifierGateway, Verdict

logger = logging.getLogger(__name__)

# Statuses an author may request when submitting
SUBMITTABLE_STATUSES = (BlogStatus.DRAFT, BlogStatus.PENDING)
# Statuses an admin may move a blog to
REVIEW_STATUSES = (BlogStatus.PENDING, BlogStatus.APPROVED, BlogStatus.REJECTED)


class AutoApprovalPolicy(BaseModel):
    min_score: int = 80
    allow_flagged: bool = False

    @classmethod
    def from_settings(cls) -> "AutoApprovalPolicy":
        return cls(
            min_score=settings.AUTO_APPROVE_MIN_SCORE,
            allow_flagged=settings.AUTO_APPROVE_ALLOW_FLAGGED,
        )

    def clears(self, verdict: Verdict) -> bool:
        return verdict.score >= self.min_score and (self.allow_flagged or not verdict.flagged)


def decide(submitted_status: BlogStatus, verdict: Verdict, policy: Optional[AutoApprovalPolicy] = None) -> BlogStatus:
    """
    Resulting status for a fresh submission.

    Drafts stay drafts whatever the verdict. A pending submission is approved
    when the verdict clears the policy and otherwise waits for an admin.
    """
    policy = policy or AutoApprovalPolicy.from_settings()
    submitted_status = BlogStatus(submitted_status)

    if submitted_status == BlogStatus.DRAFT:
        return BlogStatus.DRAFT
    if submitted_status == BlogStatus.PENDING:
        return BlogStatus.APPROVED if policy.clears(verdict) else BlogStatus.PENDING
    raise ValueError(f"Cannot submit a blog as {submitted_status.value}")


class BlogSubmission(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(min_length=1, max_length=300)
    content: str = Field(min_length=1)
    category: BlogCategory
    status: BlogStatus = BlogStatus.PENDING
    excerpt: Optional[str] = None


class ModerationService:
    def __init__(
        self,
        session: Session,
        classifier: ClassifierGateway,
        policy: Optional[AutoApprovalPolicy] = None,
    ):
        self.session = session
        self.blogs = BlogService(session)
        self.classifier = classifier
        self.policy = policy or AutoApprovalPolicy.from_settings()

    def submit(self, author_id: str, submission: BlogSubmission) -> Blog:
        """Create the blog, classify it, store the verdict and apply the auto-approval policy."""
        if submission.status not in SUBMITTABLE_STATUSES:
            raise HTTPException(status_code=400, detail="Blogs can only be submitted as draft or pending")

        excerpt = submission.excerpt or self.classifier.summarize(submission.content)
        blog = self.blogs.create(
            author_id=author_id,
            title=submission.title,
            content=submission.content,
            category=submission.category,
            status=submission.status,
            excerpt=excerpt,
        )

        verdict = self.classifier.classify(submission.content)
        self.blogs.set_ai_analysis(blog.id, verdict.sentiment, verdict.score, verdict.analysis)
        if verdict.flagged:
            logger.info(f"Blog {blog.id} flagged by AI: {verdict.flag_reason or 'no reason given'}")

        final_status = decide(submission.status, verdict, self.policy)
        if final_status != submission.status:
            self.blogs.set_status(blog.id, final_status)
            logger.info(f"Blog {blog.id} auto-approved with AI score {verdict.score}")

        self.session.refresh(blog)
        return blog

    def set_status(self, blog_id: str, new_status: BlogStatus, rejection_reason: Optional[str] = None) -> Blog:
        """Admin review transition."""
        new_status = BlogStatus(new_status)
        if new_status not in REVIEW_STATUSES:
            raise HTTPException(status_code=400, detail=f"Cannot move a blog to {new_status.value}")

        reason = rejection_reason.strip() if rejection_reason else ""
        if new_status == BlogStatus.REJECTED and not reason:
            raise HTTPException(status_code=400, detail="A rejection reason is required")

        if not self.blogs.set_status(blog_id, new_status, reason or None):
            raise HTTPException(status_code=404, detail="Blog not found")

        logger.info(f"Blog {blog_id} moved to {new_status.value}")
        return self.blogs.get(blog_id)
