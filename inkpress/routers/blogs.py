from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, ConfigDict, Field
from inkpress.core.config import settings
from inkpress.models.blog import Blog, BlogCard, BlogDetail, BlogStatus
from inkpress.models.comment import Comment, CommentRead
from inkpress.models.user import User
from inkpress.routers.auth import get_current_user, get_current_user_optional
from inkpress.routers.deps import (
    get_blog_service,
    get_classifier,
    get_comment_service,
    get_like_service,
    get_moderation_service,
)
from inkpress.services.blog import BlogService
from inkpress.services.classifier import ClassifierGateway
from inkpress.services.comment import CommentService
from inkpress.services.engagement import LikeService
from inkpress.services.moderation import BlogSubmission, ModerationService

router = APIRouter()

class CommentCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    content: str = Field(min_length=1, max_length=5000)

class SuggestionRequest(BaseModel):
    content: str = Field(min_length=1)

class SuggestionResponse(BaseModel):
    suggestions: List[str]

class LikeResponse(BaseModel):
    liked: bool

def can_view(blog: Blog, user: Optional[User]) -> bool:
    """Approved blogs are public; anything else only for its author and admins."""
    if blog.status == BlogStatus.APPROVED:
        return True
    return user is not None and (user.is_admin or user.id == blog.author_id)

def get_visible_blog(blog_id: str, user: Optional[User], service: BlogService) -> Blog:
    blog = service.get(blog_id)
    if not blog or not can_view(blog, user):
        raise HTTPException(status_code=404, detail="Blog not found")
    return blog

@router.get("/", response_model=List[BlogCard])
def read_blogs(
    status: Optional[BlogStatus] = None,
    trending: bool = False,
    search: Optional[str] = None,
    limit: Optional[int] = Query(None, ge=1, le=50),
    current_user: Optional[User] = Depends(get_current_user_optional),
    service: BlogService = Depends(get_blog_service),
):
    """
    List blogs. ``trending=true`` ranks approved blogs by engagement,
    ``search`` matches approved blogs, otherwise filter by ``status``
    (approved unless the caller is an admin).
    """
    if trending:
        return service.trending(limit or settings.TRENDING_LIMIT)

    if search is not None:
        return service.search(search)

    status = status or BlogStatus.APPROVED
    if status != BlogStatus.APPROVED:
        if current_user is None:
            raise HTTPException(status_code=401, detail="Not authenticated", headers={"WWW-Authenticate": "Bearer"})
        if not current_user.is_admin:
            raise HTTPException(status_code=403, detail="Admin access required")
    return service.list_by_status(status)

@router.post("/", response_model=Blog)
def create_blog(
    submission: BlogSubmission,
    current_user: User = Depends(get_current_user),
    moderation: ModerationService = Depends(get_moderation_service),
):
    return moderation.submit(current_user.id, submission)

@router.post("/suggestions", response_model=SuggestionResponse)
def suggest_improvements(
    request: SuggestionRequest,
    current_user: User = Depends(get_current_user),
    classifier: ClassifierGateway = Depends(get_classifier),
):
    return SuggestionResponse(suggestions=classifier.suggest_improvements(request.content))

@router.get("/{blog_id}", response_model=BlogDetail)
def read_blog(
    blog_id: str,
    current_user: Optional[User] = Depends(get_current_user_optional),
    service: BlogService = Depends(get_blog_service),
):
    get_visible_blog(blog_id, current_user, service)
    service.increment_views(blog_id)
    return service.get_with_author(blog_id)

@router.post("/{blog_id}/like", response_model=LikeResponse)
def toggle_like(
    blog_id: str,
    current_user: User = Depends(get_current_user),
    service: BlogService = Depends(get_blog_service),
    likes: LikeService = Depends(get_like_service),
):
    get_visible_blog(blog_id, current_user, service)
    return LikeResponse(liked=likes.toggle_like(current_user.id, blog_id))

@router.get("/{blog_id}/comments", response_model=List[CommentRead])
def read_comments(
    blog_id: str,
    current_user: Optional[User] = Depends(get_current_user_optional),
    service: BlogService = Depends(get_blog_service),
    comments: CommentService = Depends(get_comment_service),
):
    get_visible_blog(blog_id, current_user, service)
    return comments.list_for_blog(blog_id)

@router.post("/{blog_id}/comments", response_model=Comment)
def create_comment(
    blog_id: str,
    comment_in: CommentCreate,
    current_user: User = Depends(get_current_user),
    service: BlogService = Depends(get_blog_service),
    comments: CommentService = Depends(get_comment_service),
):
    get_visible_blog(blog_id, current_user, service)
    return comments.create(blog_id=blog_id, author_id=current_user.id, content=comment_in.content)
