from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException
from pydantic import AliasChoices, BaseModel, Field
from inkpress.models.blog import AdminStats, Blog, BlogCard, BlogStatus, PendingBlog
from inkpress.models.user import User
from inkpress.routers.auth import get_admin_user
from inkpress.routers.deps import get_blog_service, get_like_service, get_moderation_service
from inkpress.services.blog import BlogService
from inkpress.services.engagement import LikeService
from inkpress.services.moderation import ModerationService

router = APIRouter()

# Pydantic models for requests/responses
class StatusUpdate(BaseModel):
    status: BlogStatus
    rejection_reason: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("rejection_reason", "rejectionReason"),
    )

class LikeReconciliation(BaseModel):
    blog_id: str
    likes: int

@router.get("/blogs/pending", response_model=List[PendingBlog])
def get_pending_blogs(
    admin_user: User = Depends(get_admin_user),
    service: BlogService = Depends(get_blog_service),
):
    """Submissions waiting for review, newest first"""
    return service.list_pending()

@router.get("/blogs", response_model=List[BlogCard])
def get_blogs(
    status: Optional[BlogStatus] = None,
    admin_user: User = Depends(get_admin_user),
    service: BlogService = Depends(get_blog_service),
):
    """All blogs, optionally filtered by status"""
    return service.list_by_status(status)

@router.patch("/blogs/{blog_id}/status", response_model=Blog)
def update_blog_status(
    blog_id: str,
    update: StatusUpdate,
    admin_user: User = Depends(get_admin_user),
    moderation: ModerationService = Depends(get_moderation_service),
):
    """Approve, reject (reason required) or send a blog back to pending"""
    return moderation.set_status(blog_id, update.status, update.rejection_reason)

@router.post("/blogs/{blog_id}/likes/reconcile", response_model=LikeReconciliation)
def reconcile_likes(
    blog_id: str,
    admin_user: User = Depends(get_admin_user),
    service: BlogService = Depends(get_blog_service),
    likes: LikeService = Depends(get_like_service),
):
    """Recount like facts and repair the cached counter"""
    if not service.get(blog_id):
        raise HTTPException(status_code=404, detail="Blog not found")
    return LikeReconciliation(blog_id=blog_id, likes=likes.reconcile(blog_id))

@router.get("/stats", response_model=AdminStats)
def get_admin_stats(
    admin_user: User = Depends(get_admin_user),
    service: BlogService = Depends(get_blog_service),
):
    return service.admin_stats()
