from typing import List
from fastapi import APIRouter, Depends
from inkpress.models.blog import Blog, UserStats
from inkpress.models.user import User
from inkpress.routers.auth import get_current_user
from inkpress.routers.deps import get_blog_service, get_like_service
from inkpress.services.blog import BlogService
from inkpress.services.engagement import LikeService

router = APIRouter()

@router.get("/blogs", response_model=List[Blog])
def read_my_blogs(
    current_user: User = Depends(get_current_user),
    service: BlogService = Depends(get_blog_service),
):
    """
    Every blog written by the current user, drafts and rejected ones included.
    """
    return service.list_by_author(current_user.id)

@router.get("/stats", response_model=UserStats)
def read_my_stats(
    current_user: User = Depends(get_current_user),
    service: BlogService = Depends(get_blog_service),
):
    return service.user_stats(current_user.id)

@router.get("/likes", response_model=List[str])
def read_my_likes(
    current_user: User = Depends(get_current_user),
    likes: LikeService = Depends(get_like_service),
):
    """
    Ids of the blogs the current user has liked, most recent first.
    """
    return likes.liked_blog_ids(current_user.id)
