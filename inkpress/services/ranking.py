"""
Trending ranking.

A blog's trending score is a fixed linear combination of its engagement
counters, ``views * 0.7 + likes * 1.5`` with the default weights. Only approved
blogs are ranked. Ties are broken by the most recent ``published_at`` and then
by ``id`` so the order is deterministic.

The score exists in two forms that must stay in agreement: a plain function
for in-memory ranking and a SQL expression used by ``BlogService.trending``.
"""

from typing import Iterable, List, Optional
from sqlmodel import col
from inkpress.core.config import settings
from inkpress.models.blog import Blog, BlogStatus


def trending_score(
    views: int,
    likes: int,
    view_weight: Optional[float] = None,
    like_weight: Optional[float] = None,
) -> float:
    if view_weight is None:
        view_weight = settings.TRENDING_VIEW_WEIGHT
    if like_weight is None:
        like_weight = settings.TRENDING_LIKE_WEIGHT
    return (views or 0) * view_weight + (likes or 0) * like_weight


def trending_score_expression(view_weight: Optional[float] = None, like_weight: Optional[float] = None):
    if view_weight is None:
        view_weight = settings.TRENDING_VIEW_WEIGHT
    if like_weight is None:
        like_weight = settings.TRENDING_LIKE_WEIGHT
    return col(Blog.views) * view_weight + col(Blog.likes) * like_weight


def trending_order_by(view_weight: Optional[float] = None, like_weight: Optional[float] = None) -> list:
    return [
        trending_score_expression(view_weight, like_weight).desc(),
        col(Blog.published_at).desc(),
        col(Blog.id).asc(),
    ]


def rank_trending(blogs: Iterable, limit: Optional[int] = None) -> List:
    """Rank approved blogs by trending score, highest first, at most ``limit`` items."""
    if limit is None:
        limit = settings.TRENDING_LIMIT
    if limit <= 0:
        return []

    approved = [b for b in blogs if b.status == BlogStatus.APPROVED]
    # Stable sorts applied from the least to the most significant key
    approved.sort(key=lambda b: b.id)
    approved.sort(key=lambda b: (b.published_at is not None, b.published_at), reverse=True)
    approved.sort(key=lambda b: trending_score(b.views, b.likes), reverse=True)
    return approved[:limit]
