from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from ....core.runtime import get_redis
from ....core.security import require_user_id
from ....schemas.blogs import (
    BlogCreate,
    BlogIdResponse,
    BlogList,
    CountResponse,
    GetBlogRequest,
    GetBlogResponse,
    IsLikedResponse,
    LikeRequest,
    LikeResponse,
    PageRequest,
    SearchCountRequest,
    SearchRequest,
)
from ....services import blogs


router = APIRouter()


@router.post("/latest-blogs", response_model=BlogList)
async def latest_blogs(payload: PageRequest, redis: Any = Depends(get_redis)) -> BlogList:
    return BlogList(blogs=await blogs.latest(redis, payload.page))


@router.post("/all-latest-blogs-count", response_model=CountResponse)
async def all_latest_blogs_count(redis: Any = Depends(get_redis)) -> CountResponse:
    return CountResponse(totalDocs=await blogs.count_latest(redis))


@router.get("/trending-blogs", response_model=BlogList)
async def trending_blogs(redis: Any = Depends(get_redis)) -> BlogList:
    return BlogList(blogs=await blogs.trending(redis))


@router.post("/search-blogs", response_model=BlogList)
async def search_blogs(payload: SearchRequest, redis: Any = Depends(get_redis)) -> BlogList:
    return BlogList(blogs=await blogs.search(redis, payload))


@router.post("/search-blogs-count", response_model=CountResponse)
async def search_blogs_count(payload: SearchCountRequest, redis: Any = Depends(get_redis)) -> CountResponse:
    return CountResponse(totalDocs=await blogs.count_search(redis, payload))


@router.post("/create-blog", response_model=BlogIdResponse)
async def create_blog(
    payload: BlogCreate,
    user_id: str = Depends(require_user_id),
    redis: Any = Depends(get_redis),
) -> BlogIdResponse:
    return BlogIdResponse(id=await blogs.save_blog(redis, user_id, payload))


@router.post("/get-blog", response_model=GetBlogResponse)
async def get_blog(payload: GetBlogRequest, redis: Any = Depends(get_redis)) -> GetBlogResponse:
    blog = await blogs.get_blog(redis, payload.blog_id, draft=payload.draft, mode=payload.mode)
    return GetBlogResponse(blog=blog)


@router.post("/like-blog", response_model=LikeResponse)
async def like_blog(
    payload: LikeRequest,
    user_id: str = Depends(require_user_id),
    redis: Any = Depends(get_redis),
) -> LikeResponse:
    liked, total = await blogs.toggle_like(redis, user_id, payload.blog_id)
    return LikeResponse(liked_by_user=liked, total_likes=total)


@router.post("/isliked-by-user", response_model=IsLikedResponse)
async def isliked_by_user(
    payload: LikeRequest,
    user_id: str = Depends(require_user_id),
    redis: Any = Depends(get_redis),
) -> IsLikedResponse:
    return IsLikedResponse(result=await blogs.is_liked(redis, user_id, payload.blog_id))
