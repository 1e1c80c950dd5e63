"""Workout video catalog routes."""

from typing import List

from fastapi import APIRouter, Depends, Query

from ..deps import get_video_catalog
from ...integrations.video_catalog import VideoCatalogClient
from ...models.coach import VideoSummary


router = APIRouter()


@router.get("/search", response_model=List[VideoSummary])
async def search_videos(
    q: str = Query(..., min_length=1),
    count: int = Query(10, ge=1, le=50),
    catalog: VideoCatalogClient = Depends(get_video_catalog),
):
    """Search workout videos by keyword."""
    return await catalog.search(q, count)


@router.get("/trending", response_model=List[VideoSummary])
async def trending_videos(
    count: int = Query(10, ge=1, le=50),
    catalog: VideoCatalogClient = Depends(get_video_catalog),
):
    return await catalog.trending(count)


@router.get("/newest", response_model=List[VideoSummary])
async def newest_videos(
    count: int = Query(10, ge=1, le=50),
    catalog: VideoCatalogClient = Depends(get_video_catalog),
):
    return await catalog.newest(count)


# Registered last so the fixed paths above take precedence
@router.get("/{category}", response_model=List[VideoSummary])
async def videos_by_category(
    category: str,
    count: int = Query(10, ge=1, le=50),
    catalog: VideoCatalogClient = Depends(get_video_catalog),
):
    """Videos for a category such as hiit, yoga or strength."""
    return await catalog.by_category(category, count)
