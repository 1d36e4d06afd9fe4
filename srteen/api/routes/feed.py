from __future__ import annotations

from fastapi import APIRouter, Depends

from srteen.api.dependencies import get_feed_service
from srteen.schemas.feed import LiveSessionItem, ShortVideoItem
from srteen.services.feed_service import FeedService

router = APIRouter(prefix="/feed", tags=["Feed"])


@router.get("/shorts", response_model=list[ShortVideoItem])
def get_shorts(feed: FeedService = Depends(get_feed_service)) -> list[ShortVideoItem]:
    """Short video posts, newest first."""

    return feed.shorts()


@router.get("/live", response_model=list[LiveSessionItem])
def get_live(feed: FeedService = Depends(get_feed_service)) -> list[LiveSessionItem]:
    """Live sessions currently on air."""

    return feed.live()
