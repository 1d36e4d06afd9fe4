"""Demo feed data for the short video and live stream tabs."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable

from srteen.schemas.feed import LiveSessionItem, ShortVideoItem


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_iso(moment: datetime) -> str:
    """Format a UTC datetime as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


# (id, author, description, age)
_SHORTS = (
    (1, "Alice", "Check out this street dance move!", timedelta(hours=1)),
    (2, "Bob", "New graffiti art in town!", timedelta(hours=2)),
)

# (id, streamer, title, age)
_LIVE = (
    (1, "Charlie", "Skateboarding live session", timedelta(minutes=15)),
    (2, "Dana", "Breakdancing battle!", timedelta(minutes=5)),
)


class FeedService:
    """Serves the hardcoded demo feeds, timestamped relative to "now"."""

    def __init__(self, clock: Callable[[], datetime] = _utcnow) -> None:
        self._clock = clock

    def shorts(self) -> list[ShortVideoItem]:
        now = self._clock()
        return [
            ShortVideoItem(id=item_id, author=author, description=description, posted_at=to_iso(now - age))
            for item_id, author, description, age in _SHORTS
        ]

    def live(self) -> list[LiveSessionItem]:
        now = self._clock()
        return [
            LiveSessionItem(id=item_id, streamer=streamer, title=title, started_at=to_iso(now - age))
            for item_id, streamer, title, age in _LIVE
        ]
