"""Pydantic schemas for the demo feeds."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ShortVideoItem(BaseModel):
    """A short video post."""

    id: int
    author: str = Field(..., description="Display name of the poster.")
    description: str = Field(..., description="Caption shown under the video.")
    posted_at: str = Field(..., description="ISO-8601 UTC timestamp of the post.")


class LiveSessionItem(BaseModel):
    """A live stream currently on air."""

    id: int
    streamer: str = Field(..., description="Display name of the streamer.")
    title: str = Field(..., description="Title of the live session.")
    started_at: str = Field(..., description="ISO-8601 UTC timestamp of the stream start.")
