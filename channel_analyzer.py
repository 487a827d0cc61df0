#!/usr/bin/env python3
"""
Channel analysis: look up a channel's recent uploads and estimate earnings.

The lookup runs as a chain of dependent fetches. Each fetch either moves to
the next step, fails with an error (channel not found, API error), or ends
in one of the empty states below, which are successful zero-valued results.
"""
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from loguru import logger

from earnings_engine import (
    EMPTY_PLAYLIST_LABEL,
    NO_RECENT_VIDEOS_LABEL,
    NO_UPLOADS_LABEL,
    analyze_videos,
    empty_analysis,
)
from errors import ValidationError
from models import ChannelRecord, VideoRecord
from niche_table import DETAILED_TABLE, NicheTable
from response_cache import ONE_HOUR, NullCache, ResponseCache, make_cache_key

WINDOW_DAYS = 30


class LookupState(Enum):
    NO_UPLOADS = "no_uploads"
    EMPTY_PLAYLIST = "empty_playlist"
    NO_RECENT_VIDEOS = "no_recent_videos"
    HAS_RECENT_VIDEOS = "has_recent_videos"


EMPTY_STATE_LABELS = {
    LookupState.NO_UPLOADS: NO_UPLOADS_LABEL,
    LookupState.EMPTY_PLAYLIST: EMPTY_PLAYLIST_LABEL,
    LookupState.NO_RECENT_VIDEOS: NO_RECENT_VIDEOS_LABEL,
}


@dataclass
class LookupResult:
    state: LookupState
    channel: ChannelRecord
    videos: List[VideoRecord] = field(default_factory=list)
    recent_videos: List[VideoRecord] = field(default_factory=list)


def validate_request(query: Any, count: Any) -> tuple:
    """Return (query, count) or raise ValidationError."""
    if not query or not count:
        raise ValidationError("Missing query or count.")
    if not isinstance(query, str) or not query.strip():
        raise ValidationError("Query must be a channel ID or @handle.")
    if isinstance(count, bool):
        raise ValidationError("Count must be a positive integer.")
    try:
        count = int(count)
    except (TypeError, ValueError):
        raise ValidationError("Count must be a positive integer.")
    if count <= 0:
        raise ValidationError("Count must be a positive integer.")
    return query.strip(), count


def videos_in_window(videos: List[VideoRecord], now: datetime, window_days: int = WINDOW_DAYS) -> List[VideoRecord]:
    """Videos published strictly after `now - window_days`."""
    cutoff = now - timedelta(days=window_days)
    return [v for v in videos if v.published_at > cutoff]


def run_lookup(client, query: str, now: Optional[datetime] = None,
               window_days: int = WINDOW_DAYS) -> LookupResult:
    """
    Fetch a channel and its recent uploads.

    Args:
        client: YouTubeClient (or anything with the same methods)
        query: Channel ID, @handle or channel URL
        now: Reference time for the window, defaults to the current UTC time
        window_days: Length of the trailing window

    Returns:
        LookupResult in one of the LookupState terminal states

    Raises:
        NotFoundError: the handle or ID matches no channel
        UpstreamError: the API reported an error
    """
    now = now or datetime.now(timezone.utc)

    channel_id = client.resolve_channel_id(query)
    channel = client.get_channel(channel_id)
    if not channel.uploads_playlist_id:
        return LookupResult(LookupState.NO_UPLOADS, channel)

    video_ids = client.list_upload_ids(channel.uploads_playlist_id)
    if not video_ids:
        return LookupResult(LookupState.EMPTY_PLAYLIST, channel)

    videos = client.get_videos(video_ids)
    recent = videos_in_window(videos, now, window_days)
    if not recent:
        return LookupResult(LookupState.NO_RECENT_VIDEOS, channel, videos)

    return LookupResult(LookupState.HAS_RECENT_VIDEOS, channel, videos, recent)


def build_response(lookup: LookupResult, count: int, table: NicheTable = DETAILED_TABLE) -> Dict[str, Any]:
    if lookup.state is LookupState.HAS_RECENT_VIDEOS:
        analysis = analyze_videos(lookup.recent_videos, lookup.channel.subscriber_count, table)
    else:
        analysis = empty_analysis(EMPTY_STATE_LABELS[lookup.state], table)

    return {
        "channelData": lookup.channel.to_dict(),
        "videoData": [v.to_dict() for v in lookup.videos[:count]],
        "analysis": analysis.to_dict(),
    }


def analyze_channel(
    query: str,
    count: int,
    client,
    cache: Optional[ResponseCache] = None,
    table: NicheTable = DETAILED_TABLE,
    ttl: float = ONE_HOUR,
    now: Optional[datetime] = None,
    window_days: int = WINDOW_DAYS,
) -> Dict[str, Any]:
    """Analyze a channel, serving from `cache` when a fresh entry exists."""
    if cache is None:
        cache = NullCache()
    scope = "" if table is DETAILED_TABLE and window_days == WINDOW_DAYS else f"{table.name}-{window_days}d"
    key = make_cache_key(query, count, scope)

    cached = cache.get(key)
    if cached is not None:
        logger.debug("Cache hit for {}", key)
        return cached

    logger.debug("Cache miss for {}", key)
    lookup = run_lookup(client, query, now=now, window_days=window_days)
    response = build_response(lookup, count, table)
    logger.info(
        "Analyzed {} ({}): {} videos in window, state={}",
        lookup.channel.title, lookup.channel.id, len(lookup.recent_videos), lookup.state.value,
    )

    cache.set(key, response, ttl)
    return response
