#!/usr/bin/env python3
"""
YouTube Data API integration

Each call is one step of the channel lookup: handle -> channel id ->
uploads playlist -> video ids -> video statistics.
"""
import re
from typing import Dict, List, Optional, Tuple

import requests
from loguru import logger

from earnings_engine import parse_duration_to_seconds
from errors import NotFoundError, UpstreamError
from models import ChannelRecord, VideoRecord, parse_count, parse_timestamp

YOUTUBE_API_BASE = "https://www.googleapis.com/youtube/v3"
MAX_RESULTS = 50

CHANNEL_FIELDS = "items(id,snippet(title,thumbnails),statistics(subscriberCount,viewCount),contentDetails/relatedPlaylists/uploads)"
VIDEO_FIELDS = "items(id,snippet(title,description,publishedAt,thumbnails),statistics(viewCount,likeCount),contentDetails(duration))"


def parse_channel_input(raw: str) -> Tuple[str, str]:
    """Classify user input as ("id", channel_id) or ("handle", handle)."""
    raw = raw.strip()

    # Direct channel ID
    if re.fullmatch(r'UC[\w-]{22}', raw):
        return "id", raw

    match = re.search(r'youtube\.com/channel/(UC[\w-]{22})', raw)
    if match:
        return "id", match.group(1)

    match = re.search(r'youtube\.com/@([\w.-]+)', raw)
    if match:
        return "handle", match.group(1)

    return "handle", raw.lstrip("@")


def _thumbnail(snippet: Dict) -> Optional[str]:
    thumbnails = snippet.get("thumbnails", {})
    for size in ("medium", "high", "default"):
        url = thumbnails.get(size, {}).get("url")
        if url:
            return url
    return None


def _chunked(items: List[str], size: int):
    for i in range(0, len(items), size):
        yield items[i:i + size]


class YouTubeClient:
    """Thin wrapper over the YouTube Data API v3 endpoints the analyzer needs."""

    def __init__(self, api_key: str, session: Optional[requests.Session] = None, timeout: float = 20):
        self.api_key = api_key
        self.session = session or requests.Session()
        self.timeout = timeout

    def _request(self, endpoint: str, params: Dict[str, str]) -> Dict:
        params = dict(params)
        params["key"] = self.api_key
        try:
            resp = self.session.get(f"{YOUTUBE_API_BASE}/{endpoint}", params=params, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning("YouTube API request to {} failed: {}", endpoint, e)
            raise UpstreamError(f"YouTube API request failed: {e}") from e
        try:
            data = resp.json()
        except ValueError as e:
            raise UpstreamError(f"YouTube API returned an invalid response ({resp.status_code})") from e

        error = data.get("error")
        if error:
            message = error.get("message") or f"YouTube API error ({resp.status_code})"
            errors = error.get("errors") or [{}]
            reason = errors[0].get("reason", "")
            logger.warning("YouTube API error on {}: {} ({})", endpoint, message, reason)
            raise UpstreamError(message, reason=reason)
        return data

    def resolve_channel_id(self, query: str) -> str:
        """Resolve a channel ID, URL, or @handle to a channel ID."""
        kind, value = parse_channel_input(query)
        if kind == "id":
            return value

        data = self._request("channels", {"part": "id", "forHandle": value, "fields": "items/id"})
        items = data.get("items") or []
        if not items:
            raise NotFoundError(f'Channel with handle "{query}" not found.')
        logger.debug("Resolved handle {} to {}", value, items[0]["id"])
        return items[0]["id"]

    def get_channel(self, channel_id: str) -> ChannelRecord:
        data = self._request("channels", {
            "part": "snippet,statistics,contentDetails",
            "id": channel_id,
            "fields": CHANNEL_FIELDS,
        })
        items = data.get("items") or []
        if not items:
            raise NotFoundError(f'Channel with ID "{channel_id}" not found.')

        channel = items[0]
        snippet = channel.get("snippet", {})
        stats = channel.get("statistics", {})
        uploads = channel.get("contentDetails", {}).get("relatedPlaylists", {}).get("uploads")

        return ChannelRecord(
            id=channel["id"],
            title=snippet.get("title", ""),
            subscriber_count=parse_count(stats.get("subscriberCount")),
            view_count=parse_count(stats.get("viewCount")),
            uploads_playlist_id=uploads or None,
            thumbnail_url=_thumbnail(snippet),
        )

    def list_upload_ids(self, playlist_id: str, max_results: int = MAX_RESULTS) -> List[str]:
        """Most recent video IDs in an uploads playlist. A missing playlist is empty."""
        try:
            data = self._request("playlistItems", {
                "part": "contentDetails",
                "playlistId": playlist_id,
                "maxResults": str(max_results),
                "fields": "items/contentDetails/videoId",
            })
        except UpstreamError as e:
            if e.reason == "playlistNotFound":
                return []
            raise

        return [
            item["contentDetails"]["videoId"]
            for item in data.get("items") or []
            if item.get("contentDetails", {}).get("videoId")
        ]

    def get_videos(self, video_ids: List[str]) -> List[VideoRecord]:
        """Fetch snippet, statistics and duration for videos, in the given order."""
        by_id: Dict[str, VideoRecord] = {}
        for batch in _chunked(video_ids, MAX_RESULTS):
            data = self._request("videos", {
                "part": "snippet,statistics,contentDetails",
                "id": ",".join(batch),
                "fields": VIDEO_FIELDS,
            })
            for item in data.get("items") or []:
                snippet = item.get("snippet", {})
                stats = item.get("statistics", {})
                published_at = snippet.get("publishedAt")
                if not published_at:
                    continue
                by_id[item["id"]] = VideoRecord(
                    id=item["id"],
                    title=snippet.get("title", ""),
                    description=snippet.get("description", ""),
                    published_at=parse_timestamp(published_at),
                    view_count=parse_count(stats.get("viewCount")),
                    like_count=parse_count(stats.get("likeCount")),
                    duration_seconds=parse_duration_to_seconds(item.get("contentDetails", {}).get("duration")),
                    thumbnail_url=_thumbnail(snippet),
                )
        return [by_id[vid] for vid in video_ids if vid in by_id]
