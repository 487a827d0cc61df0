"""Test doubles and record builders shared by the test modules."""
from datetime import datetime, timedelta, timezone

from errors import NotFoundError
from models import ChannelRecord, VideoRecord

NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)
CHANNEL_ID = "UC" + "a" * 22


def make_video(i=0, views=1000, likes=10, duration=300, days_ago=1, title=None, description=""):
    return VideoRecord(
        id=f"vid{i}",
        title=title if title is not None else f"Clip {i}",
        description=description,
        published_at=NOW - timedelta(days=days_ago),
        view_count=views,
        like_count=likes,
        duration_seconds=duration,
    )


def make_channel(subscribers=150_000, uploads="UUuploads"):
    return ChannelRecord(
        id=CHANNEL_ID,
        title="Test Channel",
        subscriber_count=subscribers,
        view_count=10_000_000,
        uploads_playlist_id=uploads,
    )


class FakeClient:
    """Stands in for YouTubeClient; records every call."""

    def __init__(self, channel=None, videos=None, handles=None):
        self.channel = channel or make_channel()
        self.videos = list(videos or [])
        self.handles = handles if handles is not None else {"testchannel": CHANNEL_ID}
        self.calls = []

    def resolve_channel_id(self, query):
        self.calls.append(("resolve", query))
        if query.startswith("UC"):
            return query
        handle = query.lstrip("@")
        if handle not in self.handles:
            raise NotFoundError(f'Channel with handle "{query}" not found.')
        return self.handles[handle]

    def get_channel(self, channel_id):
        self.calls.append(("channel", channel_id))
        if channel_id != self.channel.id:
            raise NotFoundError(f'Channel with ID "{channel_id}" not found.')
        return self.channel

    def list_upload_ids(self, playlist_id):
        self.calls.append(("playlist", playlist_id))
        return [v.id for v in self.videos]

    def get_videos(self, video_ids):
        self.calls.append(("videos", tuple(video_ids)))
        return [v for v in self.videos if v.id in video_ids]
