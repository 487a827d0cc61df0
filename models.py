#!/usr/bin/env python3
"""
Records shared by the estimation engine, the API client and the UI.

Every record converts to and from the camelCase JSON shape served by
the /api/youtube endpoint.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


def parse_count(value: Any) -> int:
    """Parse an API statistic such as "1,234,567" into an int. Missing -> 0."""
    if value is None or value == "":
        return 0
    if isinstance(value, (int, float)):
        return max(int(value), 0)
    cleaned = str(value).replace(",", "").replace(" ", "").strip()
    try:
        return max(int(float(cleaned)), 0)
    except ValueError:
        return 0


def parse_timestamp(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


@dataclass(frozen=True)
class RateRange:
    """A {low, high} rate: RPM, CPM or a deal count."""
    low: float
    high: float

    def __post_init__(self):
        if self.low < 0 or self.high < 0:
            raise ValueError(f"Rate range must be non-negative: {self.low}..{self.high}")
        if self.low > self.high:
            raise ValueError(f"Rate range low exceeds high: {self.low} > {self.high}")

    def to_dict(self) -> Dict[str, float]:
        return {"low": self.low, "high": self.high}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RateRange":
        return cls(low=data["low"], high=data["high"])


@dataclass(frozen=True)
class RevenueRange:
    """A {min, max} amount in USD."""
    min: float = 0.0
    max: float = 0.0

    def __post_init__(self):
        if self.min < 0 or self.max < 0:
            raise ValueError(f"Revenue must be non-negative: {self.min}..{self.max}")
        if self.min > self.max:
            raise ValueError(f"Revenue min exceeds max: {self.min} > {self.max}")

    def __add__(self, other: "RevenueRange") -> "RevenueRange":
        return RevenueRange(self.min + other.min, self.max + other.max)

    def scaled(self, factor: float) -> "RevenueRange":
        return RevenueRange(self.min * factor, self.max * factor)

    def to_dict(self) -> Dict[str, float]:
        return {"min": self.min, "max": self.max}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RevenueRange":
        return cls(min=data["min"], max=data["max"])


ZERO_REVENUE = RevenueRange(0.0, 0.0)


@dataclass(frozen=True)
class NicheInfo:
    name: str
    rpm: RateRange

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "rpm": self.rpm.to_dict()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NicheInfo":
        return cls(name=data["name"], rpm=RateRange.from_dict(data["rpm"]))


@dataclass(frozen=True)
class VideoRecord:
    id: str
    title: str
    description: str
    published_at: datetime
    view_count: int = 0
    like_count: int = 0
    duration_seconds: int = 0
    thumbnail_url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "publishedAt": self.published_at.isoformat(),
            "viewCount": self.view_count,
            "likeCount": self.like_count,
            "durationInSeconds": self.duration_seconds,
            "thumbnailUrl": self.thumbnail_url,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VideoRecord":
        return cls(
            id=data["id"],
            title=data.get("title", ""),
            description=data.get("description", ""),
            published_at=parse_timestamp(data["publishedAt"]),
            view_count=parse_count(data.get("viewCount")),
            like_count=parse_count(data.get("likeCount")),
            duration_seconds=parse_count(data.get("durationInSeconds")),
            thumbnail_url=data.get("thumbnailUrl"),
        )


@dataclass(frozen=True)
class ChannelRecord:
    id: str
    title: str
    subscriber_count: int = 0
    view_count: int = 0
    uploads_playlist_id: Optional[str] = None
    thumbnail_url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "subscriberCount": self.subscriber_count,
            "viewCount": self.view_count,
            "uploadsPlaylistId": self.uploads_playlist_id,
            "thumbnailUrl": self.thumbnail_url,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ChannelRecord":
        return cls(
            id=data["id"],
            title=data.get("title", ""),
            subscriber_count=parse_count(data.get("subscriberCount")),
            view_count=parse_count(data.get("viewCount")),
            uploads_playlist_id=data.get("uploadsPlaylistId"),
            thumbnail_url=data.get("thumbnailUrl"),
        )


@dataclass(frozen=True)
class AnalysisResult:
    """Monthly earnings analysis for one channel's 30-day video window."""
    adsense: RevenueRange
    sponsorships: RevenueRange
    videos_in_month: int
    total_views: int
    total_likes: int
    date_range: str
    niche_info: NicheInfo
    mid_roll_bonus: float = 1.0
    bonuses: List[str] = field(default_factory=list)
    sponsorship_cpms: Dict[str, RateRange] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "adsense": self.adsense.to_dict(),
            "sponsorships": self.sponsorships.to_dict(),
            "videosInMonth": self.videos_in_month,
            "totalViews": self.total_views,
            "totalLikes": self.total_likes,
            "dateRange": self.date_range,
            "bonuses": list(self.bonuses),
            "nicheInfo": self.niche_info.to_dict(),
            "midRollBonus": self.mid_roll_bonus,
            "sponsorshipCpms": {name: cpm.to_dict() for name, cpm in self.sponsorship_cpms.items()},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnalysisResult":
        return cls(
            adsense=RevenueRange.from_dict(data["adsense"]),
            sponsorships=RevenueRange.from_dict(data["sponsorships"]),
            videos_in_month=data["videosInMonth"],
            total_views=data["totalViews"],
            total_likes=data["totalLikes"],
            date_range=data["dateRange"],
            niche_info=NicheInfo.from_dict(data["nicheInfo"]),
            mid_roll_bonus=data["midRollBonus"],
            bonuses=list(data.get("bonuses", [])),
            sponsorship_cpms={
                name: RateRange.from_dict(cpm)
                for name, cpm in data.get("sponsorshipCpms", {}).items()
            },
        )
