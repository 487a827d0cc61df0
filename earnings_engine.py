#!/usr/bin/env python3
"""
Earnings estimation engine.

Pure functions shared by the API server, the CLI and the streamlit UI:
duration parsing, niche classification, ad revenue and the aggregation
of a 30-day video window into an AnalysisResult.
"""
import re
from typing import Optional, Sequence

from models import (
    AnalysisResult,
    NicheInfo,
    RateRange,
    RevenueRange,
    VideoRecord,
    ZERO_REVENUE,
)
from niche_table import DETAILED_TABLE, GENERAL_NICHE, NicheTable
from sponsor_revenue import estimate_sponsorships

DURATION_RE = re.compile(r'PT(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?')

# Videos longer than 8 minutes can carry mid-roll ads.
MID_ROLL_MIN_SECONDS = 480
MID_ROLL_MULTIPLIER = 1.5

MID_ROLL_LABEL = "Mid-roll Ads"
SPONSORSHIPS_LABEL = "Sponsorships"

WINDOW_LABEL = "Based on videos in last 30 days"
NO_UPLOADS_LABEL = "N/A (channel has no uploads playlist)"
EMPTY_PLAYLIST_LABEL = "N/A (no uploaded videos)"
NO_RECENT_VIDEOS_LABEL = "No videos in last 30 days"

EMPTY_NICHE = NicheInfo(name="N/A", rpm=RateRange(0.0, 0.0))


def parse_duration_to_seconds(duration: Optional[str]) -> int:
    """Parse ISO 8601 duration (PT#H#M#S) to seconds. Malformed input gives 0."""
    match = DURATION_RE.match(duration or "")
    if not match:
        return 0
    hours = int(match.group(1) or 0)
    minutes = int(match.group(2) or 0)
    seconds = int(match.group(3) or 0)
    return hours * 3600 + minutes * 60 + seconds


def classify_niche(videos: Sequence[VideoRecord], table: NicheTable = DETAILED_TABLE) -> NicheInfo:
    """
    Guess a channel's niche from its video titles and descriptions.

    Each keyword found anywhere in the text scores one point for its niche,
    however often it repeats. The highest score wins; on a tie the niche
    listed first in the table wins. No match at all gives "General" with
    the table's default RPM.
    """
    text = " ".join(f"{v.title} {v.description}" for v in videos).lower()

    best_name, best_score = None, 0
    for niche in table.niches:
        score = sum(1 for keyword in niche.keywords if keyword in text)
        if score > best_score:
            best_name, best_score = niche.name, score

    if best_name is None:
        return NicheInfo(name=GENERAL_NICHE, rpm=table.default_rpm)
    return NicheInfo(name=best_name, rpm=table.get(best_name).rpm)


def average_duration(videos: Sequence[VideoRecord]) -> float:
    if not videos:
        return 0.0
    return sum(v.duration_seconds for v in videos) / len(videos)


def mid_roll_bonus(avg_duration_seconds: float) -> float:
    if avg_duration_seconds > MID_ROLL_MIN_SECONDS:
        return MID_ROLL_MULTIPLIER
    return 1.0


def estimate_ad_revenue(total_views: int, rpm: RateRange, bonus: float = 1.0) -> RevenueRange:
    return RevenueRange(
        (total_views / 1000) * rpm.low * bonus,
        (total_views / 1000) * rpm.high * bonus,
    )


def empty_analysis(date_range: str, table: NicheTable = DETAILED_TABLE) -> AnalysisResult:
    """Zeroed analysis; `date_range` says why there is nothing to estimate."""
    return AnalysisResult(
        adsense=ZERO_REVENUE,
        sponsorships=ZERO_REVENUE,
        videos_in_month=0,
        total_views=0,
        total_likes=0,
        date_range=date_range,
        niche_info=EMPTY_NICHE,
        mid_roll_bonus=1.0,
        bonuses=[],
        sponsorship_cpms=table.sponsorship_cpms(),
    )


def analyze_videos(
    videos: Sequence[VideoRecord],
    subscriber_count: int,
    table: NicheTable = DETAILED_TABLE,
) -> AnalysisResult:
    """
    Estimate monthly earnings from the videos published in the window.

    Args:
        videos: Videos already filtered to the trailing 30 days
        subscriber_count: Channel subscriber count
        table: Niche table to classify against

    Returns:
        AnalysisResult; an empty window gives the "No videos in last 30 days" result
    """
    if not videos:
        return empty_analysis(NO_RECENT_VIDEOS_LABEL, table)

    niche = classify_niche(videos, table)
    total_views = sum(v.view_count for v in videos)
    total_likes = sum(v.like_count for v in videos)
    bonus = mid_roll_bonus(average_duration(videos))

    adsense = estimate_ad_revenue(total_views, niche.rpm, bonus)
    sponsorships = estimate_sponsorships(subscriber_count, videos, niche, table)

    bonuses = []
    if bonus > 1:
        bonuses.append(MID_ROLL_LABEL)
    if sponsorships.min > 0:
        bonuses.append(SPONSORSHIPS_LABEL)

    return AnalysisResult(
        adsense=adsense,
        sponsorships=sponsorships,
        videos_in_month=len(videos),
        total_views=total_views,
        total_likes=total_likes,
        date_range=WINDOW_LABEL,
        niche_info=niche,
        mid_roll_bonus=bonus,
        bonuses=bonuses,
        sponsorship_cpms=table.sponsorship_cpms(),
    )
