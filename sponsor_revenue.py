#!/usr/bin/env python3
"""
Sponsorship Revenue Calculator

Estimates monthly brand deal revenue from subscriber tier, recent view
volume and the niche's sponsorship CPM and deal frequency.
"""

from typing import List, Sequence, Tuple

from models import NicheInfo, RateRange, RevenueRange, VideoRecord, ZERO_REVENUE
from niche_table import DETAILED_TABLE, NicheTable

# Channels below this many views in the window rarely land deals.
MIN_MONTHLY_VIEWS = 500_000

# (minimum subscribers, monthly sponsorship rate), highest bracket first
SUBSCRIBER_TIERS: List[Tuple[int, RevenueRange]] = [
    (1_500_000, RevenueRange(18000, 50000)),
    (1_000_000, RevenueRange(12000, 25000)),
    (500_000, RevenueRange(6000, 15000)),
    (100_000, RevenueRange(2000, 5000)),
]


def tier_rate(subscriber_count: int) -> RevenueRange:
    """
    Monthly sponsorship rate for a subscriber count.

    Brackets are checked highest first; the first match wins.
    """
    for min_subscribers, rate in SUBSCRIBER_TIERS:
        if subscriber_count >= min_subscribers:
            return rate
    return ZERO_REVENUE


def view_based_rate(avg_views_per_video: float, cpm: RateRange) -> RevenueRange:
    """Rate a sponsor would pay at `cpm` for one video's average views."""
    return RevenueRange(
        (avg_views_per_video / 1000) * cpm.low,
        (avg_views_per_video / 1000) * cpm.high,
    )


def estimate_sponsorships(
    subscriber_count: int,
    videos: Sequence[VideoRecord],
    niche: NicheInfo,
    table: NicheTable = DETAILED_TABLE,
) -> RevenueRange:
    """
    Estimate monthly sponsorship revenue for a window of recent videos.

    The subscriber-tier rate and the view-based rate are compared per bound
    and the larger of each is kept, then multiplied by the niche's expected
    number of deals per month.

    Args:
        subscriber_count: Channel subscriber count
        videos: Videos published in the window
        niche: Classified niche of the channel
        table: Niche table providing sponsorship CPM and deal counts

    Returns:
        RevenueRange in USD, {0, 0} below MIN_MONTHLY_VIEWS
    """
    total_views = sum(v.view_count for v in videos)
    if not videos or total_views < MIN_MONTHLY_VIEWS:
        return ZERO_REVENUE

    avg_views = total_views / len(videos)

    tier = tier_rate(subscriber_count)
    by_views = view_based_rate(avg_views, table.sponsorship_cpm_for(niche.name))

    final_min = max(tier.min, by_views.min)
    final_max = max(tier.max, by_views.max)

    deals = table.deals_for(niche.name)
    return RevenueRange(final_min * deals.low, final_max * deals.high)
