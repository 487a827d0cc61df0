#!/usr/bin/env python3
"""
Display-time adjustments on top of a fetched AnalysisResult.

Nothing here fetches or stores anything: the UI calls these again every
time the viewer changes a control.
"""
from dataclasses import dataclass
from typing import Dict, List, Optional

from models import AnalysisResult, RateRange, RevenueRange, VideoRecord, ZERO_REVENUE
from niche_table import DEFAULT_CPM_KEY

# Share of Tier 1 ad rates earned by audiences in each region tier.
GEO_MULTIPLIERS: Dict[str, float] = {
    "tier1": 1.0,
    "tier2": 0.4,
    "tier3": 0.1,
}
GEO_LABELS: Dict[str, str] = {
    "tier1": "Tier 1 (US, UK, CA, AU)",
    "tier2": "Tier 2 (Europe, Latin America)",
    "tier3": "Tier 3 (Rest of world)",
}

MEMBERSHIP_PRICE = 4.99
DEFAULT_CONVERSION = RateRange(0.0005, 0.005)


@dataclass(frozen=True)
class EarningsBreakdown:
    adsense: RevenueRange
    sponsorships: RevenueRange
    memberships: RevenueRange
    geo_multiplier: float
    total: RevenueRange


def geo_multiplier(tier: str) -> float:
    try:
        return GEO_MULTIPLIERS[tier]
    except KeyError:
        raise ValueError(f"Unknown geography tier: {tier!r}") from None


def estimate_memberships(subscriber_count: int, conversion: RateRange = DEFAULT_CONVERSION,
                         price: float = MEMBERSHIP_PRICE) -> RevenueRange:
    """Monthly channel membership income: subscribers x conversion rate x price."""
    return RevenueRange(
        subscriber_count * conversion.low * price,
        subscriber_count * conversion.high * price,
    )


def combined_estimate(
    analysis: AnalysisResult,
    subscriber_count: int,
    geo_tier: str = "tier1",
    include_memberships: bool = False,
    conversion: RateRange = DEFAULT_CONVERSION,
) -> EarningsBreakdown:
    """Ad + sponsorship (+ membership) estimate scaled by the audience's geography tier."""
    multiplier = geo_multiplier(geo_tier)
    memberships = estimate_memberships(subscriber_count, conversion) if include_memberships else ZERO_REVENUE
    total = (analysis.adsense + analysis.sponsorships + memberships).scaled(multiplier)
    return EarningsBreakdown(
        adsense=analysis.adsense,
        sponsorships=analysis.sponsorships,
        memberships=memberships,
        geo_multiplier=multiplier,
        total=total,
    )


def video_sponsorship_estimate(view_count: int, niche_name: str,
                               sponsorship_cpms: Dict[str, RateRange]) -> RevenueRange:
    cpm: Optional[RateRange] = sponsorship_cpms.get(niche_name) or sponsorship_cpms.get(DEFAULT_CPM_KEY)
    if cpm is None:
        return ZERO_REVENUE
    return RevenueRange((view_count / 1000) * cpm.low, (view_count / 1000) * cpm.high)


def video_estimate(video: VideoRecord, analysis: AnalysisResult, include_sponsorship: bool = False) -> RevenueRange:
    """
    Earnings for one video at the channel's niche RPM.

    With `include_sponsorship`, adds what a sponsor would pay for the video's
    views at the niche sponsorship CPM echoed in the analysis.
    """
    rpm = analysis.niche_info.rpm
    estimate = RevenueRange((video.view_count / 1000) * rpm.low, (video.view_count / 1000) * rpm.high)
    if include_sponsorship:
        estimate = estimate + video_sponsorship_estimate(
            video.view_count, analysis.niche_info.name, analysis.sponsorship_cpms,
        )
    return estimate


def spread_views(total: int, count: int) -> List[int]:
    """Split `total` views over `count` videos; the first `total % count` get one extra."""
    base, extra = divmod(total, count)
    return [base + 1 if i < extra else base for i in range(count)]
