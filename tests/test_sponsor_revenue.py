"""Tests for the sponsorship revenue estimator."""

import pytest

from fakes import make_video
from models import NicheInfo, RateRange, RevenueRange
from niche_table import COARSE_TABLE, DETAILED_TABLE, NicheProfile, NicheTable
from sponsor_revenue import MIN_MONTHLY_VIEWS, estimate_sponsorships, tier_rate, view_based_rate

WIDGETS = NicheProfile(
    name="Widgets",
    keywords=("widget",),
    rpm=RateRange(5.0, 10.0),
    sponsorship_cpm=RateRange(15, 30),
    deals=RateRange(1, 2),
)
WIDGET_TABLE = NicheTable(niches=(WIDGETS,))
WIDGET_NICHE = NicheInfo(name="Widgets", rpm=WIDGETS.rpm)


class TestTierRate:
    """Test subscriber bracket lookup."""

    @pytest.mark.parametrize("subs,expected", [
        (2_000_000, RevenueRange(18000, 50000)),
        (1_500_000, RevenueRange(18000, 50000)),
        (1_499_999, RevenueRange(12000, 25000)),
        (1_000_000, RevenueRange(12000, 25000)),
        (500_000, RevenueRange(6000, 15000)),
        (100_000, RevenueRange(2000, 5000)),
        (99_999, RevenueRange(0, 0)),
        (0, RevenueRange(0, 0)),
    ])
    def test_brackets(self, subs, expected):
        assert tier_rate(subs) == expected


class TestEstimateSponsorships:
    """Test the gate, per-bound maximum and deal multiplier."""

    def setup_method(self):
        # 10 videos x 60,000 views = 600,000 in the window
        self.videos = [make_video(i, views=60_000) for i in range(10)]

    def test_large_channel_scenario(self):
        """Test tier {18000, 50000} beating view rate {900, 1800}, times deals {1, 2}."""
        assert view_based_rate(60_000, WIDGETS.sponsorship_cpm) == RevenueRange(900, 1800)
        result = estimate_sponsorships(2_000_000, self.videos, WIDGET_NICHE, WIDGET_TABLE)
        assert result == RevenueRange(18000, 100000)

    @pytest.mark.parametrize("subs", [0, 150_000, 2_000_000, 50_000_000])
    def test_below_gate_is_zero(self, subs):
        videos = [make_video(i, views=49_999) for i in range(10)]
        assert sum(v.view_count for v in videos) < MIN_MONTHLY_VIEWS
        assert estimate_sponsorships(subs, videos, WIDGET_NICHE, WIDGET_TABLE) == RevenueRange(0, 0)

    def test_exactly_at_gate_is_estimated(self):
        videos = [make_video(i, views=50_000) for i in range(10)]
        result = estimate_sponsorships(150_000, videos, WIDGET_NICHE, WIDGET_TABLE)
        assert result == RevenueRange(2000, 10000)

    def test_view_rate_wins_for_small_channel_with_big_views(self):
        videos = [make_video(0, views=1_000_000)]
        result = estimate_sponsorships(1_000, videos, WIDGET_NICHE, WIDGET_TABLE)
        assert result == RevenueRange(15000, 60000)

    def test_bounds_chosen_independently(self):
        """The floor can come from the tier while the ceiling comes from views."""
        videos = [make_video(0, views=1_000_000)]
        # tier {18000, 50000}, view rate {15000, 30000} with the widget CPM
        table = NicheTable(niches=(NicheProfile(
            name="Widgets", keywords=("widget",), rpm=RateRange(1, 2),
            sponsorship_cpm=RateRange(15, 60), deals=RateRange(1, 1),
        ),))
        result = estimate_sponsorships(2_000_000, videos, WIDGET_NICHE, table)
        assert result == RevenueRange(18000, 60000)

    def test_unmapped_niche_uses_defaults(self):
        """Test default CPM {8, 20} and default deals {1, 2}."""
        videos = [make_video(0, views=1_000_000)]
        niche = NicheInfo(name="ASMR", rpm=RateRange(7.0, 15.0))
        result = estimate_sponsorships(0, videos, niche, DETAILED_TABLE)
        assert result == RevenueRange(8000, 40000)

    def test_gaming_deals(self):
        videos = [make_video(0, views=1_000_000)]
        niche = NicheInfo(name="Gaming", rpm=RateRange(1.0, 7.0))
        result = estimate_sponsorships(0, videos, niche, DETAILED_TABLE)
        # CPM {5, 15} -> {5000, 15000}; deals {4, 8}
        assert result == RevenueRange(20000, 120000)

    def test_coarse_table_uses_defaults(self):
        videos = [make_video(0, views=1_000_000)]
        niche = NicheInfo(name="Tech", rpm=RateRange(5.0, 15.0))
        assert estimate_sponsorships(0, videos, niche, COARSE_TABLE) == RevenueRange(8000, 40000)

    def test_no_videos(self):
        assert estimate_sponsorships(2_000_000, [], WIDGET_NICHE, WIDGET_TABLE) == RevenueRange(0, 0)
