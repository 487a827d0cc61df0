#!/usr/bin/env python3
"""YouTube Earnings Estimator - interactive UI"""
from datetime import datetime, timezone

import streamlit as st

import config
from adjustments import (
    DEFAULT_CONVERSION,
    GEO_LABELS,
    MEMBERSHIP_PRICE,
    combined_estimate,
    spread_views,
    video_estimate,
)
from channel_analyzer import analyze_channel, validate_request
from earnings_engine import analyze_videos
from errors import EarningsError
from models import AnalysisResult, ChannelRecord, RateRange, RevenueRange, VideoRecord
from niche_table import BUILTIN_TABLES
from response_cache import InMemoryCache
from youtube_api import YouTubeClient


@st.cache_resource
def _response_cache() -> InMemoryCache:
    return InMemoryCache()


def format_range(value: RevenueRange) -> str:
    return f"${value.min:,.0f} - ${value.max:,.0f}"


def _fetch(channel_input: str, count: int, table_name: str) -> None:
    query, count = validate_request(channel_input, count)
    data = analyze_channel(
        query,
        count,
        YouTubeClient(config.get_api_key()),
        cache=_response_cache(),
        table=BUILTIN_TABLES[table_name],
        ttl=config.CACHE_TTL_SECONDS,
        window_days=config.VIDEO_WINDOW_DAYS,
    )
    st.session_state["result"] = data


def _render_adjustments(channel: ChannelRecord, analysis: AnalysisResult) -> None:
    st.subheader("Adjust Estimate")
    col1, col2 = st.columns(2)
    with col1:
        geo_tier = st.radio(
            "Audience geography",
            list(GEO_LABELS),
            format_func=lambda tier: GEO_LABELS[tier],
        )
    with col2:
        include_memberships = st.checkbox("Include channel memberships")
        low_pct, high_pct = st.slider(
            "Membership conversion (% of subscribers)",
            min_value=0.01, max_value=2.0,
            value=(DEFAULT_CONVERSION.low * 100, DEFAULT_CONVERSION.high * 100),
            step=0.01,
            disabled=not include_memberships,
        )

    breakdown = combined_estimate(
        analysis,
        channel.subscriber_count,
        geo_tier=geo_tier,
        include_memberships=include_memberships,
        conversion=RateRange(low_pct / 100, high_pct / 100),
    )

    c1, c2, c3, c4 = st.columns(4)
    c1.metric("AdSense", format_range(breakdown.adsense))
    c2.metric("Sponsorships", format_range(breakdown.sponsorships))
    c3.metric("Memberships", format_range(breakdown.memberships), help=f"${MEMBERSHIP_PRICE}/month per member")
    c4.metric("Est. Monthly Total", format_range(breakdown.total), f"x{breakdown.geo_multiplier} geography")


def _render_videos(videos: list, analysis: AnalysisResult) -> None:
    st.subheader("Recent Videos")
    include_sponsorship = st.toggle("Add per-video sponsorship estimate")
    for video in videos:
        with st.expander(f"{video.title} - {video.view_count:,} views"):
            if video.thumbnail_url:
                st.image(video.thumbnail_url, width=240)
            c1, c2, c3 = st.columns(3)
            c1.metric("Views", f"{video.view_count:,}")
            c2.metric("Likes", f"{video.like_count:,}")
            c3.metric("Earnings", format_range(video_estimate(video, analysis, include_sponsorship)))
            st.caption(f"Published {video.published_at:%Y-%m-%d} - {video.duration_seconds // 60} min")


def main():
    st.set_page_config(page_title="YouTube Earnings Estimator", page_icon="💰", layout="wide")
    st.title("💰 YouTube Earnings Estimator")

    tab1, tab2 = st.tabs(["📊 Channel Analyzer", "🧮 Manual Estimate"])

    # === Channel Analyzer ===
    with tab1:
        if config.has_youtube_api():
            st.success("✓ YouTube API connected")
        else:
            st.warning("⚠ YouTube API key not set (YOUTUBE_API_KEY)")

        col1, col2, col3 = st.columns([3, 1, 1])
        with col1:
            channel_input = st.text_input(
                "Channel ID or @handle",
                placeholder="@MrBeast or UC...",
            )
        with col2:
            count = st.number_input("Videos to list", min_value=1, max_value=50, value=20, step=1)
        with col3:
            table_name = st.selectbox("Niche table", list(BUILTIN_TABLES))

        if st.button("Analyze Channel", type="primary", disabled=not config.has_youtube_api()):
            with st.spinner("Fetching channel data..."):
                try:
                    _fetch(channel_input, int(count), table_name)
                except EarningsError as e:
                    st.session_state.pop("result", None)
                    st.error(f"Error analyzing channel: {e.message}")

        data = st.session_state.get("result")
        if data:
            channel = ChannelRecord.from_dict(data["channelData"])
            analysis = AnalysisResult.from_dict(data["analysis"])
            videos = [VideoRecord.from_dict(v) for v in data["videoData"]]

            st.divider()
            col1, col2 = st.columns([1, 3])
            with col1:
                if channel.thumbnail_url:
                    st.image(channel.thumbnail_url, width=100)
            with col2:
                st.subheader(channel.title)
                st.caption(f"{analysis.date_range} • Niche: {analysis.niche_info.name}")

            c1, c2, c3, c4 = st.columns(4)
            c1.metric("Subscribers", f"{channel.subscriber_count:,}")
            c2.metric("Videos (30 days)", analysis.videos_in_month)
            c3.metric("Views (30 days)", f"{analysis.total_views:,}")
            c4.metric("Likes (30 days)", f"{analysis.total_likes:,}")

            if analysis.bonuses:
                st.info("Bonuses applied: " + ", ".join(analysis.bonuses))

            st.divider()
            _render_adjustments(channel, analysis)

            if videos:
                st.divider()
                _render_videos(videos, analysis)

    # === Manual Estimate ===
    with tab2:
        st.header("Manual Estimate")
        st.caption("Estimate monthly earnings from a channel's own numbers without fetching anything")

        col1, col2 = st.columns(2)
        with col1:
            subs = st.number_input("Subscribers", min_value=0, value=250000, step=10000)
            views = st.number_input("Views in last 30 days", min_value=0, value=1000000, step=50000)
            uploads = st.number_input("Videos in last 30 days", min_value=1, value=4, step=1)
        with col2:
            minutes = st.number_input("Average length (minutes)", min_value=0, value=10, step=1)
            topic = st.text_input("Topic keywords", value="tech review")
            manual_table = st.selectbox("Niche table", list(BUILTIN_TABLES), key="manual_table")

        if st.button("Calculate", key="manual_btn"):
            videos = [
                VideoRecord(
                    id=str(i), title=topic, description="",
                    published_at=datetime.now(timezone.utc),
                    view_count=video_views, duration_seconds=minutes * 60,
                )
                for i, video_views in enumerate(spread_views(int(views), int(uploads)))
            ]
            result = analyze_videos(videos, subs, BUILTIN_TABLES[manual_table])

            c1, c2, c3 = st.columns(3)
            c1.metric("Niche", result.niche_info.name)
            c2.metric("AdSense", format_range(result.adsense))
            c3.metric("Sponsorships", format_range(result.sponsorships))
            st.info(f"RPM ${result.niche_info.rpm.low:.2f} - ${result.niche_info.rpm.high:.2f} • mid-roll x{result.mid_roll_bonus}")


if __name__ == "__main__":
    main()
