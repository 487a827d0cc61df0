#!/usr/bin/env python3
"""Channel earnings lookup from the command line using YouTube Data API v3."""

import argparse
import json
import sys

from loguru import logger

import config
from adjustments import GEO_MULTIPLIERS, combined_estimate
from channel_analyzer import analyze_channel, validate_request
from errors import ConfigurationError, EarningsError, ValidationError
from models import AnalysisResult
from youtube_api import YouTubeClient


def _error(msg: str, code: int = 1) -> None:
    payload = {"error": msg}
    print(json.dumps(payload, indent=2))
    sys.exit(code)


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Estimate a YouTube channel's monthly earnings from its last 30 days of uploads",
    )
    parser.add_argument("input", help="Channel URL, @handle, or channel ID")
    parser.add_argument("--count", type=int, default=20, help="Number of recent videos to include in the output")
    parser.add_argument("--table", default="", help="Niche table: detailed, coarse, or a JSON file path")
    parser.add_argument("--geo", choices=sorted(GEO_MULTIPLIERS), default="tier1", help="Audience geography tier")
    parser.add_argument("--memberships", action="store_true", help="Include channel membership income")
    parser.add_argument("--verbose", action="store_true", help="Log fetch steps to stderr")

    args = parser.parse_args()

    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if args.verbose else "WARNING")

    try:
        query, count = validate_request(args.input, args.count)
        client = YouTubeClient(config.get_api_key())
        data = analyze_channel(query, count, client, table=config.get_niche_table(args.table))
    except ConfigurationError as e:
        _error(e.message, 2)
    except ValidationError as e:
        _error(e.message, 5)
    except EarningsError as e:
        _error(e.message, 3)

    analysis = AnalysisResult.from_dict(data["analysis"])
    breakdown = combined_estimate(
        analysis,
        data["channelData"]["subscriberCount"],
        geo_tier=args.geo,
        include_memberships=args.memberships,
    )
    data["estimate"] = {
        "memberships": breakdown.memberships.to_dict(),
        "geoMultiplier": breakdown.geo_multiplier,
        "total": breakdown.total.to_dict(),
    }
    print(json.dumps(data, indent=2))


if __name__ == "__main__":
    main()
