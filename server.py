#!/usr/bin/env python3
"""HTTP endpoint: POST /api/youtube {query, count} -> channel earnings analysis."""
from typing import Callable, Optional

from flask import Flask, jsonify, request
from loguru import logger

import config
from channel_analyzer import analyze_channel, validate_request
from errors import EarningsError
from niche_table import NicheTable
from response_cache import InMemoryCache, ResponseCache
from youtube_api import YouTubeClient


def create_app(
    cache: Optional[ResponseCache] = None,
    client_factory: Callable[[str], object] = YouTubeClient,
    table: Optional[NicheTable] = None,
) -> Flask:
    app = Flask(__name__)
    response_cache = cache if cache is not None else InMemoryCache()

    @app.errorhandler(405)
    def method_not_allowed(_error):
        return jsonify(message="Method Not Allowed"), 405

    @app.errorhandler(EarningsError)
    def earnings_error(error: EarningsError):
        logger.warning("Request failed ({}): {}", error.status_code, error.message)
        return jsonify(message=error.message), error.status_code

    @app.route("/api/youtube", methods=["POST"])
    def youtube():
        api_key = config.get_api_key()

        body = request.get_json(silent=True)
        if not isinstance(body, dict):
            body = {}
        query, count = validate_request(body.get("query"), body.get("count"))

        try:
            response = analyze_channel(
                query,
                count,
                client_factory(api_key),
                cache=response_cache,
                table=table or config.get_niche_table(),
                ttl=config.CACHE_TTL_SECONDS,
                window_days=config.VIDEO_WINDOW_DAYS,
            )
        except EarningsError:
            raise
        except Exception as e:
            logger.exception("Unexpected error analyzing {}", query)
            return jsonify(message=str(e) or "An internal server error occurred."), 500
        return jsonify(response), 200

    return app


app = create_app()


if __name__ == "__main__":
    app.run(debug=False, port=5000)
