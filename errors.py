#!/usr/bin/env python3
"""Error types raised while estimating channel earnings."""


class EarningsError(Exception):
    """Base error. `status_code` is the HTTP status the server responds with."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(EarningsError):
    """A required credential or setting is missing."""

    status_code = 500


class ValidationError(EarningsError):
    """The request is missing fields or has invalid values."""

    status_code = 400


class NotFoundError(EarningsError):
    """A handle or channel id resolves to no channel.

    Reported as 500, the same as every other downstream failure.
    """

    status_code = 500


class UpstreamError(EarningsError):
    """The YouTube API returned an error payload or could not be reached.

    `reason` is the API's error reason (e.g. "playlistNotFound") when given.
    """

    status_code = 500

    def __init__(self, message: str, reason: str = ""):
        super().__init__(message)
        self.reason = reason
