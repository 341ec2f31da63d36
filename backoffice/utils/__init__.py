"""Utility functions and helpers."""

from backoffice.utils.datetime_utils import local_now, to_api_timezone, to_utc

__all__ = [
    "local_now",
    "to_api_timezone",
    "to_utc",
]
