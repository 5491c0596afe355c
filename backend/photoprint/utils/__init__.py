"""Utility functions and helpers."""

from photoprint.utils.datetime_utils import Clock, from_timestamp_ns, to_api_timezone, utc_now

__all__ = [
    "Clock",
    "from_timestamp_ns",
    "to_api_timezone",
    "utc_now",
]
