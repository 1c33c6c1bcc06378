"""Utility helper functions."""

from blog_api.utils.helpers import host, parse_uuid, route_summary, today_str

__all__ = [
    "host",
    "parse_uuid",
    "route_summary",
    "today_str",
]
