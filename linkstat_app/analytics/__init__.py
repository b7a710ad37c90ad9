"""
Click analytics aggregation.
"""

from .aggregator import bucket_by_recent_days, group_by_field, unique_user_count, pool_events

__all__ = [
    "bucket_by_recent_days",
    "group_by_field",
    "unique_user_count",
    "pool_events",
]
