"""
Database models for the URL shortener.

Click events are stored in their own table next to the URL rows so that
recording a click never rewrites the URL row.
"""

from .url import URL, ClickEvent

__all__ = ["URL", "ClickEvent"]
