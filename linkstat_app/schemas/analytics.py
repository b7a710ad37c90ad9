from typing import List

from pydantic import BaseModel


class DateBucket(BaseModel):
    date: str
    count: int


class FieldGroup(BaseModel):
    value: str
    unique_clicks: int
    unique_users: int


class AliasAnalytics(BaseModel):
    alias: str
    total_clicks: int
    unique_users: int
    clicks_by_date: List[DateBucket]
    os_breakdown: List[FieldGroup]
    device_breakdown: List[FieldGroup]


class OverallAnalytics(BaseModel):
    total_urls: int
    total_clicks: int
    unique_users: int
    clicks_by_date: List[DateBucket]
    os_breakdown: List[FieldGroup]
    device_breakdown: List[FieldGroup]


class TopicUrlSummary(BaseModel):
    alias: str
    short_url: str
    total_clicks: int
    unique_users: int


class TopicAnalytics(BaseModel):
    topic: str
    total_clicks: int
    unique_users: int
    clicks_by_date: List[DateBucket]
    urls: List[TopicUrlSummary]
