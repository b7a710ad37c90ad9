from pydantic import BaseModel, Field, computed_field, ConfigDict
from typing import Optional
from datetime import datetime
from linkstat_app.config import settings


class ShortUrlCreate(BaseModel):
    """Request body for creating a short URL

    ``long_url`` is a plain string: emptiness is rejected by the service
    so the HTTP layer and direct callers get the same error.
    """
    long_url: str = Field(..., description="The original URL to be shortened")
    custom_alias: Optional[str] = Field(None, description="Alias to use instead of a generated one")
    topic: Optional[str] = Field(None, description="Grouping label for topic analytics")


class ShortUrlResponse(BaseModel):
    """Response schema built from a stored UrlRecord"""
    alias: str
    long_url: str
    topic: Optional[str] = None
    created_at: datetime

    @computed_field
    @property
    def short_url(self) -> str:
        return f"{settings.base_url}/{self.alias}"

    model_config = ConfigDict(from_attributes=True)
