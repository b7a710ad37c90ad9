from fastapi import APIRouter, Depends, status
from linkstat_app.schemas.url import ShortUrlCreate, ShortUrlResponse
from linkstat_app.services.shortener_service import ShortenerService
from linkstat_app.dependencies import get_shortener_service

router = APIRouter(prefix="/shorten", tags=["urls"])


@router.post("", response_model=ShortUrlResponse, status_code=status.HTTP_201_CREATED)
async def create_short_url(
    url_data: ShortUrlCreate,
    service: ShortenerService = Depends(get_shortener_service)
):
    """Create a new short URL, optionally with a custom alias and topic"""
    return await service.create_short_url(
        url_data.long_url,
        custom_alias=url_data.custom_alias,
        topic=url_data.topic,
    )
