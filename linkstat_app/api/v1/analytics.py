from fastapi import APIRouter, Depends
from linkstat_app.schemas.analytics import AliasAnalytics, OverallAnalytics, TopicAnalytics
from linkstat_app.services.shortener_service import ShortenerService
from linkstat_app.dependencies import get_shortener_service

router = APIRouter(prefix="/analytics", tags=["analytics"])


# Fixed paths are registered before /{alias} so they are not read as aliases.
@router.get("/overall", response_model=OverallAnalytics)
async def get_overall_analytics(
    service: ShortenerService = Depends(get_shortener_service)
):
    """Analytics pooled over every short URL"""
    return await service.get_overall_analytics()


@router.get("/topic/{topic}", response_model=TopicAnalytics)
async def get_topic_analytics(
    topic: str,
    service: ShortenerService = Depends(get_shortener_service)
):
    """Analytics for all short URLs created under ``topic``"""
    return await service.get_topic_analytics(topic)


@router.get("/{alias}", response_model=AliasAnalytics)
async def get_alias_analytics(
    alias: str,
    service: ShortenerService = Depends(get_shortener_service)
):
    """Analytics for a single short URL"""
    return await service.get_alias_analytics(alias)
