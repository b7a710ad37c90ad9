from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import RedirectResponse
from linkstat_app.schemas.records import RequestContext
from linkstat_app.services.shortener_service import ShortenerService
from linkstat_app.dependencies import get_shortener_service

router = APIRouter(tags=["redirect"])


@router.get("/{alias}")
async def redirect_to_long_url(
    alias: str,
    request: Request,
    service: ShortenerService = Depends(get_shortener_service)
):
    """
    Redirect to the original URL.

    The click is recorded before redirecting; if recording fails the
    redirect still happens. Unknown aliases yield 404.
    """
    context = RequestContext(
        ip=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )
    long_url = await service.resolve_alias(alias, context)
    return RedirectResponse(url=long_url, status_code=status.HTTP_302_FOUND)
