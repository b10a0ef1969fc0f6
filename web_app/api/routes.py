"""API routes implementation."""

from fastapi import APIRouter, Request, HTTPException, Response, status
from datetime import datetime, timezone

from .schemas import (
    ShortenRequest,
    ShortenResponse,
    LinkResponse,
    LinkListResponse,
    CodeAvailabilityResponse,
    HealthResponse,
    ErrorResponse,
)
from tinylink.common.url_builder import build_base_url, build_short_url
from tinylink.errors import CodeTaken, ExhaustedRetries, ShortenError, StorageError
from tinylink.shortcode import ShortCodeGenerator

router = APIRouter()


def _short_url(request: Request, code: str) -> str:
    config = request.app.state.config
    base_url = build_base_url(
        headers=request.headers,
        fallback_base_url=config.base_url,
    )
    return build_short_url(code=code, base_url=base_url, path_prefix=config.path_prefix)


@router.post(
    "/shorten",
    response_model=ShortenResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Missing or invalid URL, or bad code format"},
        409: {"model": ErrorResponse, "description": "Custom code already exists"},
        500: {"model": ErrorResponse, "description": "Storage failure"},
        503: {"model": ErrorResponse, "description": "Could not generate a unique code"},
    },
    summary="Create short link",
    description="Shorten a URL. Optionally provide a custom code of 3-8 letters/digits.",
)
async def shorten_url(request: Request, body: ShortenRequest):
    """Create a short link."""
    service = request.app.state.service

    try:
        link = await service.shorten(body.url, custom_code=body.custom_code)
    except CodeTaken as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except ExhaustedRetries as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    except ShortenError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except StorageError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not create the link, please try again",
        )

    return ShortenResponse(
        code=link.code,
        short_url=_short_url(request, link.code),
        target_url=link.target_url,
        created_at=link.created_at,
    )


@router.get(
    "/links",
    response_model=LinkListResponse,
    responses={503: {"model": ErrorResponse, "description": "Storage unavailable"}},
    summary="List links",
    description="List live links, newest first.",
)
async def list_links(request: Request):
    """List live links."""
    service = request.app.state.service

    try:
        links = await service.list_live()
    except StorageError:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Link store unavailable",
        )

    return LinkListResponse(
        count=len(links),
        links=[
            LinkResponse(
                code=link.code,
                short_url=_short_url(request, link.code),
                target_url=link.target_url,
                total_clicks=link.total_clicks,
                last_clicked=link.last_clicked,
                created_at=link.created_at,
            )
            for link in links
        ],
    )


@router.delete(
    "/links/{code}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete link",
    description="Soft-delete a link. Deleting an unknown or deleted code also succeeds.",
)
async def delete_link(request: Request, code: str):
    """Soft-delete a link."""
    service = request.app.state.service

    try:
        await service.delete(code)
    except StorageError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not delete the link, please try again",
        )

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/codes/{code}",
    response_model=CodeAvailabilityResponse,
    summary="Check custom code",
    description="Advisory check whether a custom code is well-formed and unassigned.",
)
async def check_code(request: Request, code: str):
    """Check whether a custom code can be claimed."""
    service = request.app.state.service

    valid = ShortCodeGenerator.validate_custom(code)
    try:
        available = valid and await service.code_available(code)
    except StorageError:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Link store unavailable",
        )

    return CodeAvailabilityResponse(code=code, valid=valid, available=available)


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check if the service and its store are healthy.",
)
async def health_check(request: Request):
    """Health check endpoint for monitoring."""
    service = request.app.state.service

    health = await service.health_check()

    return HealthResponse(
        status="healthy" if health["overall"] else "unhealthy",
        database="healthy" if health["database"] else "unhealthy",
        timestamp=datetime.now(timezone.utc),
    )
