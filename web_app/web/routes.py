"""Web interface routes implementation."""

import logging
import os
import time
from typing import Optional

from fastapi import APIRouter, Request, Form, status
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from tinylink.common.url_builder import build_base_url, build_short_url
from tinylink.errors import CodeTaken, NotFound, ShortenError, StorageError

router = APIRouter()
logger = logging.getLogger("tinylink.web")

VERSION = "1.0.0"

template_dir = os.path.join(os.path.dirname(__file__), "..", "templates")
templates = Jinja2Templates(directory=template_dir)


async def _render_index(
    request: Request,
    error: Optional[str] = None,
    status_code: int = status.HTTP_200_OK,
):
    """Render the listing page, optionally with an error banner.

    A storage failure while listing turns into a 503 regardless of the
    status the caller asked for.
    """
    service = request.app.state.service
    config = request.app.state.config

    try:
        links = await service.list_live()
    except StorageError as e:
        logger.error(f"Listing failed: {e}")
        return PlainTextResponse("Service unavailable", status_code=status.HTTP_503_SERVICE_UNAVAILABLE)

    base_url = build_base_url(headers=request.headers, fallback_base_url=config.base_url)
    rows = [
        {
            "link": link,
            "short_url": build_short_url(link.code, base_url, config.path_prefix),
        }
        for link in links
    ]

    return templates.TemplateResponse(
        request,
        "index.html",
        {"rows": rows, "error": error, "base_url": base_url},
        status_code=status_code,
    )


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def homepage(request: Request):
    """Serve the link listing with the create form."""
    return await _render_index(request)


@router.post("/shorten", response_class=HTMLResponse, include_in_schema=False)
async def create_link_web(
    request: Request,
    url: str = Form(""),
    custom_code: str = Form(""),
):
    """Handle form submission to create a short link."""
    service = request.app.state.service

    try:
        await service.shorten(url, custom_code=custom_code or None)
    except CodeTaken as e:
        return await _render_index(request, error=str(e), status_code=status.HTTP_409_CONFLICT)
    except ShortenError as e:
        return await _render_index(request, error=str(e), status_code=status.HTTP_400_BAD_REQUEST)
    except StorageError as e:
        logger.error(f"Create failed: {e}")
        return await _render_index(
            request,
            error="Something went wrong, please try again",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return RedirectResponse(url=request.url_for("homepage"), status_code=status.HTTP_303_SEE_OTHER)


@router.post("/delete/{code}", include_in_schema=False)
async def delete_link_web(request: Request, code: str):
    """Soft-delete a link and go back to the listing."""
    service = request.app.state.service

    try:
        await service.delete(code)
    except StorageError as e:
        logger.error(f"Delete failed: {e}")
        return await _render_index(
            request,
            error="Something went wrong, please try again",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return RedirectResponse(url=request.url_for("homepage"), status_code=status.HTTP_303_SEE_OTHER)


@router.get("/healthz", include_in_schema=False)
async def healthz(request: Request):
    """Liveness check for load balancers."""
    service = request.app.state.service

    payload = {
        "status": "ok",
        "uptime": round(time.monotonic() - request.app.state.started_at, 3),
        "version": VERSION,
        "db": "unknown",
    }

    health = await service.health_check()
    if health["database"]:
        payload["db"] = "ok"
        return JSONResponse(payload, status_code=status.HTTP_200_OK)

    payload["db"] = "down"
    payload["status"] = "error"
    return JSONResponse(payload, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


@router.get("/{code}", include_in_schema=False)
async def redirect_to_target(request: Request, code: str):
    """Redirect to the target URL, counting the click."""
    service = request.app.state.service

    try:
        target_url = await service.resolve(code)
    except NotFound:
        return PlainTextResponse("Not found", status_code=status.HTTP_404_NOT_FOUND)
    except StorageError as e:
        logger.error(f"Redirect failed for {code}: {e}")
        return PlainTextResponse("Service unavailable", status_code=status.HTTP_503_SERVICE_UNAVAILABLE)

    # 302 so every visit comes back through here and gets counted
    return RedirectResponse(url=target_url, status_code=status.HTTP_302_FOUND)
