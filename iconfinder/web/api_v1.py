"""iconfinder V1 API"""

import logging
from typing import Annotated, Any, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status
from starlette.requests import Request

from iconfinder.bridge.handler import IconBridge
from iconfinder.bridge.protocol import (
    BridgeResponse,
    IconResponse,
    PageInfoResponse,
    parse_request,
)
from iconfinder.exceptions import InvalidBridgeRequestError

logger = logging.getLogger(__name__)

router = APIRouter()


def get_bridge(request: Request) -> IconBridge:
    """Return the bridge created by the application lifespan."""
    bridge: IconBridge = request.app.state.bridge
    return bridge


@router.post(
    "/bridge",
    tags=["bridge"],
    summary="Delegation bridge: one request, one response",
    response_model=BridgeResponse,
)
async def bridge_exchange(
    message: Annotated[dict[str, Any], Body()],
    bridge: IconBridge = Depends(get_bridge),
) -> BridgeResponse:
    """Handle a FETCH_PAGE, RESOLVE_ICON or RESOLVE_ICON_FALLBACK message.

    Unknown or malformed messages are answered with HTTP 400; everything else gets a
    (possibly empty) response.
    """
    try:
        bridge_request = parse_request(message)
    except InvalidBridgeRequestError as e:
        logger.warning(f"HTTP 400: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return await bridge.handle(bridge_request)


@router.get(
    "/page",
    tags=["page"],
    summary="Page title and ranked icon candidates",
    response_model=PageInfoResponse,
)
async def page_info(
    url: Annotated[str, Query(min_length=1)],
    bridge: IconBridge = Depends(get_bridge),
) -> PageInfoResponse:
    """Fetch a page and report its title and icon candidates."""
    return await bridge.fetch_page(url)


@router.get(
    "/icon",
    tags=["icon"],
    summary="Resolve the best icon for a site",
    response_model=IconResponse,
)
async def icon(
    domain: Annotated[str, Query(min_length=1)],
    page_url: Optional[str] = None,
    bridge: IconBridge = Depends(get_bridge),
) -> IconResponse:
    """Resolve an icon for `domain`, reading `page_url` for candidates if it is given."""
    return await bridge.find_icon(domain, page_url)
