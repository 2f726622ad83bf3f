"""Restricted side of the delegation bridge"""

import asyncio
import logging
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ValidationError

from iconfinder.bridge.protocol import (
    BridgePort,
    BridgeResultCode,
    FetchPageRequest,
    IconResponse,
    PageInfoResponse,
    ResolveIconFallbackRequest,
    ResolveIconRequest,
)
from iconfinder.configs import settings
from iconfinder.exceptions import BridgeUnavailableError
from iconfinder.icons.models import IconCandidate, SiteInfo

logger = logging.getLogger(__name__)


class BridgeClient:
    """Ask a privileged context to fetch pages and resolve icons.

    The port is injected by whoever builds the client; there is no global check
    for whether a bridge exists. Unreachable bridges, closed channels and timeouts
    all resolve to None or an empty `SiteInfo`, never to an exception.
    """

    port: BridgePort
    timeout_sec: float

    def __init__(self, port: BridgePort, timeout_sec: Optional[float] = None) -> None:
        self.port = port
        self.timeout_sec = timeout_sec or settings.bridge.request_timeout_sec

    async def fetch_page(self, url: str) -> SiteInfo:
        """Return the title and candidates of `url`, or an empty `SiteInfo`."""
        result_code, response = await self._exchange(FetchPageRequest(url=url), PageInfoResponse)
        match result_code:
            case BridgeResultCode.SUCCESS if isinstance(response, PageInfoResponse):
                return SiteInfo(title=response.title, candidates=response.candidates)
            case _:
                return SiteInfo(title=None, candidates=[])

    async def resolve_icon(
        self, domain: str, page_url: str, candidates: list[IconCandidate]
    ) -> Optional[str]:
        """Resolve an icon from pre-parsed candidates; returns a `data:` URI or None."""
        request = ResolveIconRequest(domain=domain, page_url=page_url, candidates=candidates)
        return await self._resolve(request)

    async def resolve_icon_fallback(
        self, domain: str, page_url: Optional[str] = None
    ) -> Optional[str]:
        """Resolve an icon without candidates; returns a `data:` URI or None."""
        return await self._resolve(ResolveIconFallbackRequest(domain=domain, page_url=page_url))

    async def _resolve(
        self, request: ResolveIconRequest | ResolveIconFallbackRequest
    ) -> Optional[str]:
        result_code, response = await self._exchange(request, IconResponse)
        match result_code:
            case BridgeResultCode.SUCCESS if isinstance(response, IconResponse):
                return response.icon
            case _:
                return None

    async def _exchange(
        self, request: BaseModel, response_type: type[BaseModel]
    ) -> tuple[BridgeResultCode, BaseModel | None]:
        """Send one request and wait a bounded time for its response."""
        try:
            raw: Mapping[str, Any] = await asyncio.wait_for(
                self.port.send(request.model_dump(mode="json")), self.timeout_sec
            )
            return BridgeResultCode.SUCCESS, response_type.model_validate(raw)
        except asyncio.TimeoutError:
            logger.warning(f"Bridge did not answer within {self.timeout_sec}s")
        except BridgeUnavailableError as e:
            logger.warning(f"Bridge unavailable: {e}")
        except ValidationError as e:
            logger.warning(f"Bridge answered with an invalid response: {e.error_count()} errors")
        except Exception as e:
            logger.error(f"Unexpected bridge error: {e}")
        return BridgeResultCode.UNAVAILABLE, None
