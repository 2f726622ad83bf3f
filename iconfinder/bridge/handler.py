"""Privileged side of the delegation bridge"""

import logging
from typing import Optional

from iconfinder.bridge.protocol import (
    BridgeRequest,
    BridgeResponse,
    FetchPageRequest,
    IconResponse,
    PageInfoResponse,
    ResolveIconFallbackRequest,
    ResolveIconRequest,
)
from iconfinder.icons.extractor import CandidateExtractor
from iconfinder.icons.models import IconCandidate
from iconfinder.icons.prober import SourceProber
from iconfinder.icons.resolver import FallbackChainResolver

logger = logging.getLogger(__name__)


class IconBridge:
    """Serve bridge requests for callers that can't reach arbitrary sites themselves.

    Every entry point answers with a response model; failures produce empty responses.
    """

    prober: SourceProber
    extractor: CandidateExtractor
    resolver: FallbackChainResolver

    def __init__(
        self,
        prober: SourceProber,
        resolver: FallbackChainResolver,
        extractor: Optional[CandidateExtractor] = None,
    ) -> None:
        self.prober = prober
        self.resolver = resolver
        self.extractor = extractor or CandidateExtractor()

    async def handle(self, request: BridgeRequest) -> BridgeResponse:
        """Dispatch a parsed request to the matching operation."""
        match request:
            case FetchPageRequest(url=url):
                return await self.fetch_page(url)
            case ResolveIconRequest(domain=domain, page_url=page_url, candidates=candidates):
                return await self.resolve_icon(domain, page_url, candidates)
            case ResolveIconFallbackRequest(domain=domain, page_url=page_url):
                return await self.resolve_icon_fallback(domain, page_url)
        logger.warning(f"Unhandled bridge request type: {type(request).__name__}")
        return IconResponse()

    async def fetch_page(self, url: str) -> PageInfoResponse:
        """Fetch a page and extract its title and ranked icon candidates."""
        try:
            html = await self.prober.fetch_page(url)
            if html is None:
                return PageInfoResponse()
            site_info = self.extractor.extract_site_info(html, url)
            return PageInfoResponse(title=site_info.title, candidates=site_info.candidates)
        except Exception as e:
            logger.warning(f"Error fetching page info for {url}: {e}")
            return PageInfoResponse()

    async def resolve_icon(
        self, domain: str, page_url: str, candidates: list[IconCandidate]
    ) -> IconResponse:
        """Resolve an icon starting from caller-supplied candidates."""
        payload = await self.resolver.resolve(domain, page_url, candidates)
        return IconResponse(icon=payload.encoded if payload else None)

    async def resolve_icon_fallback(
        self, domain: str, page_url: Optional[str] = None
    ) -> IconResponse:
        """Resolve an icon using only the sources that need no page markup."""
        payload = await self.resolver.resolve(domain, page_url)
        return IconResponse(icon=payload.encoded if payload else None)

    async def find_icon(self, domain: str, page_url: Optional[str] = None) -> IconResponse:
        """Run the whole pipeline: fetch the page if there is one, then resolve."""
        candidates: list[IconCandidate] = []
        if page_url:
            page_info = await self.fetch_page(page_url)
            candidates = page_info.candidates
        payload = await self.resolver.resolve(domain, page_url, candidates)
        return IconResponse(icon=payload.encoded if payload else None)
