"""Source prober: the only component of the pipeline that talks to the network"""

import asyncio
import logging
from typing import Any, Optional

import httpx

from iconfinder.configs import settings
from iconfinder.exceptions import ProbeError
from iconfinder.icons.constants import REQUEST_HEADERS
from iconfinder.icons.models import ProbeOutcome, SoftFailure, Success, ValidatedPayload
from iconfinder.icons.validator import match_mime_type, rejection_reason
from iconfinder.utils.http_client import create_http_client

logger = logging.getLogger(__name__)


def default_headers() -> dict[str, str]:
    """Return the headers sent with every outbound request."""
    return {**REQUEST_HEADERS, "User-Agent": settings.icons.user_agent}


class SourceProber:
    """Fetch single URLs with a bounded timeout and validate what comes back.

    Every failure, whether transport, HTTP status, content or parse related,
    collapses into a `SoftFailure`; nothing raises out of the public methods.
    """

    session: httpx.AsyncClient
    probe_timeout_sec: float
    page_timeout_sec: float

    def __init__(
        self,
        session: Optional[httpx.AsyncClient] = None,
        probe_timeout_sec: Optional[float] = None,
        page_timeout_sec: Optional[float] = None,
    ) -> None:
        self.probe_timeout_sec = probe_timeout_sec or settings.icons.probe_timeout_sec
        self.page_timeout_sec = page_timeout_sec or settings.icons.page_timeout_sec
        self._owns_session = session is None
        self.session = session or create_http_client(
            request_timeout=self.page_timeout_sec,
            connect_timeout=self.page_timeout_sec,
            headers=default_headers(),
        )

    async def probe(self, url: str, min_size_kb: float) -> ProbeOutcome:
        """Fetch `url` once and return the validated icon, or a soft failure."""
        try:
            response = await self._get(url, self.probe_timeout_sec)
            content = response.content
            content_type = response.headers.get("Content-Type")
            reason = rejection_reason(content_type, len(content), content, min_size_kb)
            if reason is not None:
                raise ProbeError(reason)
            mime_type = match_mime_type(content_type)
            if mime_type is None:
                raise ProbeError(f"unsupported content type {content_type!r}")
            payload = ValidatedPayload(mime_type=mime_type, content=content, source_url=url)
        except ProbeError as e:
            logger.debug(f"Probe of {url} failed: {e}")
            return SoftFailure(reason=str(e))
        except Exception as e:
            logger.warning(f"Unexpected error probing {url}: {e}")
            return SoftFailure(reason=f"unexpected error: {e}")

        return Success(payload=payload)

    async def fetch_page(self, url: str) -> Optional[str]:
        """Fetch the markup of a page, or return None if it can't be fetched."""
        try:
            response = await self._get(url, self.page_timeout_sec)
            return response.text
        except ProbeError as e:
            logger.debug(f"Failed to fetch page {url}: {e}")
        except Exception as e:
            logger.warning(f"Unexpected error fetching page {url}: {e}")
        return None

    async def fetch_json(self, url: str) -> Optional[Any]:
        """Fetch and decode a JSON document such as a web app manifest."""
        try:
            response = await self._get(url, self.probe_timeout_sec)
            return response.json()
        except ProbeError as e:
            logger.debug(f"Failed to fetch JSON from {url}: {e}")
        except ValueError:
            logger.debug(f"Failed to parse JSON from {url}")
        except Exception as e:
            logger.warning(f"Unexpected error fetching JSON from {url}: {e}")
        return None

    async def _get(self, url: str, timeout: float) -> httpx.Response:
        """Issue a single GET bounded by `timeout` seconds in total."""
        try:
            response = await asyncio.wait_for(
                self.session.get(url, timeout=timeout, follow_redirects=True), timeout
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            raise ProbeError(f"timed out after {timeout}s") from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise ProbeError(f"transport error: {e}") from e

        if not response.is_success:
            raise ProbeError(f"HTTP status {response.status_code}")
        return response

    async def close(self) -> None:
        """Close the HTTP session if this prober created it."""
        if self._owns_session:
            await self.session.aclose()
