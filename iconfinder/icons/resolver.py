"""Fallback chain resolver that walks icon sources until one produces a valid icon"""

import logging
from enum import Enum
from typing import Any, Awaitable, Callable, Iterable, Iterator, NamedTuple, Optional

import aiodogstatsd

from iconfinder.configs import settings
from iconfinder.icons.constants import DEFAULT_FAVICON_PATH
from iconfinder.icons.models import (
    IconCandidate,
    IconKind,
    ProbeOutcome,
    SoftFailure,
    Success,
    ValidatedPayload,
)
from iconfinder.icons.prober import SourceProber
from iconfinder.icons.utils import (
    bare_domain,
    domain_from_url,
    get_origin,
    has_origin,
    parse_sizes,
    resolve_url,
)
from iconfinder.utils.metrics import (
    RESOLVE_DURATION,
    RESOLVE_HIT,
    RESOLVE_MISS,
    chain_step_tags,
    get_metrics_client,
)

logger = logging.getLogger(__name__)


class ChainStep(str, Enum):
    """Stages of the fallback chain, in the order they are walked."""

    CANDIDATES = "candidates"
    WELL_KNOWN = "well_known"
    SERVICES = "services"
    FAVICON = "favicon"
    OG_IMAGE = "og_image"


class ChainSource(NamedTuple):
    """One fallible icon source of the chain."""

    step: ChainStep
    label: str
    run: Callable[[], Awaitable[ProbeOutcome]]


class SizeThresholds(NamedTuple):
    """Minimum payload sizes in KB. These are tuning knobs, not invariants."""

    large_icon_px: int
    large_icon_min_kb: float
    medium_icon_px: int
    medium_icon_min_kb: float
    small_icon_min_kb: float
    well_known_min_kb: float
    service_min_kb: float
    favicon_min_kb: float

    @classmethod
    def from_settings(cls) -> "SizeThresholds":
        """Build thresholds from the `icons.thresholds` settings."""
        config = settings.icons.thresholds
        return cls(
            large_icon_px=config.large_icon_px,
            large_icon_min_kb=config.large_icon_min_kb,
            medium_icon_px=config.medium_icon_px,
            medium_icon_min_kb=config.medium_icon_min_kb,
            small_icon_min_kb=config.small_icon_min_kb,
            well_known_min_kb=config.well_known_min_kb,
            service_min_kb=config.service_min_kb,
            favicon_min_kb=config.favicon_min_kb,
        )

    def for_size_hint(self, size_hint: int) -> float:
        """Return the minimum size for a candidate; larger declared icons need less."""
        if size_hint >= self.large_icon_px:
            return self.large_icon_min_kb
        if size_hint >= self.medium_icon_px:
            return self.medium_icon_min_kb
        return self.small_icon_min_kb


async def first_success(
    sources: Iterable[ChainSource],
) -> Optional[tuple[ChainSource, ValidatedPayload]]:
    """Run sources one at a time and return the first that succeeds.

    Sources are consumed lazily, so nothing after the winning source is built or run.
    A source that raises counts as a soft failure and the next source is tried.
    """
    for source in sources:
        try:
            outcome = await source.run()
        except Exception as e:
            logger.warning(f"{source.step.value} source {source.label} raised: {e}")
            outcome = SoftFailure(reason=f"unexpected error: {e}")
        match outcome:
            case Success(payload=payload):
                return source, payload
            case SoftFailure(reason=reason):
                logger.debug(f"{source.step.value} source {source.label} failed: {reason}")
    return None


def select_manifest_icon(
    manifest: Any, manifest_url: str, min_size: int
) -> Optional[tuple[str, int]]:
    """Pick the largest icon of a web app manifest declaring at least `min_size`.

    Returns the icon's absolute URL and declared size, or None.
    """
    if not isinstance(manifest, dict):
        return None
    icons = manifest.get("icons")
    if not isinstance(icons, list):
        return None

    best: Optional[tuple[str, int]] = None
    for icon in icons:
        if not isinstance(icon, dict):
            continue
        src = icon.get("src")
        size = parse_sizes(icon.get("sizes"))
        if not src or not isinstance(src, str) or size is None or size < min_size:
            continue
        # Strictly greater keeps the first of equally large icons.
        if best is None or size > best[1]:
            best = (src, size)

    if best is None:
        return None
    src, size = best
    return resolve_url(src, manifest_url), size


class FallbackChainResolver:
    """Resolve the best icon for a site by walking an ordered chain of sources.

    The chain is: parsed candidates (manifests expanded), well-known paths, icon
    services, the root favicon and finally a deferred og:image. The first source
    producing a validated payload wins. Absence of an icon is a normal outcome, so
    `resolve` returns None instead of raising.
    """

    prober: SourceProber
    well_known_paths: list[str]
    icon_services: list[str]
    thresholds: SizeThresholds
    manifest_min_icon_px: int
    metrics_client: aiodogstatsd.Client

    def __init__(
        self,
        prober: SourceProber,
        well_known_paths: Optional[list[str]] = None,
        icon_services: Optional[list[str]] = None,
        thresholds: Optional[SizeThresholds] = None,
        manifest_min_icon_px: Optional[int] = None,
        metrics_client: Optional[aiodogstatsd.Client] = None,
    ) -> None:
        self.prober = prober
        self.well_known_paths = list(
            settings.icons.well_known_paths if well_known_paths is None else well_known_paths
        )
        self.icon_services = list(
            settings.icons.icon_services if icon_services is None else icon_services
        )
        self.thresholds = thresholds or SizeThresholds.from_settings()
        self.manifest_min_icon_px = (
            settings.icons.manifest_min_icon_px
            if manifest_min_icon_px is None
            else manifest_min_icon_px
        )
        self.metrics_client = metrics_client or get_metrics_client()

    async def resolve(
        self,
        domain: str,
        page_url: Optional[str] = None,
        candidates: Optional[list[IconCandidate]] = None,
    ) -> Optional[ValidatedPayload]:
        """Return the first validated icon along the chain, or None if every source fails."""
        try:
            with self.metrics_client.timeit(RESOLVE_DURATION):
                result = await first_success(self._sources(domain, page_url, candidates or []))
        except Exception as e:
            logger.error(f"Unexpected error resolving icon for {domain}: {e}")
            return None

        if result is None:
            logger.info(f"No icon found for {domain}")
            self.metrics_client.increment(RESOLVE_MISS)
            return None

        source, payload = result
        logger.info(f"Resolved icon for {domain} from {source.step.value} source {source.label}")
        self.metrics_client.increment(RESOLVE_HIT, tags=chain_step_tags(source.step.value))
        return payload

    def _sources(
        self, domain: str, page_url: Optional[str], candidates: list[IconCandidate]
    ) -> Iterator[ChainSource]:
        host = domain_from_url(domain) if domain else ""
        if not host and page_url:
            host = domain_from_url(page_url)
        origin = get_origin(page_url) if page_url and has_origin(page_url) else f"https://{host}"

        deferred_og_image: Optional[IconCandidate] = None
        for candidate in candidates:
            if candidate.kind == IconKind.OG_IMAGE:
                # Social previews are often oversized or off-topic; try them last.
                if deferred_og_image is None:
                    deferred_og_image = candidate
                continue
            if candidate.kind == IconKind.MANIFEST:
                yield ChainSource(
                    ChainStep.CANDIDATES, candidate.url, self._manifest_source(candidate)
                )
                continue
            yield ChainSource(
                ChainStep.CANDIDATES,
                candidate.url,
                self._probe_source(
                    candidate.url, self.thresholds.for_size_hint(candidate.size_hint)
                ),
            )

        for path in self.well_known_paths:
            url = f"{origin}{path}"
            yield ChainSource(
                ChainStep.WELL_KNOWN,
                url,
                self._probe_source(url, self.thresholds.well_known_min_kb),
            )

        if host:
            service_domain = bare_domain(host)
            for template in self.icon_services:
                url = template.format(domain=service_domain)
                yield ChainSource(
                    ChainStep.SERVICES,
                    url,
                    self._probe_source(url, self.thresholds.service_min_kb),
                )

        favicon_url = f"{origin}{DEFAULT_FAVICON_PATH}"
        yield ChainSource(
            ChainStep.FAVICON,
            favicon_url,
            self._probe_source(favicon_url, self.thresholds.favicon_min_kb),
        )

        if deferred_og_image is not None:
            yield ChainSource(
                ChainStep.OG_IMAGE,
                deferred_og_image.url,
                self._probe_source(
                    deferred_og_image.url,
                    self.thresholds.for_size_hint(deferred_og_image.size_hint),
                ),
            )

    def _probe_source(
        self, url: str, min_size_kb: float
    ) -> Callable[[], Awaitable[ProbeOutcome]]:
        async def run() -> ProbeOutcome:
            return await self.prober.probe(url, min_size_kb)

        return run

    def _manifest_source(self, candidate: IconCandidate) -> Callable[[], Awaitable[ProbeOutcome]]:
        async def run() -> ProbeOutcome:
            manifest = await self.prober.fetch_json(candidate.url)
            if manifest is None:
                return SoftFailure(reason="manifest unavailable")
            selected = select_manifest_icon(manifest, candidate.url, self.manifest_min_icon_px)
            if selected is None:
                return SoftFailure(
                    reason=f"manifest declares no icon of at least {self.manifest_min_icon_px}px"
                )
            icon_url, size = selected
            return await self.prober.probe(icon_url, self.thresholds.for_size_hint(size))

        return run
