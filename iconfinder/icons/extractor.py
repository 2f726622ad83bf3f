"""Candidate extractor for finding icon references in page markup"""

import logging
from typing import Callable, Iterator, Optional

from bs4 import BeautifulSoup, Tag

from iconfinder.icons.constants import (
    APPLE_TOUCH_ICON_DEFAULT_SIZE,
    APPLE_TOUCH_ICON_RELS,
    GENERIC_ICON_DEFAULT_SIZE,
    ICON_RELS,
    MANIFEST_REL,
    MANIFEST_SIZE_HINT,
    OG_IMAGE_PROPERTY,
    OG_IMAGE_SIZE_HINT,
    PARSER,
    SIZED_ICON_MIN_SIZE,
    UNSUPPORTED_URL_SCHEMES,
)
from iconfinder.icons.models import IconCandidate, IconKind, SiteInfo
from iconfinder.icons.utils import infer_size_from_url, parse_sizes, resolve_url

logger = logging.getLogger(__name__)

Scan = Callable[[BeautifulSoup, str], Iterator[IconCandidate]]


class CandidateExtractor:
    """Extract ranked icon candidates and the title from a page's markup.

    No network access happens here; manifests are reported as candidates and
    expanded later by the resolver.
    """

    def __init__(self, parser: str = PARSER) -> None:
        self.parser = parser

    def extract(self, html: str, base_url: str) -> list[IconCandidate]:
        """Return candidates sorted by size hint, largest first.

        Ties keep discovery order. Never raises; unparsable markup yields no candidates.
        """
        page = self._parse(html)
        if page is None:
            return []
        return self._extract_candidates(page, base_url)

    def extract_site_info(self, html: str, base_url: str) -> SiteInfo:
        """Return the page title together with its ranked candidates."""
        page = self._parse(html)
        if page is None:
            return SiteInfo(title=None, candidates=[])
        return SiteInfo(
            title=self._extract_title(page),
            candidates=self._extract_candidates(page, base_url),
        )

    def _parse(self, html: str) -> Optional[BeautifulSoup]:
        try:
            return BeautifulSoup(html, self.parser)
        except Exception as e:
            logger.warning(f"Failed to parse markup: {e}")
            return None

    def _extract_title(self, page: BeautifulSoup) -> Optional[str]:
        """Extract the trimmed text of the first title element."""
        try:
            title_element = page.find("title")
            if title_element is None:
                return None
            title = title_element.get_text().strip()
            return title or None
        except Exception as e:
            logger.debug(f"Exception while extracting title: {e}")
            return None

    def _extract_candidates(self, page: BeautifulSoup, base_url: str) -> list[IconCandidate]:
        scans: list[Scan] = [
            self._scan_apple_touch_icons,
            self._scan_sized_icons,
            self._scan_generic_icons,
            self._scan_manifest,
            self._scan_og_image,
        ]

        candidates: list[IconCandidate] = []
        seen_urls: set[str] = set()
        for scan in scans:
            try:
                for candidate in scan(page, base_url):
                    if candidate.url in seen_urls:
                        continue
                    seen_urls.add(candidate.url)
                    candidates.append(candidate)
            except Exception as e:
                logger.warning(f"Error in {scan.__name__}: {e}")

        # `sorted` is stable, so equal sizes stay in discovery order.
        return sorted(candidates, key=lambda candidate: candidate.size_hint, reverse=True)

    def _scan_apple_touch_icons(
        self, page: BeautifulSoup, base_url: str
    ) -> Iterator[IconCandidate]:
        for link in self._links_with_rel(page, APPLE_TOUCH_ICON_RELS):
            url = self._resolve_href(link.get("href"), base_url)
            if url is None:
                continue
            size = parse_sizes(self._attr(link, "sizes")) or APPLE_TOUCH_ICON_DEFAULT_SIZE
            yield IconCandidate(url=url, size_hint=size, kind=IconKind.APPLE_TOUCH_ICON)

    def _scan_sized_icons(self, page: BeautifulSoup, base_url: str) -> Iterator[IconCandidate]:
        for link in self._links_with_rel(page, ICON_RELS):
            size = parse_sizes(self._attr(link, "sizes"))
            if size is None or size < SIZED_ICON_MIN_SIZE:
                continue
            url = self._resolve_href(link.get("href"), base_url)
            if url is None:
                continue
            yield IconCandidate(url=url, size_hint=size, kind=IconKind.SIZED_ICON)

    def _scan_generic_icons(self, page: BeautifulSoup, base_url: str) -> Iterator[IconCandidate]:
        for link in self._links_with_rel(page, ICON_RELS):
            # Links with a usable size were handled (or rejected) by the sized scan.
            if parse_sizes(self._attr(link, "sizes")) is not None:
                continue
            url = self._resolve_href(link.get("href"), base_url)
            if url is None:
                continue
            size = infer_size_from_url(url) or GENERIC_ICON_DEFAULT_SIZE
            yield IconCandidate(url=url, size_hint=size, kind=IconKind.GENERIC_ICON)

    def _scan_manifest(self, page: BeautifulSoup, base_url: str) -> Iterator[IconCandidate]:
        for link in self._links_with_rel(page, frozenset({MANIFEST_REL})):
            url = self._resolve_href(link.get("href"), base_url)
            if url is None:
                continue
            yield IconCandidate(url=url, size_hint=MANIFEST_SIZE_HINT, kind=IconKind.MANIFEST)
            return

    def _scan_og_image(self, page: BeautifulSoup, base_url: str) -> Iterator[IconCandidate]:
        for meta in page.find_all("meta"):
            name = self._attr(meta, "property") or self._attr(meta, "name")
            if name is None or name.strip().lower() != OG_IMAGE_PROPERTY:
                continue
            url = self._resolve_href(meta.get("content"), base_url)
            if url is None:
                continue
            yield IconCandidate(url=url, size_hint=OG_IMAGE_SIZE_HINT, kind=IconKind.OG_IMAGE)
            return

    @staticmethod
    def _links_with_rel(page: BeautifulSoup, rels: frozenset[str]) -> Iterator[Tag]:
        """Yield link tags whose rel tokens intersect `rels`, in document order."""
        for link in page.find_all("link"):
            rel = link.get("rel")
            if not rel:
                continue
            tokens = rel.split() if isinstance(rel, str) else rel
            if rels.intersection(token.lower() for token in tokens):
                yield link

    @staticmethod
    def _attr(tag: Tag, name: str) -> Optional[str]:
        value = tag.get(name)
        if isinstance(value, list):
            return " ".join(value)
        return value

    @staticmethod
    def _resolve_href(href, base_url: str) -> Optional[str]:
        if not href or not isinstance(href, str):
            return None
        href = href.strip()
        if not href or href.lower().startswith(UNSUPPORTED_URL_SCHEMES):
            return None
        return resolve_url(href, base_url)


def extract(html: str, base_url: str) -> list[IconCandidate]:
    """Extract ranked icon candidates from `html` found at `base_url`."""
    return CandidateExtractor().extract(html, base_url)
