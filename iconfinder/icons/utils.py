"""URL and size helpers for the icon resolution pipeline"""

import re
from typing import Any, Optional
from urllib.parse import urlparse

# `192x192` anywhere in the path.
_DIMENSIONS_PATTERN = re.compile(r"(\d{2,4})[xX](\d{2,4})")
# `icon-192.png` or `icon_64.ico`: a 2-3 digit segment right before the extension.
_SUFFIX_SIZE_PATTERN = re.compile(r"[-_](\d{2,3})\.[A-Za-z0-9]+$")


def get_origin(url: str) -> str:
    """Extract the origin (e.g., "https://example.com" from "https://example.com/path")."""
    parsed_url = urlparse(url)
    return f"{parsed_url.scheme}://{parsed_url.netloc}"


def has_origin(url: str) -> bool:
    """Check whether `url` carries both a scheme and a host."""
    parsed_url = urlparse(url)
    return bool(parsed_url.scheme and parsed_url.netloc)


def get_directory(url: str) -> str:
    """Return the path of `url` up to and including its last `/`."""
    path = urlparse(url).path
    directory = path[: path.rfind("/") + 1]
    return directory or "/"


def resolve_url(href: str, base_url: str) -> str:
    """Resolve an href found in markup against the page it was found on.

    Absolute http(s) URLs are kept, protocol-relative URLs get `https:`, root-relative
    paths are joined to the origin and anything else to the page's directory.
    """
    href = href.strip()
    if href.lower().startswith(("http://", "https://")):
        return href
    if href.startswith("//"):
        return f"https:{href}"
    origin = get_origin(base_url)
    if href.startswith("/"):
        return f"{origin}{href}"
    return f"{origin}{get_directory(base_url)}{href}"


def infer_size_from_url(url: str) -> Optional[int]:
    """Guess an icon's edge length from digits embedded in its path."""
    path = urlparse(url).path
    if match := _DIMENSIONS_PATTERN.search(path):
        return int(match.group(1))
    if match := _SUFFIX_SIZE_PATTERN.search(path):
        return int(match.group(1))
    return None


def parse_sizes(sizes: Any) -> Optional[int]:
    """Parse a `sizes` attribute such as "16x16 32x32" and return the largest width.

    Manifests sometimes declare a bare integer, which is taken as the width. Returns
    None for missing, `any`, non-string or otherwise unparsable values.
    """
    if isinstance(sizes, int) and not isinstance(sizes, bool):
        return sizes if sizes > 0 else None
    if not sizes or not isinstance(sizes, str):
        return None
    widths = [int(width) for width, _ in _DIMENSIONS_PATTERN.findall(sizes)]
    if not widths:
        # Manifests and sloppy markup sometimes carry a bare number.
        bare = sizes.strip()
        return int(bare) if bare.isdigit() else None
    return max(widths)


def bare_domain(domain: str) -> str:
    """Normalize a domain for icon service lookups ("www.Example.com" -> "example.com")."""
    return domain.strip().lower().removeprefix("www.")


def domain_from_url(url: str) -> str:
    """Return the host part of `url`, accepting bare domains as well."""
    if "://" not in url:
        url = f"https://{url}"
    return urlparse(url).hostname or ""
