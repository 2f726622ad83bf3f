"""Constants for the icon resolution pipeline"""

# Accepted icon mime types. Matched as case-insensitive substrings of the
# Content-Type header, so parameters such as `; charset=...` are tolerated.
# `image/svg+xml` must precede any entry that could match it as a substring.
MIME_WHITELIST: tuple[str, ...] = (
    "image/svg+xml",
    "image/png",
    "image/jpeg",
    "image/gif",
    "image/webp",
    "image/x-icon",
    "image/vnd.microsoft.icon",
)

VECTOR_MIME_TYPES: frozenset[str] = frozenset({"image/svg+xml"})

# Apple touch icons are 180x180 unless stated otherwise.
APPLE_TOUCH_ICON_DEFAULT_SIZE: int = 180

# Icon links with a `sizes` attribute are only kept at or above this edge length.
SIZED_ICON_MIN_SIZE: int = 32

# Size assumed for icon links whose size can't be inferred.
GENERIC_ICON_DEFAULT_SIZE: int = 32

# Social preview images get a fixed synthetic size regardless of their real dimensions.
OG_IMAGE_SIZE_HINT: int = 200

MANIFEST_SIZE_HINT: int = 0

APPLE_TOUCH_ICON_RELS: frozenset[str] = frozenset(
    {"apple-touch-icon", "apple-touch-icon-precomposed"}
)

ICON_RELS: frozenset[str] = frozenset({"icon"})

MANIFEST_REL: str = "manifest"

OG_IMAGE_PROPERTY: str = "og:image"

# Hrefs with these schemes never point at a fetchable icon.
UNSUPPORTED_URL_SCHEMES: tuple[str, ...] = ("data:", "javascript:", "mailto:")

DEFAULT_FAVICON_PATH: str = "/favicon.ico"

PARSER: str = "html.parser"

REQUEST_HEADERS: dict[str, str] = {
    "Accept": (
        "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,*/*;q=0.8"
    ),
    "Accept-Language": "en-GB,en-US;q=0.9,en;q=0.8",
    "DNT": "1",
}
