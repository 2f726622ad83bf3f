"""Validation functions for fetched icon content"""

import logging
from io import BytesIO
from typing import Optional

from PIL import Image as PILImage

from iconfinder.configs import settings
from iconfinder.icons.constants import MIME_WHITELIST, VECTOR_MIME_TYPES

logger = logging.getLogger(__name__)

BYTES_PER_KB: int = 1024


def match_mime_type(content_type: Optional[str]) -> Optional[str]:
    """Return the whitelisted mime type contained in a Content-Type header, if any."""
    if not content_type:
        return None
    content_type_lower = content_type.lower()
    for mime_type in MIME_WHITELIST:
        if mime_type in content_type_lower:
            return mime_type
    return None


def get_dimensions(content: bytes) -> tuple[int, int]:
    """Decode a raster image and return its (width, height)."""
    with PILImage.open(BytesIO(content)) as img:
        return img.size


def rejection_reason(
    content_type: Optional[str],
    byte_length: int,
    content: bytes,
    min_size_kb: float,
    min_dimension: Optional[int] = None,
) -> Optional[str]:
    """Return why the content is not an acceptable icon, or None if it is."""
    mime_type = match_mime_type(content_type)
    if mime_type is None:
        return f"unsupported content type {content_type!r}"

    if byte_length < min_size_kb * BYTES_PER_KB:
        return f"payload of {byte_length} bytes is below {min_size_kb}KB"

    # Dimensions are meaningless for vector images.
    if mime_type in VECTOR_MIME_TYPES:
        return None

    if min_dimension is None:
        min_dimension = settings.icons.min_dimension_px
    try:
        width, height = get_dimensions(content)
    except Exception as e:
        return f"undecodable image: {e}"
    if width < min_dimension or height < min_dimension:
        return f"dimensions {width}x{height} are below {min_dimension}px"

    return None


def validate(
    content_type: Optional[str],
    byte_length: int,
    content: bytes,
    min_size_kb: float,
) -> bool:
    """Check whether fetched content is an acceptable icon."""
    reason = rejection_reason(content_type, byte_length, content, min_size_kb)
    if reason is not None:
        logger.debug(f"Rejected icon content: {reason}")
        return False
    return True
