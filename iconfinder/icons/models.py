"""Data models for the icon resolution pipeline"""

import base64
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict


class IconKind(str, Enum):
    """Where an icon candidate was discovered in the markup."""

    APPLE_TOUCH_ICON = "apple-touch-icon"
    SIZED_ICON = "sized-icon"
    GENERIC_ICON = "generic-icon"
    MANIFEST = "manifest"
    OG_IMAGE = "og-image"


class IconCandidate(BaseModel):
    """A discovered, not yet validated reference to a potential icon."""

    model_config = ConfigDict(frozen=True)

    url: str
    size_hint: int = 0
    kind: IconKind


class SiteInfo(BaseModel):
    """Title and ranked icon candidates of a single page."""

    model_config = ConfigDict(frozen=True)

    title: Optional[str] = None
    candidates: list[IconCandidate] = []


class ValidatedPayload(BaseModel):
    """Icon content that passed validation.

    Only the prober constructs these, and only after the validator accepted the content.
    """

    model_config = ConfigDict(frozen=True)

    mime_type: str
    content: bytes
    source_url: str

    @property
    def encoded(self) -> str:
        """Return the payload as a `data:` URI."""
        data = base64.b64encode(self.content).decode("ascii")
        return f"data:{self.mime_type};base64,{data}"


class Success(BaseModel):
    """A probe that produced a validated payload."""

    model_config = ConfigDict(frozen=True)

    status: Literal["success"] = "success"
    payload: ValidatedPayload


class SoftFailure(BaseModel):
    """An expected inability of one source to produce an icon."""

    model_config = ConfigDict(frozen=True)

    status: Literal["soft_failure"] = "soft_failure"
    reason: str


ProbeOutcome = Success | SoftFailure
