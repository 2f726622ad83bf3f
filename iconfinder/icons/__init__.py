"""Icon resolution pipeline: extraction, validation, probing and the fallback chain"""

from iconfinder.icons.extractor import CandidateExtractor, extract
from iconfinder.icons.models import (
    IconCandidate,
    IconKind,
    ProbeOutcome,
    SiteInfo,
    SoftFailure,
    Success,
    ValidatedPayload,
)
from iconfinder.icons.prober import SourceProber
from iconfinder.icons.resolver import FallbackChainResolver, first_success
from iconfinder.icons.validator import validate

__all__ = [
    "CandidateExtractor",
    "FallbackChainResolver",
    "IconCandidate",
    "IconKind",
    "ProbeOutcome",
    "SiteInfo",
    "SoftFailure",
    "SourceProber",
    "Success",
    "ValidatedPayload",
    "extract",
    "first_success",
    "validate",
]
