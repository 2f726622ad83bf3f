"""Delegation bridge exposing icon resolution to callers without network access"""

from iconfinder.bridge.client import BridgeClient
from iconfinder.bridge.handler import IconBridge
from iconfinder.bridge.ports import HttpPort, InProcessPort
from iconfinder.bridge.protocol import (
    BridgePort,
    BridgeRequest,
    BridgeResponse,
    BridgeResultCode,
    FetchPageRequest,
    IconResponse,
    PageInfoResponse,
    ResolveIconFallbackRequest,
    ResolveIconRequest,
    parse_request,
)

__all__ = [
    "BridgeClient",
    "BridgePort",
    "BridgeRequest",
    "BridgeResponse",
    "BridgeResultCode",
    "FetchPageRequest",
    "HttpPort",
    "IconBridge",
    "IconResponse",
    "InProcessPort",
    "PageInfoResponse",
    "ResolveIconFallbackRequest",
    "ResolveIconRequest",
    "parse_request",
]
