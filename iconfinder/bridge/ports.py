"""Bridge ports: transports between the restricted caller and the privileged side"""

import logging
from typing import Any, Mapping

import httpx

from iconfinder.bridge.handler import IconBridge
from iconfinder.bridge.protocol import parse_request
from iconfinder.exceptions import BridgeUnavailableError, InvalidBridgeRequestError

logger = logging.getLogger(__name__)


class InProcessPort:
    """Deliver messages to an `IconBridge` living in the same process."""

    def __init__(self, bridge: IconBridge) -> None:
        self.bridge = bridge

    async def send(self, message: Mapping[str, Any]) -> Mapping[str, Any]:
        """Parse and handle `message` directly."""
        try:
            request = parse_request(message)
        except InvalidBridgeRequestError as e:
            raise BridgeUnavailableError(str(e)) from e
        response = await self.bridge.handle(request)
        return response.model_dump(mode="json")


class HttpPort:
    """Deliver messages to the bridge endpoint of a remote iconfinder service."""

    session: httpx.AsyncClient
    endpoint: str

    def __init__(self, session: httpx.AsyncClient, endpoint: str) -> None:
        self.session = session
        self.endpoint = endpoint

    async def send(self, message: Mapping[str, Any]) -> Mapping[str, Any]:
        """POST `message` to the bridge endpoint and return the decoded answer."""
        try:
            response = await self.session.post(self.endpoint, json=dict(message))
        except httpx.HTTPError as e:
            raise BridgeUnavailableError(f"Bridge endpoint unreachable: {e}") from e

        if not response.is_success:
            raise BridgeUnavailableError(f"Bridge endpoint answered {response.status_code}")

        try:
            body = response.json()
        except ValueError as e:
            raise BridgeUnavailableError("Bridge endpoint answered with invalid JSON") from e
        if not isinstance(body, dict):
            raise BridgeUnavailableError("Bridge endpoint answered with a non-object")
        return body
