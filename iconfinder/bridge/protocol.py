"""Request/response protocol of the delegation bridge"""

from enum import Enum
from typing import Annotated, Any, Literal, Mapping, Optional, Protocol, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from iconfinder.exceptions import InvalidBridgeRequestError
from iconfinder.icons.models import IconCandidate


class BridgeResultCode(Enum):
    """Enum to capture the result of one request/response exchange."""

    SUCCESS = 0
    UNAVAILABLE = 1


class FetchPageRequest(BaseModel):
    """Fetch a page and report its title and icon candidates."""

    type: Literal["FETCH_PAGE"] = "FETCH_PAGE"
    url: str


class ResolveIconRequest(BaseModel):
    """Resolve an icon starting from candidates the caller already parsed."""

    type: Literal["RESOLVE_ICON"] = "RESOLVE_ICON"
    domain: str
    page_url: str
    candidates: list[IconCandidate] = []


class ResolveIconFallbackRequest(BaseModel):
    """Resolve an icon without candidates, starting at the well-known paths."""

    type: Literal["RESOLVE_ICON_FALLBACK"] = "RESOLVE_ICON_FALLBACK"
    domain: str
    page_url: Optional[str] = None


BridgeRequest = Annotated[
    Union[FetchPageRequest, ResolveIconRequest, ResolveIconFallbackRequest],
    Field(discriminator="type"),
]

_bridge_request_adapter: TypeAdapter[BridgeRequest] = TypeAdapter(BridgeRequest)


class PageInfoResponse(BaseModel):
    """Answer to FETCH_PAGE. Empty when the page couldn't be fetched or parsed."""

    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = None
    candidates: list[IconCandidate] = []


class IconResponse(BaseModel):
    """Answer to RESOLVE_ICON and RESOLVE_ICON_FALLBACK: a `data:` URI or None."""

    model_config = ConfigDict(extra="forbid")

    icon: Optional[str] = None


BridgeResponse = Union[PageInfoResponse, IconResponse]


class BridgePort(Protocol):
    """Protocol for the transport that carries bridge messages to the privileged side.

    Ports exchange plain JSON-compatible mappings, one request and one response,
    with no persistent connection.
    """

    async def send(self, message: Mapping[str, Any]) -> Mapping[str, Any]:
        """Deliver `message` and return the response.

        Raises:
            BridgeUnavailableError: If the privileged side can't be reached or answers
            with something other than a response.
        """
        ...


def parse_request(message: Mapping[str, Any]) -> BridgeRequest:
    """Validate a raw message into one of the bridge request types.

    Raises:
        InvalidBridgeRequestError: If the message doesn't match any request type.
    """
    try:
        return _bridge_request_adapter.validate_python(message)
    except ValidationError as e:
        raise InvalidBridgeRequestError(f"Invalid bridge request: {e.error_count()} errors") from e
