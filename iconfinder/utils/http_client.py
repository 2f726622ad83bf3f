"""A helper to create asynchronous HTTP client (via `httpx.AsyncClient`)
with common configurations.
"""

from httpx import AsyncBaseTransport, AsyncClient, Limits, Timeout


def create_http_client(
    base_url: str = "",
    max_connections: int = 100,
    connect_timeout: float = 5.0,
    request_timeout: float = 5.0,
    pool_timeout: float = 1.0,
    headers: dict[str, str] | None = None,
    follow_redirects: bool = True,
    transport: AsyncBaseTransport | None = None,
) -> AsyncClient:
    """Create a new `httpx.AsyncClient` with common configurations.

    Args:
      - `base_url` {str}: The base URL for this client. An empty string sets no base URL.
      - `max_connections` {int}: Max connections of the connection pool.
      - `connect_timeout` {float}: The timeout for establishing a connection to the host.
      - `request_timeout` {float}: The timeout for handling a request to the host.
      - `pool_timeout` {float}: The timeout for acquiring a connection from the pool.
      - `headers` {dict[str, str] | None}: Default headers sent with every request.
      - `follow_redirects` {bool}: Whether redirects are followed by default.
      - `transport` {AsyncBaseTransport | None}: A custom transport, e.g.
        `httpx.MockTransport` in tests. `None` uses the default network transport.
    Returns:
      - {AsyncClient}: An async HTTP client.
    """
    return AsyncClient(
        base_url=base_url,
        limits=Limits(max_connections=max_connections),
        timeout=Timeout(request_timeout, connect=connect_timeout, pool=pool_timeout),
        headers=headers,
        follow_redirects=follow_redirects,
        transport=transport,
    )
