# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

"""Module for test configurations for the unit test directory."""

import os
from io import BytesIO
from typing import Callable

import aiodogstatsd
import httpx
import pytest
from PIL import Image as PILImage
from pytest_mock import MockerFixture

from iconfinder.icons.resolver import SizeThresholds

ImageFactory = Callable[..., bytes]


@pytest.fixture(name="make_image")
def fixture_make_image() -> ImageFactory:
    """Return a function that renders an image of the given edge length.

    Noisy images don't compress, so their payload size grows with their dimensions.
    """

    def make_image(size: int = 64, image_format: str = "PNG", noisy: bool = True) -> bytes:
        if noisy:
            image = PILImage.frombytes("RGB", (size, size), os.urandom(size * size * 3))
        else:
            image = PILImage.new("RGB", (size, size), (200, 30, 30))
        buffer = BytesIO()
        if image_format == "ICO":
            image.save(buffer, format="ICO", sizes=[(size, size)])
        else:
            image.save(buffer, format=image_format)
        return buffer.getvalue()

    return make_image


@pytest.fixture(name="svg_content")
def fixture_svg_content() -> bytes:
    """Return a small but valid SVG document."""
    return (
        b'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 10 10">'
        b'<rect width="10" height="10" fill="red"/></svg>'
    )


@pytest.fixture(name="routed_client")
def fixture_routed_client():
    """Return a factory for an `httpx.AsyncClient` served by `httpx.MockTransport`.

    `routes` maps full URLs to responses; anything else answers 404. Every requested
    URL is appended to `client.requested_urls` in order.
    """

    def create_client(routes: dict[str, httpx.Response]) -> httpx.AsyncClient:
        requested_urls: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            url = str(request.url)
            requested_urls.append(url)
            return routes.get(url, httpx.Response(404))

        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        client.requested_urls = requested_urls  # type: ignore[attr-defined]
        return client

    return create_client


@pytest.fixture(name="image_response")
def fixture_image_response():
    """Return a factory for image responses."""

    def create_response(content: bytes, content_type: str = "image/png") -> httpx.Response:
        return httpx.Response(200, headers={"Content-Type": content_type}, content=content)

    return create_response


@pytest.fixture(name="thresholds")
def fixture_thresholds() -> SizeThresholds:
    """Return size thresholds that are easy to reason about in tests."""
    return SizeThresholds(
        large_icon_px=128,
        large_icon_min_kb=0.05,
        medium_icon_px=64,
        medium_icon_min_kb=0.2,
        small_icon_min_kb=0.5,
        well_known_min_kb=0.3,
        service_min_kb=1.0,
        favicon_min_kb=0.02,
    )


@pytest.fixture(name="metrics_client_mock")
def fixture_metrics_client_mock(mocker: MockerFixture):
    """Return a mock StatsD client."""
    return mocker.MagicMock(spec_set=aiodogstatsd.Client)
