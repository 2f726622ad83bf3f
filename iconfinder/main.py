"""App startup point"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse

from iconfinder.bridge.handler import IconBridge
from iconfinder.configs import settings
from iconfinder.configs.app_configs.config_logging import configure_logging
from iconfinder.icons.prober import SourceProber, default_headers
from iconfinder.icons.resolver import FallbackChainResolver
from iconfinder.utils.http_client import create_http_client
from iconfinder.utils.metrics import configure_metrics, get_metrics_client
from iconfinder.web import api_v1, dockerflow

tags_metadata = [
    {
        "name": "bridge",
        "description": "Request/response bridge for callers that can't fetch sites themselves.",
    },
    {
        "name": "page",
        "description": "Title and icon candidates of a page.",
    },
    {
        "name": "icon",
        "description": "Best available icon of a site as a data URI.",
    },
]

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Set up various configurations at startup and handle shutdown clean up.
    See lifespan events in fastAPI docs https://fastapi.tiangolo.com/advanced/events/
    """
    # Setup methods run before `yield` and cleanup methods after.
    configure_logging()
    await configure_metrics()
    session = create_http_client(
        request_timeout=settings.icons.page_timeout_sec,
        connect_timeout=settings.icons.page_timeout_sec,
        headers=default_headers(),
    )
    prober = SourceProber(session=session)
    app.state.bridge = IconBridge(prober=prober, resolver=FallbackChainResolver(prober))
    yield
    await session.aclose()
    await get_metrics_client().close()


app = FastAPI(openapi_tags=tags_metadata, lifespan=lifespan, default_response_class=ORJSONResponse)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> ORJSONResponse:
    """Use HTTP status code: 400 for all invalid requests."""
    # `exc.errors()` is left out of the log, it can get very large.
    logger.warning(f"HTTP 400: request validation error for path: {request.url.path}")
    return ORJSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=jsonable_encoder({"detail": exc.errors()}),
    )


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS", "HEAD"],
)

app.include_router(dockerflow.router)
app.include_router(api_v1.router, prefix="/api/v1")


if __name__ == "__main__":  # pragma: no cover
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000, proxy_headers=True)
