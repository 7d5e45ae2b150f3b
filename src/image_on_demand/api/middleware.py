"""Pass-through middlewares for the image routes.

Each middleware claims only the requests its handler recognizes; every
other request continues unchanged down the middleware chain.
"""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from image_on_demand.api.dependencies import get_image_handler
from image_on_demand.entities import NotMyRoute

IMAGE_METHODS = ("GET", "HEAD")


class ImageOnDemandMiddleware(BaseHTTPMiddleware):
    """Serves ``{base_path}{width}/{height}`` requests."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.method not in IMAGE_METHODS:
            return await call_next(request)

        result = await get_image_handler(request).handle(request.url.path, request.url.query)
        if isinstance(result, NotMyRoute):
            return await call_next(request)
        return result


class DummyImageMiddleware(BaseHTTPMiddleware):
    """Serves ``{dummy_base_path}{width}/{height}/{bgColor}/{textColor}`` requests."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.method not in IMAGE_METHODS:
            return await call_next(request)

        result = await get_image_handler(request).handle_dummy(request.url.path)
        if isinstance(result, NotMyRoute):
            return await call_next(request)
        return result
