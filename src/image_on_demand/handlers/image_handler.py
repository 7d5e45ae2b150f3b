"""HTTP handlers for the image routes.

Handlers run the pipeline extract -> cache key -> resolve -> respond and
translate fatal configuration errors into 500 responses. Blocking work
(Pillow, Redis, disk) runs in a worker thread.
"""

import asyncio
import logging

from fastapi import status
from fastapi.responses import JSONResponse, Response

from image_on_demand.dto import ErrorResponse
from image_on_demand.entities import NotMyRoute
from image_on_demand.exceptions import ConfigurationError
from image_on_demand.handlers.response_builder import ResponseBuilder
from image_on_demand.services import ImageResolver, ParameterExtractor, build_cache_key_for

logger = logging.getLogger(__name__)


class ImageHandler:
    """HTTP handlers for image requests.

    Example:
        ```python
        handler = ImageHandler(extractor=extractor, resolver=resolver, responses=builder)

        result = await handler.handle("/image-service/400/300", "text=Hello")
        if isinstance(result, NotMyRoute):
            return await call_next(request)
        return result
        ```
    """

    def __init__(
        self,
        extractor: ParameterExtractor,
        resolver: ImageResolver,
        responses: ResponseBuilder,
    ) -> None:
        """Initialize the image handler.

        Args:
            extractor: Request parser (required).
            resolver: Image resolution service (required).
            responses: Response builder (required).
        """
        self._extractor = extractor
        self._resolver = resolver
        self._responses = responses

    async def handle(self, request_path: str, query_string: str) -> Response | NotMyRoute:
        """Handle GET {base_path}{width}/{height} requests.

        Args:
            request_path: The URL path
            query_string: The raw query string

        Returns:
            The image response, or NotMyRoute for paths outside the base path
        """
        parsed = self._extractor.extract(request_path, query_string)
        if isinstance(parsed, NotMyRoute):
            return parsed

        cache_key = build_cache_key_for(parsed)
        try:
            resolved = await asyncio.to_thread(self._resolver.resolve, parsed, cache_key)
        except ConfigurationError as e:
            return self._configuration_error(e)

        return self._responses.build(resolved, parsed.wants_json)

    async def handle_dummy(self, request_path: str) -> Response | NotMyRoute:
        """Handle GET {dummy_base_path}{width}/{height}/{bgColor}/{textColor} requests.

        Always renders a fresh placeholder; nothing is cached.
        """
        parsed = self._extractor.extract_dummy(request_path)
        if isinstance(parsed, NotMyRoute):
            return parsed

        try:
            resolved = await asyncio.to_thread(self._resolver.render_placeholder, parsed)
        except ConfigurationError as e:
            return self._configuration_error(e)

        return self._responses.build(resolved, wants_json=False)

    @staticmethod
    def _configuration_error(error: ConfigurationError) -> JSONResponse:
        logger.error("Image service is misconfigured: %s", error)
        return JSONResponse(
            ErrorResponse(detail=f"Image service misconfigured: {error}").model_dump(),
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
