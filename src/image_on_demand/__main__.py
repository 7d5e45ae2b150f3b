"""Run the image service with uvicorn: ``python -m image_on_demand``."""

import uvicorn

from image_on_demand.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "image_on_demand.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )


if __name__ == "__main__":
    main()
