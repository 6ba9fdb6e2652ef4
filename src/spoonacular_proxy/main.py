"""Command line entrypoint that serves the proxy with uvicorn."""

import logging

import uvicorn

from spoonacular_proxy.api.app import create_app
from spoonacular_proxy.containers import build_container


def main() -> None:
    """Run the proxy on the configured host and port."""
    container = build_container()
    settings = container.settings
    app = create_app(container)
    logging.getLogger(__name__).info(
        "Spoonacular API wrapper listening on port %s", settings.port
    )
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level="debug" if settings.debug else "info",
    )


if __name__ == "__main__":
    main()
