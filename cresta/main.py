"""HTTP server process entrypoint."""

from __future__ import annotations

import logging

import uvicorn

from cresta.api.server import create_api
from cresta.app import create_app
from cresta.config.logging import configure_logging
from cresta.config.settings import load_settings

logger = logging.getLogger(__name__)


def main() -> None:
    """Run the chat API with uvicorn."""

    settings = load_settings()
    configure_logging()

    app = create_app(settings)
    logger.info(
        "starting host=%s port=%d schema=%s llm=%s",
        settings.host,
        settings.port,
        settings.db_schema,
        "enabled" if app.text_generator is not None else "disabled",
    )
    uvicorn.run(create_api(app), host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
