"""Run the Hearing Test API with uvicorn: ``python -m hearing_api``."""

import uvicorn

from .config import get_config
from .utils.logging_config import get_logger, initialize_logging


def main() -> None:
    config = get_config()
    initialize_logging(debug=config.server.debug)
    logger = get_logger('main')
    logger.info(f"Starting server on http://{config.server.host}:{config.server.port}")

    uvicorn.run(
        "hearing_api.main:app",
        host=config.server.host,
        port=config.server.port,
        reload=config.server.auto_reload,
        log_level="debug" if config.server.debug else config.app.log_level.lower(),
    )


if __name__ == "__main__":
    main()
