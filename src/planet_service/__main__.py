"""Run the API with uvicorn: ``python -m planet_service`` or ``planet-service``."""

import uvicorn

from planet_service.config import settings
from planet_service.log_config import configure_logging


def main() -> None:
    configure_logging(settings.log_level)
    uvicorn.run(
        "planet_service.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )


if __name__ == "__main__":
    main()
