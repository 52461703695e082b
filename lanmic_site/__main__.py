"""Run the API server with uvicorn: ``python -m lanmic_site``."""

import uvicorn

from lanmic_site.server.core.config import settings


def main() -> None:
    uvicorn.run(
        "lanmic_site.server.main:app",
        host=settings.server_host,
        port=settings.server_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
