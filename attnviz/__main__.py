"""Run the API server: python -m attnviz"""

import uvicorn

from attnviz.config import settings


def main() -> None:
    uvicorn.run(
        "attnviz.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
