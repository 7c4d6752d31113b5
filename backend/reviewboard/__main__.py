"""Run the Review Board API with uvicorn: `python -m reviewboard`."""

import uvicorn

from reviewboard.config import settings


def main() -> None:
    uvicorn.run(
        "reviewboard.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
