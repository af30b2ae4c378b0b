"""Clubhouse entrypoint.

Run with:
  python -m clubhouse
"""

import logging

import uvicorn

from clubhouse.core.config import get_settings


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )
    settings = get_settings()
    uvicorn.run("clubhouse.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    main()
