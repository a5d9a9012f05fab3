"""Run the Surveybot server: python -m surveybot"""

from __future__ import annotations

import logging

import uvicorn

from surveybot.core.config import get_settings


def main() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger(__name__).info(f"Surveybot running on http://localhost:{settings.port}")
    uvicorn.run("surveybot.api.app:app", host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
