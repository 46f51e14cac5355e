"""Run the API with uvicorn: ``python -m lexcase``."""

import uvicorn

from lexcase.config import settings


if __name__ == "__main__":
    uvicorn.run(
        "lexcase.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )
