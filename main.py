# main.py

from pathlib import Path

import uvicorn
from fastapi import FastAPI

from storycomic.api import endpoints
from storycomic.api.exception_handlers import register_exception_handlers
from storycomic.config.settings import Settings
from storycomic.lifespan import lifespan
from storycomic.utils.logger import setup_logging, get_logger

settings = Settings()

setup_logging(Path(settings.LOG_CONFIG_PATH))
logger = get_logger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    description="Splits a short story into comic panels and renders one image per panel",
    version=settings.APP_VERSION,
    lifespan=lifespan,
    docs_url="/swagger",
    redoc_url=None,
    openapi_url="/schema.json",
)

register_exception_handlers(app)
app.include_router(endpoints.router)

if __name__ == "__main__":
    width = 50
    line = f"+{'-' * (width - 2)}+"

    startup_message = f"""
    {line}
    | {'Application Settings Initialized':^{width - 4}} |
    {line}
    | {'App Name:':<15} {str(settings.APP_NAME):<{width - 22}} |
    | {'App Version:':<15} {str(settings.APP_VERSION):<{width - 22}} |
    | {'Host:':<15} {str(settings.APP_HOST):<{width - 22}} |
    | {'Port:':<15} {str(settings.APP_PORT):<{width - 22}} |
    | {'Log Level:':<15} {str(settings.LOG_LEVEL):<{width - 22}} |
    {line}
    """
    logger.info(startup_message)
    uvicorn.run(
        "main:app",
        host=settings.APP_HOST,
        port=settings.APP_PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )
