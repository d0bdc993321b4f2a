# storycomic/api/exception_handlers.py

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from storycomic.utils.error_handler import ComicServiceError
from storycomic.utils.logger import get_logger

logger = get_logger(__name__)

INVALID_INPUT_MESSAGE = "Invalid input"
INTERNAL_ERROR_MESSAGE = "Internal server error"


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning(f"Rejected malformed request to {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": INVALID_INPUT_MESSAGE})


async def comic_service_exception_handler(request: Request, exc: ComicServiceError) -> JSONResponse:
    logger.error(f"Downstream failure on {request.url.path}: {exc.message} {exc.to_dict()}")
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": exc.message})


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unexpected error on {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": INTERNAL_ERROR_MESSAGE})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(ComicServiceError, comic_service_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
