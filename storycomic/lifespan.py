# storycomic/lifespan.py
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncGenerator, List, Optional

from dotenv import load_dotenv
from fastapi import FastAPI

from storycomic.config.settings import Settings
from storycomic.dependencies import _shared_state
from storycomic.services.api_client import OpenAIApiClient
from storycomic.services.image_service import ImageService
from storycomic.services.llm_service import LLMService
from storycomic.utils.logger import get_logger
from storycomic.workflows.comic_workflow import ComicWorkflow

logger_lifespan = get_logger("AppLifespan")

_service_instances_lifespan: List[Any] = []


def validate_credentials(settings_obj: Settings) -> str:
    """Returns the API key, or raises when it is missing from the environment."""
    api_key = (settings_obj.OPENAI_API_KEY or "").strip()
    if not api_key:
        logger_lifespan.critical("OpenAI API key not found in environment variables (OPENAI_API_KEY).")
        raise RuntimeError("OpenAI API key not found in environment variables")
    return api_key


async def startup_event(settings_obj: Optional[Settings] = None):
    """Builds the shared services and workflow and stores them in _shared_state."""
    logger_lifespan.info("Application startup process initiated...")
    settings_obj = settings_obj or Settings()
    api_key = validate_credentials(settings_obj)

    _service_instances_lifespan.clear()
    _shared_state['settings'] = settings_obj

    api_client = OpenAIApiClient(api_key=api_key)
    _service_instances_lifespan.append(api_client)

    llm_service = LLMService(api_client, settings_obj=settings_obj)
    image_service = ImageService(api_client, settings_obj=settings_obj)
    _shared_state['llm_service'] = llm_service
    _shared_state['image_service'] = image_service

    _shared_state['comic_workflow'] = ComicWorkflow(llm_service, image_service)
    logger_lifespan.info("Application startup complete.")


async def shutdown_event():
    logger_lifespan.info("Application shutdown process initiated...")
    for instance in reversed(_service_instances_lifespan):
        instance_name = type(instance).__name__
        try:
            await instance.close()
            logger_lifespan.info(f"{instance_name} closed successfully.")
        except Exception as e:
            logger_lifespan.error(f"Error during {instance_name} shutdown: {e}", exc_info=True)
    _service_instances_lifespan.clear()
    _shared_state.clear()
    logger_lifespan.info("Application shutdown complete.")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """FastAPI lifespan context manager"""
    env_path = Path(".env")
    if env_path.exists():
        load_dotenv(dotenv_path=env_path)
        logger_lifespan.info(f".env file loaded from: {env_path.resolve()}")
    else:
        logger_lifespan.info(".env file not found, relying on environment variables or default settings.")

    await startup_event()
    try:
        yield
    finally:
        await shutdown_event()
