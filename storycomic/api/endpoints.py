# storycomic/api/endpoints.py
import uuid

from fastapi import APIRouter, Body, status

from storycomic.api.schemas import ComicResponse, ErrorResponse, HealthResponse, StoryRequest
from storycomic.dependencies import ComicWorkflowDep, SettingsDep
from storycomic.utils.logger import get_logger, summarize_for_logging

router = APIRouter()
logger = get_logger(__name__)


@router.post(
    "/generate-comic",
    status_code=status.HTTP_200_OK,
    response_model=ComicResponse,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse, "description": "Malformed request body"},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse, "description": "Downstream API failure"},
    },
    summary="Split a story into panels and render one image per panel",
)
async def generate_comic(
        workflow: ComicWorkflowDep,
        payload: StoryRequest = Body(...),
) -> ComicResponse:
    trace_id = uuid.uuid4().hex
    extra_log = {"trace_id": trace_id}
    logger.info(f"API /generate-comic received: {summarize_for_logging(payload)}", extra=extra_log)

    # Downstream errors propagate to the registered exception handlers (500)
    images = await workflow.run(payload.story, trace_id=trace_id)

    logger.info(f"API /generate-comic returning {len(images)} image(s).", extra=extra_log)
    return ComicResponse(images=images)


@router.get("/health", response_model=HealthResponse, summary="Liveness check")
async def health(settings_obj: SettingsDep) -> HealthResponse:
    return HealthResponse(app_name=settings_obj.APP_NAME, version=settings_obj.APP_VERSION)
