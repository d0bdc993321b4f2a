# storycomic/nodes/n01_story_segmentation_node.py
from typing import Any, Dict

from storycomic.services.llm_service import LLMService
from storycomic.utils.error_handler import ComicServiceError
from storycomic.utils.logger import get_logger
from storycomic.workflows.state import ComicWorkflowState

logger = get_logger(__name__)


class N01StorySegmentationNode:
    """
    Asks the completion service to split the story into panel segments.
    """

    def __init__(self, llm_service: LLMService):
        self.llm_service = llm_service

    async def run(self, state: ComicWorkflowState) -> Dict[str, Any]:
        node_name = self.__class__.__name__
        extra_log = {"trace_id": state.trace_id, "node_name": node_name}
        logger.info(f"[{node_name}] Entering segmentation node.", extra=extra_log)

        try:
            segments = await self.llm_service.segment_story(state.story, trace_id=state.trace_id)
        except ComicServiceError as e:
            logger.warning(f"[{node_name}] Segmentation failed: {e.message}", extra=extra_log)
            return {
                "current_node_name": node_name,
                "error_message": e.message,
                "error_stage": "segmentation",
            }

        return {"current_node_name": node_name, "segments": segments}
