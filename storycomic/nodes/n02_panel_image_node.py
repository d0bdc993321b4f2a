# storycomic/nodes/n02_panel_image_node.py
from typing import Any, Dict, List

from storycomic.services.image_service import ImageService
from storycomic.utils.error_handler import ComicServiceError
from storycomic.utils.logger import get_logger
from storycomic.workflows.state import ComicWorkflowState

logger = get_logger(__name__)


class N02PanelImageNode:
    """
    Sequential image generation. Renders one image per segment in order and
    stops at the first failure; no URLs are kept from a failed run.
    """

    def __init__(self, image_service: ImageService):
        self.image_service = image_service

    async def run(self, state: ComicWorkflowState) -> Dict[str, Any]:
        node_name = self.__class__.__name__
        extra_log = {"trace_id": state.trace_id, "node_name": node_name}
        total = len(state.segments)
        logger.info(f"[{node_name}] Generating {total} panel image(s).", extra=extra_log)

        image_urls: List[str] = []
        for index, segment in enumerate(state.segments):
            try:
                url = await self.image_service.generate_image(
                    segment, segment_index=index, trace_id=state.trace_id
                )
            except ComicServiceError as e:
                logger.warning(
                    f"[{node_name}] Panel {index + 1}/{total} failed, aborting: {e.message}",
                    extra=extra_log
                )
                return {
                    "current_node_name": node_name,
                    "image_urls": [],
                    "error_message": e.message,
                    "error_stage": "image_generation",
                    "failed_segment_index": index,
                }
            image_urls.append(url)

        return {"current_node_name": node_name, "image_urls": image_urls}
