# storycomic/workflows/comic_workflow.py
"""
Story-to-comic LangGraph workflow.

N01_StorySegmentation -> N02_PanelImageGeneration -> END
A node that fails writes error_message/error_stage into the state and the
router ends the graph; ComicWorkflow.run turns that into an exception.
"""
import uuid
from typing import Dict, List, Optional

from langgraph.graph import StateGraph, END
from langgraph.graph.state import CompiledStateGraph

from storycomic.nodes.n01_story_segmentation_node import N01StorySegmentationNode
from storycomic.nodes.n02_panel_image_node import N02PanelImageNode
from storycomic.services.image_service import ImageService
from storycomic.services.llm_service import LLMService
from storycomic.utils.error_handler import ImageGenerationError, SegmentationError
from storycomic.utils.logger import get_logger
from storycomic.workflows.state import ComicWorkflowState

logger = get_logger(__name__)

NODE_SEGMENTATION = "N01_StorySegmentation"
NODE_IMAGE_GENERATION = "N02_PanelImageGeneration"


def route_after_segmentation(state: ComicWorkflowState) -> str:
    if state.error_message:
        logger.error(f"Router: segmentation failed - '{state.error_message}'", extra={"trace_id": state.trace_id})
        return END
    if not state.segments:
        logger.warning("Router: story produced no segments, skipping image generation.",
                       extra={"trace_id": state.trace_id})
        return END
    return NODE_IMAGE_GENERATION


def build_comic_workflow_graph(llm_service: LLMService, image_service: ImageService) -> CompiledStateGraph:
    segmentation_node = N01StorySegmentationNode(llm_service)
    image_node = N02PanelImageNode(image_service)

    workflow = StateGraph(ComicWorkflowState)
    workflow.add_node(NODE_SEGMENTATION, segmentation_node.run)
    workflow.add_node(NODE_IMAGE_GENERATION, image_node.run)

    workflow.set_entry_point(NODE_SEGMENTATION)
    workflow.add_conditional_edges(
        NODE_SEGMENTATION,
        route_after_segmentation,
        {NODE_IMAGE_GENERATION: NODE_IMAGE_GENERATION, END: END},
    )
    workflow.add_edge(NODE_IMAGE_GENERATION, END)

    compiled = workflow.compile()
    logger.info("Comic workflow graph compiled.")
    return compiled


class ComicWorkflow:
    """Runs the segmentation -> image generation pipeline for one story at a time."""

    def __init__(self, llm_service: LLMService, image_service: ImageService):
        self.graph = build_comic_workflow_graph(llm_service, image_service)

    async def run(self, story: str, trace_id: Optional[str] = None) -> List[str]:
        trace_id = trace_id or uuid.uuid4().hex
        initial_state: Dict = {"trace_id": trace_id, "story": story}

        result = await self.graph.ainvoke(initial_state)
        final_state = ComicWorkflowState.model_validate(result)

        if final_state.error_message:
            if final_state.error_stage == "image_generation":
                raise ImageGenerationError(
                    final_state.error_message, segment_index=final_state.failed_segment_index
                )
            raise SegmentationError(final_state.error_message)

        logger.info(f"Comic workflow finished with {len(final_state.image_urls)} image(s).",
                    extra={"trace_id": trace_id})
        return final_state.image_urls
