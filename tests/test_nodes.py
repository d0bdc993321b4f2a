# tests/test_nodes.py

from unittest.mock import AsyncMock, MagicMock

import pytest

from storycomic.nodes.n01_story_segmentation_node import N01StorySegmentationNode
from storycomic.nodes.n02_panel_image_node import N02PanelImageNode
from storycomic.utils.error_handler import ImageGenerationError, SegmentationError
from storycomic.workflows.state import ComicWorkflowState


class TestN01StorySegmentationNode:

    @pytest.mark.asyncio
    async def test_success_returns_segments(self):
        llm_service = MagicMock()
        llm_service.segment_story = AsyncMock(return_value=["a", "b"])
        node = N01StorySegmentationNode(llm_service)

        update = await node.run(ComicWorkflowState(trace_id="t", story="story"))

        assert update["segments"] == ["a", "b"]
        assert "error_message" not in update
        llm_service.segment_story.assert_awaited_once_with("story", trace_id="t")

    @pytest.mark.asyncio
    async def test_failure_is_recorded_in_state(self):
        llm_service = MagicMock()
        llm_service.segment_story = AsyncMock(side_effect=SegmentationError("No response from completion service"))
        node = N01StorySegmentationNode(llm_service)

        update = await node.run(ComicWorkflowState(story="story"))

        assert update["error_message"] == "No response from completion service"
        assert update["error_stage"] == "segmentation"


class TestN02PanelImageNode:

    @pytest.mark.asyncio
    async def test_generates_sequentially_in_order(self):
        image_service = MagicMock()
        image_service.generate_image = AsyncMock(side_effect=["u0", "u1", "u2"])
        node = N02PanelImageNode(image_service)

        update = await node.run(ComicWorkflowState(segments=["s0", "s1", "s2"]))

        assert update["image_urls"] == ["u0", "u1", "u2"]
        prompts = [call.args[0] for call in image_service.generate_image.await_args_list]
        assert prompts == ["s0", "s1", "s2"]

    @pytest.mark.asyncio
    async def test_stops_at_first_failure_without_partial_results(self):
        image_service = MagicMock()
        image_service.generate_image = AsyncMock(
            side_effect=["u0", ImageGenerationError("No image generated", segment_index=1), "u2"]
        )
        node = N02PanelImageNode(image_service)

        update = await node.run(ComicWorkflowState(segments=["s0", "s1", "s2"]))

        assert update["image_urls"] == []
        assert update["error_stage"] == "image_generation"
        assert update["failed_segment_index"] == 1
        assert image_service.generate_image.await_count == 2
