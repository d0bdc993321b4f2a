# storycomic/services/llm_service.py

from typing import Any, Dict, List, Optional

from storycomic.config.settings import Settings
from storycomic.services.api_client import OpenAIApiClient
from storycomic.utils.error_handler import SegmentationError
from storycomic.utils.logger import get_logger
from storycomic.utils.text_utils import split_into_segments

logger = get_logger("LLMService")


class LLMService:
    """
    Completion-service client used to split a story into comic panel segments.
    """

    def __init__(self, api_client: OpenAIApiClient, settings_obj: Optional[Settings] = None):
        self.api_client = api_client
        self.settings = settings_obj or Settings()
        self.endpoint = str(self.settings.LLM_API_ENDPOINT)
        self.model = self.settings.LLM_MODEL
        self.max_tokens = self.settings.LLM_MAX_TOKENS
        self.timeout = float(self.settings.LLM_API_TIMEOUT)
        self.prompt_template = self.settings.SEGMENTATION_PROMPT_TEMPLATE
        logger.info(f"LLMService initialized. Endpoint: {self.endpoint}, Model: {self.model}")

    def build_prompt(self, story: str) -> str:
        # str.replace keeps literal braces in the story intact
        return self.prompt_template.replace("{story}", story)

    def build_payload(self, story: str) -> Dict[str, Any]:
        return {
            "model": self.model,
            "prompt": self.build_prompt(story),
            "max_tokens": self.max_tokens,
        }

    @staticmethod
    def _extract_completion_text(response_data: Dict[str, Any]) -> str:
        """Returns the text of the first choice; zero choices is an error."""
        choices = response_data.get("choices")
        if not isinstance(choices, list) or not choices:
            raise SegmentationError("No response from completion service")
        first_choice = choices[0]
        if not isinstance(first_choice, dict):
            raise SegmentationError("Malformed choice in completion response")
        text = first_choice.get("text") or ""
        if not isinstance(text, str):
            raise SegmentationError("Malformed choice text in completion response")
        return text

    async def segment_story(self, story: str, trace_id: str = "N/A") -> List[str]:
        extra_log = {"trace_id": trace_id}
        logger.info(f"Requesting story segmentation (story length: {len(story)})", extra=extra_log)

        response_data = await self.api_client.post_json(
            self.endpoint,
            self.build_payload(story),
            timeout=self.timeout,
            error_cls=SegmentationError,
            trace_id=trace_id,
        )
        text = self._extract_completion_text(response_data)
        segments = split_into_segments(text)
        logger.info(f"Story split into {len(segments)} segment(s).", extra=extra_log)
        return segments
