# storycomic/services/image_service.py

from typing import Any, Dict, Optional

from storycomic.config.settings import Settings
from storycomic.services.api_client import OpenAIApiClient
from storycomic.utils.error_handler import ImageGenerationError
from storycomic.utils.logger import get_logger


class ImageService:
    def __init__(
            self,
            api_client: OpenAIApiClient,
            settings_obj: Optional[Settings] = None,
            logger_name: str = "ImageGenerationClient"
    ):
        self.logger = get_logger(logger_name)
        self.api_client = api_client
        self.settings = settings_obj or Settings()
        self.endpoint = str(self.settings.IMAGE_API_ENDPOINT)
        self.image_count = self.settings.IMAGE_COUNT
        self.size = self.settings.IMAGE_SIZE
        self.timeout = float(self.settings.IMAGE_API_TIMEOUT)

    def build_payload(self, prompt: str) -> Dict[str, Any]:
        return {
            "prompt": prompt,
            "n": self.image_count,
            "size": self.size,
        }

    @staticmethod
    def _extract_image_url(response_data: Dict[str, Any], segment_index: Optional[int] = None) -> str:
        data = response_data.get("data")
        if not isinstance(data, list) or not data:
            raise ImageGenerationError("No image generated", segment_index=segment_index)
        first = data[0]
        url = first.get("url") if isinstance(first, dict) else None
        if not isinstance(url, str) or not url:
            raise ImageGenerationError("Image response is missing a URL", segment_index=segment_index)
        return url

    async def generate_image(self, prompt: str, segment_index: Optional[int] = None, trace_id: str = "N/A") -> str:
        """Renders one image for `prompt` and returns its URL."""
        extra_log = {"trace_id": trace_id}
        self.logger.debug(f"Image request for segment {segment_index}: {prompt[:60]}", extra=extra_log)

        response_data = await self.api_client.post_json(
            self.endpoint,
            self.build_payload(prompt),
            timeout=self.timeout,
            error_cls=ImageGenerationError,
            error_kwargs={"segment_index": segment_index},
            trace_id=trace_id,
        )
        url = self._extract_image_url(response_data, segment_index)
        self.logger.info(f"Image generated for segment {segment_index}.", extra=extra_log)
        return url
