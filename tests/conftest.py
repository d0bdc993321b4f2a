# tests/conftest.py
import json
from typing import Dict, List, Optional, Set

import httpx
import pytest

from storycomic.config.settings import Settings
from storycomic.services.api_client import OpenAIApiClient
from storycomic.services.image_service import ImageService
from storycomic.services.llm_service import LLMService
from storycomic.workflows.comic_workflow import ComicWorkflow

COMPLETIONS_PATH = "/v1/completions"
IMAGES_PATH = "/v1/images/generations"


class FakeOpenAI:
    """
    httpx.MockTransport handler that plays both external APIs.
    Records every request so tests can assert on order and payloads.
    """

    def __init__(
            self,
            completion_text: str = "",
            completion_body: Optional[Dict] = None,
            completion_status: int = 200,
            failing_image_indexes: Optional[Set[int]] = None,
    ):
        self.completion_text = completion_text
        self.completion_body = completion_body
        self.completion_status = completion_status
        self.failing_image_indexes = failing_image_indexes or set()
        self.completion_requests: List[Dict] = []
        self.image_requests: List[Dict] = []
        self.headers: List[httpx.Headers] = []

    @property
    def image_prompts(self) -> List[str]:
        return [r["prompt"] for r in self.image_requests]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.headers.append(request.headers)
        body = json.loads(request.content)
        if request.url.path == COMPLETIONS_PATH:
            self.completion_requests.append(body)
            if self.completion_body is not None:
                return httpx.Response(self.completion_status, json=self.completion_body)
            return httpx.Response(self.completion_status, json={"choices": [{"text": self.completion_text}]})
        if request.url.path == IMAGES_PATH:
            index = len(self.image_requests)
            self.image_requests.append(body)
            if index in self.failing_image_indexes:
                return httpx.Response(500, json={"error": {"message": "image backend exploded"}})
            return httpx.Response(200, json={"data": [{"url": f"https://img.example/{index}.png"}]})
        return httpx.Response(404)


@pytest.fixture
def test_settings() -> Settings:
    return Settings(_env_file=None, OPENAI_API_KEY="test-key")


@pytest.fixture
def fake_openai() -> FakeOpenAI:
    return FakeOpenAI()


@pytest.fixture
def api_client(fake_openai) -> OpenAIApiClient:
    return OpenAIApiClient(
        api_key="test-key",
        client=httpx.AsyncClient(transport=httpx.MockTransport(fake_openai)),
    )


@pytest.fixture
def llm_service(api_client, test_settings) -> LLMService:
    return LLMService(api_client, settings_obj=test_settings)


@pytest.fixture
def image_service(api_client, test_settings) -> ImageService:
    return ImageService(api_client, settings_obj=test_settings)


@pytest.fixture
def comic_workflow(llm_service, image_service) -> ComicWorkflow:
    return ComicWorkflow(llm_service, image_service)
