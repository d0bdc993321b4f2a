# storycomic/api/schemas.py

from pydantic import BaseModel, Field
from typing import List


class StoryRequest(BaseModel):
    """POST /generate-comic request body"""
    story: str = Field(..., description="Free-text story to turn into comic panels")

    model_config = {
        "json_schema_extra": {
            "example": {
                "story": "A hero rises.\nThe hero falls.\nThe hero returns."
            }
        }
    }


class ComicResponse(BaseModel):
    images: List[str] = Field(default_factory=list, description="One image URL per panel, in panel order")


class ErrorResponse(BaseModel):
    error: str


class HealthResponse(BaseModel):
    status: str = "ok"
    app_name: str
    version: str
