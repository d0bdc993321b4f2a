# storycomic/workflows/state.py
from typing import List, Literal, Optional
from pydantic import BaseModel, Field

ErrorStage = Literal["segmentation", "image_generation"]


class ComicWorkflowState(BaseModel):
    """Request-scoped state passed between workflow nodes."""
    trace_id: str = "N/A"
    story: str = ""
    segments: List[str] = Field(default_factory=list, description="Trimmed, non-blank panel texts in panel order")
    image_urls: List[str] = Field(default_factory=list, description="One URL per segment, same order")
    current_node_name: Optional[str] = None
    error_message: Optional[str] = None
    error_stage: Optional[ErrorStage] = None
    failed_segment_index: Optional[int] = None
