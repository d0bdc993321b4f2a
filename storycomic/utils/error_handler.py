# storycomic/utils/error_handler.py

from typing import Any, Dict, Optional
from datetime import datetime
from enum import Enum


class ErrorSeverity(Enum):
    """Error severity levels"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Error categories"""
    VALIDATION = "validation"
    EXTERNAL_API = "external_api"
    NETWORK = "network"
    TIMEOUT = "timeout"
    SYSTEM = "system"
    UNKNOWN = "unknown"


class ComicServiceError(Exception):
    """Base exception for the story comic service"""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category
        self.severity = severity
        self.details = details or {}
        self.timestamp = datetime.now()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "details": self.details,
            "timestamp": self.timestamp.isoformat()
        }


class ExternalServiceError(ComicServiceError):
    """Failure talking to an outbound API (transport, status, body shape)"""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault("category", ErrorCategory.EXTERNAL_API)
        kwargs.setdefault("severity", ErrorSeverity.HIGH)
        super().__init__(message, **kwargs)


class SegmentationError(ExternalServiceError):
    """The completion service could not split the story"""


class ImageGenerationError(ExternalServiceError):
    """The image service failed for one segment"""

    def __init__(self, message: str, segment_index: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.segment_index = segment_index
        if segment_index is not None:
            self.details.setdefault("segment_index", segment_index)
