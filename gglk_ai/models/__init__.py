"""Data models for the outfit evaluation pipeline."""

from .conversation import ChatMessage, ImagePayload
from .evaluation import EvaluationOutcome, FashionAnalysisResult, HumanDetectionResult

__all__ = [
    "ChatMessage",
    "ImagePayload",
    "HumanDetectionResult",
    "FashionAnalysisResult",
    "EvaluationOutcome",
]
