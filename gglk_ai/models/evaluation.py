"""Evaluation result models.

These are the single source for both response encodings: the function-call
parameter schema and the structured-output format instructions are derived
from them in ``gglk_ai.agents.output_schemas``.
"""

from pydantic import BaseModel, Field


class HumanDetectionResult(BaseModel):
    """Whether the image shows a clothed person."""

    isPersonInImage: bool = Field(strict=True, description="Whether a person is detected in the image")


class FashionAnalysisResult(BaseModel):
    """Structured outfit evaluation."""

    summary: str = Field(description="Description of the overall fashion style")
    points: float = Field(ge=0, le=10, description="Rating for aesthetics from 0-10")
    balance: float = Field(ge=0, le=10, description="Rating for outfit balance from 0-10")
    sophistication: float = Field(ge=0, le=10, description="Rating for sophistication level from 0-10")
    sense: float = Field(ge=0, le=10, description="Rating for fashion sense from 0-10")
    hashtags: list[str] = Field(description="List of hashtags that describe the style")


class EvaluationOutcome(BaseModel):
    """Terminal result returned to the HTTP caller."""

    success: bool
    message: FashionAnalysisResult | str

    @classmethod
    def failure(cls, message: str) -> "EvaluationOutcome":
        return cls(success=False, message=message)

    @classmethod
    def analyzed(cls, result: FashionAnalysisResult) -> "EvaluationOutcome":
        return cls(success=True, message=result)
