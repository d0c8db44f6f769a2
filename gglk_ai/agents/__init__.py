"""Prompts and response encodings for the evaluation model calls."""

from .output_schemas import (
    FASHION_ANALYSIS_FUNCTION,
    HUMAN_DETECTION_FUNCTION,
    FunctionSchema,
    StructuredOutputParser,
    function_schema,
    parse_function_arguments,
)
from .prompts import (
    fashion_analysis_prompt,
    fashion_analysis_structured_prompt,
    human_detection_prompt,
    human_detection_structured_prompt,
)

__all__ = [
    "FASHION_ANALYSIS_FUNCTION",
    "HUMAN_DETECTION_FUNCTION",
    "FunctionSchema",
    "StructuredOutputParser",
    "function_schema",
    "parse_function_arguments",
    "fashion_analysis_prompt",
    "fashion_analysis_structured_prompt",
    "human_detection_prompt",
    "human_detection_structured_prompt",
]
