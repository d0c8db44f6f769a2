"""Evaluation pipelines."""

from .evaluation_pipeline import FunctionCallingEvaluator, StructuredOutputEvaluator

__all__ = ["FunctionCallingEvaluator", "StructuredOutputEvaluator"]
