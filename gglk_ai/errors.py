"""Exceptions raised while evaluating an outfit image."""


class EvaluationError(Exception):
    """Base class for failures inside the evaluation pipeline."""


class ConfigurationError(EvaluationError):
    """The model client cannot be built from the current settings."""


class ModelInvocationError(EvaluationError):
    """The model provider could not be reached or rejected the request."""


class ResponseDecodeError(EvaluationError):
    """The model reply does not match the expected schema."""
