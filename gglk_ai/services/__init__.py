"""External service clients."""

from .chat_model import (
    ChatModel,
    FunctionCall,
    FunctionCallOutput,
    ModelResponse,
    OpenAIChatModel,
    OutputSpec,
    TextOutput,
)

__all__ = [
    "ChatModel",
    "FunctionCall",
    "FunctionCallOutput",
    "ModelResponse",
    "OpenAIChatModel",
    "OutputSpec",
    "TextOutput",
]
