"""Request-scoped inputs and chat conversation models."""

from typing import Literal

from pydantic import BaseModel, ConfigDict


class ImagePayload(BaseModel):
    """Uploaded image as received from the client."""

    model_config = ConfigDict(frozen=True)

    mime_type: str
    data: bytes


class ChatMessage(BaseModel):
    """One message of a prompt conversation.

    User messages may carry an image as a data URI next to their text.
    """

    model_config = ConfigDict(frozen=True)

    role: Literal["system", "user"]
    text: str
    image_uri: str | None = None
