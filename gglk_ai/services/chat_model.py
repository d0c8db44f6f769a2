"""Chat model client used by the evaluation pipelines."""

import logging
from dataclasses import dataclass
from typing import Any, Protocol

import httpx
from openai import AsyncAzureOpenAI, AsyncOpenAI, OpenAIError

from ..agents.output_schemas import FunctionSchema
from ..config import Settings
from ..errors import ConfigurationError, ModelInvocationError
from ..models import ChatMessage

logger = logging.getLogger(__name__)

AZURE_COGNITIVE_SCOPE = "https://cognitiveservices.azure.com/.default"


@dataclass(frozen=True)
class FunctionCallOutput:
    """Force the model to answer by calling ``function``."""
    function: FunctionSchema


@dataclass(frozen=True)
class TextOutput:
    """Let the model answer with free text."""


OutputSpec = FunctionCallOutput | TextOutput


@dataclass(frozen=True)
class FunctionCall:
    name: str
    arguments: str  # JSON-encoded


@dataclass(frozen=True)
class ModelResponse:
    """Raw model reply, before any schema decoding."""
    content: str | None = None
    function_call: FunctionCall | None = None


class ChatModel(Protocol):
    """Anything that can answer a conversation."""

    async def invoke(self, conversation: list[ChatMessage], output: OutputSpec) -> ModelResponse:
        ...


def to_openai_messages(conversation: list[ChatMessage]) -> list[dict[str, Any]]:
    """Render a conversation in chat-completions message format."""
    messages = []
    for message in conversation:
        if message.image_uri is None:
            messages.append({"role": message.role, "content": message.text})
            continue
        messages.append({
            "role": message.role,
            "content": [
                {"type": "image_url", "image_url": {"url": message.image_uri}},
                {"type": "text", "text": message.text},
            ],
        })
    return messages


class OpenAIChatModel:
    """``ChatModel`` backed by the OpenAI (or Azure OpenAI) chat-completions API."""

    def __init__(
        self,
        client: AsyncOpenAI,
        model: str,
        temperature: float = 0.0,
    ):
        self.client = client
        self.model = model
        self.temperature = temperature

    @classmethod
    def from_settings(cls, settings: Settings) -> "OpenAIChatModel":
        """Build the client for whichever provider the settings select."""
        timeout = httpx.Timeout(settings.model.request_timeout)

        if settings.use_azure:
            if not settings.azure_openai_deployment:
                raise ConfigurationError(
                    "AZURE_OPENAI_DEPLOYMENT is required when AZURE_OPENAI_ENDPOINT is set"
                )
            # Imported lazily, only the Azure path needs a credential
            from azure.identity import AzureCliCredential, get_bearer_token_provider

            token_provider = get_bearer_token_provider(AzureCliCredential(), AZURE_COGNITIVE_SCOPE)
            client = AsyncAzureOpenAI(
                azure_endpoint=settings.azure_openai_endpoint,
                azure_deployment=settings.azure_openai_deployment,
                api_version=settings.azure_openai_api_version,
                azure_ad_token_provider=token_provider,
                timeout=timeout,
            )
        else:
            if not settings.open_ai_token:
                raise ConfigurationError("OPEN_AI_TOKEN is not set")
            client = AsyncOpenAI(api_key=settings.open_ai_token, timeout=timeout)

        return cls(client, model=settings.model_name, temperature=settings.model.temperature)

    async def invoke(self, conversation: list[ChatMessage], output: OutputSpec) -> ModelResponse:
        """Send the conversation and return the first choice.

        Raises:
            ModelInvocationError: on any provider or transport failure
        """
        request: dict[str, Any] = {
            "model": self.model,
            "temperature": self.temperature,
            "messages": to_openai_messages(conversation),
        }
        if isinstance(output, FunctionCallOutput):
            request["tools"] = [output.function.to_tool()]
            request["tool_choice"] = {
                "type": "function",
                "function": {"name": output.function.name},
            }

        try:
            completion = await self.client.chat.completions.create(**request)
        except OpenAIError as e:
            raise ModelInvocationError(f"{type(e).__name__}: {e}") from e

        if not completion.choices:
            return ModelResponse()

        message = completion.choices[0].message
        function_call = None
        for tool_call in message.tool_calls or []:
            function = getattr(tool_call, "function", None)
            if function is not None:
                function_call = FunctionCall(name=function.name, arguments=function.arguments)
                break

        if completion.usage is not None:
            logger.debug(
                "Model %s used %d prompt / %d completion tokens",
                self.model,
                completion.usage.prompt_tokens,
                completion.usage.completion_tokens,
            )

        return ModelResponse(content=message.content, function_call=function_call)

    async def close(self) -> None:
        await self.client.close()
