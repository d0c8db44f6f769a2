"""Function-call and structured-output encodings of the result models."""

import json
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from ..errors import ResponseDecodeError
from ..models import FashionAnalysisResult, HumanDetectionResult

ModelT = TypeVar("ModelT", bound=BaseModel)


FORMAT_INSTRUCTIONS = """You must format your output as a JSON value that adheres to a given "JSON Schema" instance.

"JSON Schema" is a declarative language that allows you to annotate and validate JSON documents.

For example, the example "JSON Schema" instance {{"properties": {{"foo": {{"description": "a list of test words", "type": "array", "items": {{"type": "string"}}}}}}, "required": ["foo"]}}
would match an object with one required property, "foo". The "type" property specifies "foo" must be an "array", and the "description" property semantically describes it as "a list of test words". The items within "foo" must be strings.
Thus, the object {{"foo": ["bar", "baz"]}} is a well-formatted instance of this example "JSON Schema". The object {{"properties": {{"foo": ["bar", "baz"]}}}} is not well-formatted.

Your output will be parsed and type-checked according to the provided schema instance, so make sure all fields in your output match the schema exactly and there are no trailing commas!

Here is the JSON Schema instance your output must adhere to. Include the enclosing markdown codeblock:
```json
{schema}
```
"""


def _strip_titles(node: Any) -> Any:
    """Drop pydantic's auto-generated ``title`` keys from a JSON schema."""
    if isinstance(node, dict):
        return {
            key: _strip_titles(value)
            for key, value in node.items()
            if not (key == "title" and isinstance(value, str))
        }
    if isinstance(node, list):
        return [_strip_titles(item) for item in node]
    return node


def json_schema(model: type[BaseModel]) -> dict[str, Any]:
    """Plain JSON schema of a result model, every field required."""
    schema = _strip_titles(model.model_json_schema())
    schema.pop("description", None)
    schema["required"] = list(model.model_fields)
    return schema


@dataclass(frozen=True)
class FunctionSchema:
    """A callable the model is forced to invoke."""
    name: str
    description: str
    parameters: dict[str, Any]

    def to_tool(self) -> dict[str, Any]:
        """Chat-completions ``tools`` entry."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters,
            },
        }


def function_schema(name: str, description: str, model: type[BaseModel]) -> FunctionSchema:
    """Derive a function-call parameter schema from a result model."""
    return FunctionSchema(name=name, description=description, parameters=json_schema(model))


def _strip_code_fence(text: str) -> str:
    """Return the body of the first markdown code block (```json ... ```).

    The block may be preceded by prose. Text without a fence is returned
    trimmed as-is.
    """
    start = text.find("```")
    if start == -1:
        return text.strip()

    # Skip the opening fence line, language tag included
    newline = text.find("\n", start)
    if newline == -1:
        return text[start + 3:].strip()
    body = text[newline + 1:]

    end = body.find("```")
    if end != -1:
        body = body[:end]
    return body.strip()


def parse_function_arguments(model: type[ModelT], arguments: str) -> ModelT:
    """Validate a function-call arguments string against a result model."""
    try:
        return model.model_validate_json(arguments)
    except ValidationError as e:
        raise ResponseDecodeError(
            f"Function arguments do not match {model.__name__}: {e}"
        ) from e


class StructuredOutputParser(Generic[ModelT]):
    """Parses free-text model replies that follow embedded format instructions."""

    def __init__(self, model: type[ModelT]):
        self.model = model

    def get_format_instructions(self) -> str:
        schema = json.dumps(json_schema(self.model), ensure_ascii=False)
        return FORMAT_INSTRUCTIONS.format(schema=schema)

    def parse(self, text: str | None) -> ModelT:
        """Decode and validate a reply.

        Raises:
            ResponseDecodeError: if the text is not JSON or fails validation
        """
        if not text:
            raise ResponseDecodeError(f"Empty response, expected {self.model.__name__}")

        body = _strip_code_fence(text)
        try:
            data = json.loads(body)
        except json.JSONDecodeError as e:
            raise ResponseDecodeError(
                f"Failed to parse. Text: \"{text}\". Error: {e}"
            ) from e

        try:
            return self.model.model_validate(data)
        except ValidationError as e:
            raise ResponseDecodeError(
                f"Failed to parse. Text: \"{text}\". Error: {e}"
            ) from e


HUMAN_DETECTION_FUNCTION = function_schema(
    name="detect_human",
    description="Detect if there is a human in the image",
    model=HumanDetectionResult,
)

FASHION_ANALYSIS_FUNCTION = function_schema(
    name="ootd_fashion_analysis",
    description="Analyze the fashion in the image",
    model=FashionAnalysisResult,
)
