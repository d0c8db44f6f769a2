"""Two-stage outfit evaluation: detect a person, then analyze the outfit."""

import asyncio
import logging

from ..agents import (
    FASHION_ANALYSIS_FUNCTION,
    HUMAN_DETECTION_FUNCTION,
    StructuredOutputParser,
    fashion_analysis_prompt,
    fashion_analysis_structured_prompt,
    human_detection_prompt,
    human_detection_structured_prompt,
    parse_function_arguments,
)
from ..config import ImageConfig
from ..models import (
    EvaluationOutcome,
    FashionAnalysisResult,
    HumanDetectionResult,
    ImagePayload,
)
from ..services import ChatModel, FunctionCallOutput, ModelResponse, TextOutput
from ..utils import ImageNormalizer

logger = logging.getLogger(__name__)

NO_PERSON_MESSAGE = "Fail to analysis"
ANALYSIS_FAILED_MESSAGE = "Failed to analyze fashion"
STRUCTURED_NO_PERSON_MESSAGE = "No person detected in the image"


class _Evaluator:
    """Shared setup: a model collaborator and an image normalizer."""

    def __init__(self, chat_model: ChatModel, image_config: ImageConfig | None = None):
        self.chat_model = chat_model
        self.normalizer = ImageNormalizer(image_config)

    async def encode_image(self, payload: ImagePayload) -> str:
        """Compress the upload off the event loop and return its data URI."""
        uri = await asyncio.to_thread(self.normalizer.normalize, payload.mime_type, payload.data)
        logger.info("Encoded %s upload (%d bytes) as %d-char data URI",
                    payload.mime_type, len(payload.data), len(uri))
        return uri


class FunctionCallingEvaluator(_Evaluator):
    """Evaluates an image with forced function calls.

    Flow:
    1. Force ``detect_human``; a reply without the call counts as "no person"
    2. If a person is present, force ``ootd_fashion_analysis``
    3. Any failure is reported as an unsuccessful outcome, never raised
    """

    @staticmethod
    def _function_arguments(response: ModelResponse, name: str) -> str | None:
        call = response.function_call
        if call is None or call.name != name:
            return None
        return call.arguments

    async def detect_human(self, image_uri: str) -> HumanDetectionResult:
        response = await self.chat_model.invoke(
            human_detection_prompt(image_uri),
            FunctionCallOutput(HUMAN_DETECTION_FUNCTION),
        )
        arguments = self._function_arguments(response, HUMAN_DETECTION_FUNCTION.name)
        if arguments is None:
            logger.info("No detect_human call in response, assuming no person")
            return HumanDetectionResult(isPersonInImage=False)
        return parse_function_arguments(HumanDetectionResult, arguments)

    async def analyze_fashion(self, image_uri: str) -> EvaluationOutcome:
        response = await self.chat_model.invoke(
            fashion_analysis_prompt(image_uri),
            FunctionCallOutput(FASHION_ANALYSIS_FUNCTION),
        )
        arguments = self._function_arguments(response, FASHION_ANALYSIS_FUNCTION.name)
        if arguments is None:
            logger.warning("No ootd_fashion_analysis call in response")
            return EvaluationOutcome.failure(ANALYSIS_FAILED_MESSAGE)
        return EvaluationOutcome.analyzed(
            parse_function_arguments(FashionAnalysisResult, arguments)
        )

    async def evaluate(self, payload: ImagePayload) -> EvaluationOutcome:
        image_uri = await self.encode_image(payload)

        try:
            detection = await self.detect_human(image_uri)
            logger.info("Person in image: %s", detection.isPersonInImage)
            if not detection.isPersonInImage:
                return EvaluationOutcome.failure(NO_PERSON_MESSAGE)
            return await self.analyze_fashion(image_uri)
        except Exception as e:
            logger.exception("Function-calling evaluation failed")
            return EvaluationOutcome.failure(f"Error processing image: {e}")


class StructuredOutputEvaluator(_Evaluator):
    """Evaluates an image with free-text replies validated against a schema.

    Model and decode failures are not caught here: ``ModelInvocationError``
    and ``ResponseDecodeError`` propagate to the caller.
    """

    def __init__(self, chat_model: ChatModel, image_config: ImageConfig | None = None):
        super().__init__(chat_model, image_config)
        self.human_detection_parser = StructuredOutputParser(HumanDetectionResult)
        self.fashion_analysis_parser = StructuredOutputParser(FashionAnalysisResult)

    async def detect_human(self, image_uri: str) -> HumanDetectionResult:
        conversation = human_detection_structured_prompt(
            image_uri, self.human_detection_parser.get_format_instructions()
        )
        response = await self.chat_model.invoke(conversation, TextOutput())
        return self.human_detection_parser.parse(response.content)

    async def analyze_fashion(self, image_uri: str) -> FashionAnalysisResult:
        conversation = fashion_analysis_structured_prompt(
            image_uri, self.fashion_analysis_parser.get_format_instructions()
        )
        response = await self.chat_model.invoke(conversation, TextOutput())
        return self.fashion_analysis_parser.parse(response.content)

    async def evaluate(self, payload: ImagePayload) -> EvaluationOutcome:
        image_uri = await self.encode_image(payload)

        detection = await self.detect_human(image_uri)
        logger.info("Person in image: %s", detection.isPersonInImage)
        if not detection.isPersonInImage:
            return EvaluationOutcome.failure(STRUCTURED_NO_PERSON_MESSAGE)

        return EvaluationOutcome.analyzed(await self.analyze_fashion(image_uri))
