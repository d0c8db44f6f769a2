"""Prompt builders for human detection and fashion analysis.

Every builder returns a fixed two-message conversation: a system message
framing the task and a user message pairing the image with a question.
"""

from ..models import ChatMessage


HUMAN_DETECTION_SYSTEM = "You need to evaluate picture with given prompt"

HUMAN_DETECTION_QUESTION = "Does this image contain a person wearing clothes?"


FASHION_ANALYSIS_SYSTEM = """You are a fashion analysis AI. Analyze the clothing style in the image and provide a structured evaluation. Be creative with the hashtags and make your analysis engaging and slightly humorous.
Use Korean language for the summary and hashtags. AGAIN, YOU MUST USE KOREAN LANGUAGE FOR THE SUMMARY AND HASHTAGS."""

FASHION_ANALYSIS_QUESTION = "Analyze the fashion style in this image."


HUMAN_DETECTION_STRUCTURED_SYSTEM = """You are an AI that analyzes images to detect if a person is present.
Your task is to determine if there is a person wearing clothes in the image.

Response format:
{format_instructions}
"""

HUMAN_DETECTION_STRUCTURED_QUESTION = (
    "Analyze this image and determine if there is a person wearing clothes in it."
)


FASHION_ANALYSIS_STRUCTURED_SYSTEM = """You are a fashion analysis AI. Your job is to analyze clothing styles in images.
Please evaluate the fashion style in the image and provide a detailed analysis.
YOU MUST USE KOREAN LANGUAGE FOR THE SUMMARY AND HASHTAGS AND ANSWER AS SHORT AS YOU CAN

Response format:
{format_instructions}
"""

FASHION_ANALYSIS_STRUCTURED_QUESTION = "Analyze the fashion style in this image"


def _conversation(system: str, image_uri: str, question: str) -> list[ChatMessage]:
    return [
        ChatMessage(role="system", text=system),
        ChatMessage(role="user", text=question, image_uri=image_uri),
    ]


def human_detection_prompt(image_uri: str) -> list[ChatMessage]:
    """Conversation for the forced ``detect_human`` call."""
    return _conversation(HUMAN_DETECTION_SYSTEM, image_uri, HUMAN_DETECTION_QUESTION)


def fashion_analysis_prompt(image_uri: str) -> list[ChatMessage]:
    """Conversation for the forced ``ootd_fashion_analysis`` call."""
    return _conversation(FASHION_ANALYSIS_SYSTEM, image_uri, FASHION_ANALYSIS_QUESTION)


def human_detection_structured_prompt(image_uri: str, format_instructions: str) -> list[ChatMessage]:
    """Free-text human detection conversation with embedded format instructions."""
    system = HUMAN_DETECTION_STRUCTURED_SYSTEM.format(format_instructions=format_instructions)
    return _conversation(system, image_uri, HUMAN_DETECTION_STRUCTURED_QUESTION)


def fashion_analysis_structured_prompt(image_uri: str, format_instructions: str) -> list[ChatMessage]:
    """Free-text fashion analysis conversation with embedded format instructions."""
    system = FASHION_ANALYSIS_STRUCTURED_SYSTEM.format(format_instructions=format_instructions)
    return _conversation(system, image_uri, FASHION_ANALYSIS_STRUCTURED_QUESTION)
