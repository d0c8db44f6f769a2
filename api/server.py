"""FastAPI server for outfit evaluation.

Both endpoints take a multipart upload with a single ``image`` field and
return ``{"success": bool, "message": str | FashionAnalysisResult}``:
- /describe-function-calling: forced function calls, failures reported in the body
- /describe-structed-output: schema-guided text, failures answered with HTTP 502
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, File, HTTPException, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from gglk_ai import __version__
from gglk_ai.config import Settings, load_config
from gglk_ai.errors import ConfigurationError, EvaluationError
from gglk_ai.models import EvaluationOutcome, ImagePayload
from gglk_ai.pipeline import FunctionCallingEvaluator, StructuredOutputEvaluator
from gglk_ai.services import ChatModel, OpenAIChatModel

logger = logging.getLogger(__name__)


# Created on first use and shared across requests
_settings: Settings | None = None
_chat_model: OpenAIChatModel | None = None


def get_settings() -> Settings:
    """Get or load the service settings."""
    global _settings
    if _settings is None:
        _settings = load_config()  # Loads from .env automatically via pydantic-settings
    return _settings


def get_chat_model() -> ChatModel:
    """Get or create the model client."""
    global _chat_model
    if _chat_model is None:
        _chat_model = OpenAIChatModel.from_settings(get_settings())
    return _chat_model


@asynccontextmanager
async def lifespan(app: FastAPI):
    global _chat_model
    logging.basicConfig(
        level=get_settings().log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    yield
    if _chat_model is not None:
        await _chat_model.close()
        _chat_model = None


app = FastAPI(
    title="GGLK Ai PoC",
    description="GGLK Ai PoC API",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(EvaluationError)
async def evaluation_error_handler(request: Request, exc: EvaluationError):
    """Turn pipeline failures that escaped the evaluator into JSON errors."""
    status_code = 503 if isinstance(exc, ConfigurationError) else 502
    logger.error("Evaluation failed on %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": str(exc)},
    )


async def read_upload(image: UploadFile) -> ImagePayload:
    """Read the uploaded file, enforcing the size limit."""
    max_bytes = get_settings().max_upload_bytes
    data = await image.read()

    if not data:
        raise HTTPException(status_code=400, detail="File is required")
    if len(data) > max_bytes:
        raise HTTPException(
            status_code=400,
            detail=f"Validation failed (expected size is less than {max_bytes})",
        )

    return ImagePayload(
        mime_type=image.content_type or "application/octet-stream",
        data=data,
    )


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "GGLK Ai PoC", "version": __version__}


@app.get("/health")
async def health():
    """Report which model the service is configured for."""
    settings = get_settings()
    configured = bool(
        settings.azure_openai_deployment if settings.use_azure else settings.open_ai_token
    )

    return {
        "status": "ok" if configured else "degraded",
        "provider": "azure" if settings.use_azure else "openai",
        "model": settings.model_name,
    }


@app.post("/describe-function-calling", response_model=EvaluationOutcome)
async def describe_function_calling(image: UploadFile = File(...)):
    """Basic image evaluation using forced function calls."""
    payload = await read_upload(image)
    evaluator = FunctionCallingEvaluator(get_chat_model(), get_settings().image)
    return await evaluator.evaluate(payload)


@app.post("/describe-structed-output", response_model=EvaluationOutcome)
async def describe_structured_output(image: UploadFile = File(...)):
    """Basic image evaluation using schema-guided structured output."""
    payload = await read_upload(image)
    evaluator = StructuredOutputEvaluator(get_chat_model(), get_settings().image)
    return await evaluator.evaluate(payload)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=get_settings().port)
