"""Configuration management for the outfit evaluation service."""

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings


class ModelConfig(BaseModel):
    """Chat model settings."""
    name: str = "gpt-4o-mini"
    temperature: float = 0.0
    request_timeout: float = 60.0  # seconds, per model call


class ImageConfig(BaseModel):
    """Upload compression settings."""
    max_width: int = 800  # never upscaled
    quality: int = Field(default=70, ge=1, le=100)
    format: str = "WEBP"

    @property
    def mime_type(self) -> str:
        return f"image/{self.format.lower()}"


class Settings(BaseSettings):
    """Main service configuration."""

    # OpenAI (loaded from .env)
    open_ai_token: str | None = None

    # Azure OpenAI, takes precedence over OpenAI when the endpoint is set
    azure_openai_endpoint: str | None = None
    azure_openai_deployment: str | None = None
    azure_openai_api_version: str = "2024-06-01"

    # Sub-configs
    model: ModelConfig = Field(default_factory=ModelConfig)
    image: ImageConfig = Field(default_factory=ImageConfig)

    # HTTP
    max_upload_mb: int = 10
    port: int = 3000
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_prefix = ""
        env_nested_delimiter = "__"
        extra = "ignore"
        protected_namespaces = ()

    @property
    def use_azure(self) -> bool:
        return bool(self.azure_openai_endpoint)

    @property
    def model_name(self) -> str:
        """Deployment name on Azure, model id on OpenAI."""
        if self.use_azure and self.azure_openai_deployment:
            return self.azure_openai_deployment
        return self.model.name

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024


def load_config() -> Settings:
    """Load configuration from environment and defaults."""
    return Settings()
