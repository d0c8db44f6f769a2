"""Tests for settings loading."""

from gglk_ai.config import ImageConfig, Settings, load_config


class TestDefaults:

    def test_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.model.name == "gpt-4o-mini"
        assert settings.model.temperature == 0.0
        assert settings.image.max_width == 800
        assert settings.image.quality == 70
        assert settings.max_upload_bytes == 10 * 1024 * 1024

    def test_image_mime_type(self):
        assert ImageConfig().mime_type == "image/webp"
        assert ImageConfig(format="JPEG").mime_type == "image/jpeg"


class TestEnvironment:

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("OPEN_AI_TOKEN", "sk-from-env")
        monkeypatch.setenv("MODEL__NAME", "gpt-4o")
        monkeypatch.setenv("IMAGE__MAX_WIDTH", "640")
        monkeypatch.setenv("MAX_UPLOAD_MB", "5")

        settings = load_config()

        assert settings.open_ai_token == "sk-from-env"
        assert settings.model.name == "gpt-4o"
        assert settings.image.max_width == 640
        assert settings.max_upload_bytes == 5 * 1024 * 1024

    def test_azure_deployment_is_model_name(self):
        settings = Settings(
            _env_file=None,
            azure_openai_endpoint="https://example.openai.azure.com",
            azure_openai_deployment="ootd-4o-mini",
        )

        assert settings.use_azure
        assert settings.model_name == "ootd-4o-mini"

    def test_openai_model_name(self):
        settings = Settings(_env_file=None, azure_openai_endpoint=None)

        assert not settings.use_azure
        assert settings.model_name == "gpt-4o-mini"
