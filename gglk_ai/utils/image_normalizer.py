"""Shrink uploaded images into data URIs small enough for a vision prompt."""

import base64
import io
import logging

from PIL import Image

from ..config import ImageConfig

logger = logging.getLogger(__name__)

# Modes the lossy encoders accept without conversion
_DIRECT_MODES = ("RGB", "RGBA")


def to_data_uri(mime_type: str, data: bytes) -> str:
    """Wrap raw bytes as a base64 data URI."""
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


class ImageNormalizer:
    """Resizes and re-encodes images, falling back to the original bytes.

    Full-size photos blow past the model's token limit once base64 encoded,
    so every upload is capped at ``max_width`` pixels wide and recompressed.
    """

    def __init__(self, config: ImageConfig | None = None):
        self.config = config or ImageConfig()

    def compress(self, data: bytes) -> bytes:
        """Resize to ``max_width`` (keeping aspect ratio) and re-encode.

        Raises whatever Pillow raises for undecodable input.
        """
        with Image.open(io.BytesIO(data)) as img:
            img.load()

            if img.mode not in _DIRECT_MODES:
                img = img.convert("RGBA" if "transparency" in img.info else "RGB")
            if img.mode == "RGBA" and self.config.format.upper() in ("JPEG", "JPG"):
                img = img.convert("RGB")  # no alpha in JPEG

            if img.width > self.config.max_width:
                height = max(1, round(img.height * self.config.max_width / img.width))
                img = img.resize((self.config.max_width, height), Image.Resampling.LANCZOS)

            output = io.BytesIO()
            img.save(output, format=self.config.format, quality=self.config.quality)
            return output.getvalue()

    def normalize(self, mime_type: str, data: bytes) -> str:
        """Return a data URI for the image. Never raises.

        Args:
            mime_type: MIME type declared by the uploader
            data: Raw image bytes

        Returns:
            Compressed data URI, or the original bytes under the declared
            MIME type if the image cannot be processed
        """
        try:
            compressed = self.compress(data)
        except Exception as e:
            logger.warning("Image compression failed, sending original bytes: %s", e)
            return to_data_uri(mime_type, data)

        logger.debug("Compressed image from %d to %d bytes", len(data), len(compressed))
        return to_data_uri(self.config.mime_type, compressed)


def normalize_image(mime_type: str, data: bytes, config: ImageConfig | None = None) -> str:
    """Convenience wrapper around ``ImageNormalizer.normalize``."""
    return ImageNormalizer(config).normalize(mime_type, data)
