"""Unit tests for ImageNormalizer - upload compression and data URI fallback."""

import base64
import io

import pytest
from PIL import Image

from gglk_ai.config import ImageConfig
from gglk_ai.utils import ImageNormalizer, normalize_image, to_data_uri


def decode_data_uri(uri: str) -> tuple[str, bytes]:
    """Split a data URI into its MIME type and decoded payload."""
    header, encoded = uri.split(",", 1)
    assert header.startswith("data:")
    assert header.endswith(";base64")
    return header[len("data:"):-len(";base64")], base64.b64decode(encoded)


class TestDataUri:
    """Tests for raw data URI wrapping."""

    def test_to_data_uri_format(self):
        uri = to_data_uri("image/png", b"\x89PNG")

        assert uri == "data:image/png;base64,iVBORw=="


class TestCompression:
    """Tests for the resize + re-encode path."""

    @pytest.fixture
    def normalizer(self):
        return ImageNormalizer()

    def test_wide_image_is_resized_to_max_width(self, normalizer, large_jpeg_bytes):
        """1600x1200 input comes back 800x600 WEBP."""
        mime_type, data = decode_data_uri(normalizer.normalize("image/jpeg", large_jpeg_bytes))

        assert mime_type == "image/webp"
        with Image.open(io.BytesIO(data)) as img:
            assert img.format == "WEBP"
            assert img.size == (800, 600)

    def test_small_image_is_not_upscaled(self, normalizer, jpeg_bytes):
        """Images narrower than the limit keep their size."""
        mime_type, data = decode_data_uri(normalizer.normalize("image/jpeg", jpeg_bytes))

        assert mime_type == "image/webp"
        with Image.open(io.BytesIO(data)) as img:
            assert img.size == (500, 500)

    def test_palette_image_is_converted(self, normalizer, palette_png_bytes):
        """Palette PNGs are converted before encoding rather than falling back."""
        mime_type, data = decode_data_uri(normalizer.normalize("image/png", palette_png_bytes))

        assert mime_type == "image/webp"
        with Image.open(io.BytesIO(data)) as img:
            assert img.size == (800, 200)

    def test_custom_format_and_width(self, large_jpeg_bytes):
        """Output format and width follow the image config."""
        normalizer = ImageNormalizer(ImageConfig(max_width=400, quality=50, format="JPEG"))

        mime_type, data = decode_data_uri(normalizer.normalize("image/jpeg", large_jpeg_bytes))

        assert mime_type == "image/jpeg"
        with Image.open(io.BytesIO(data)) as img:
            assert img.size == (400, 300)

    def test_compress_raises_on_garbage(self, normalizer, corrupt_bytes):
        """The low-level step does raise; only normalize() swallows it."""
        with pytest.raises(Exception):
            normalizer.compress(corrupt_bytes)


class TestFallback:
    """Tests for the never-raise fallback to the original bytes."""

    def test_corrupt_bytes_fall_back_to_declared_mime(self, corrupt_bytes):
        """Undecodable input is wrapped unmodified under the declared type."""
        uri = normalize_image("image/png", corrupt_bytes)

        mime_type, data = decode_data_uri(uri)
        assert mime_type == "image/png"
        assert data == corrupt_bytes

    @pytest.mark.parametrize("mime_type,data", [
        ("image/png", b""),
        ("image/jpeg", b"\xff\xd8\xff\xe0 truncated"),
        ("application/octet-stream", bytes(range(256))),
    ])
    def test_fallback_never_raises(self, mime_type, data):
        uri = normalize_image(mime_type, data)

        assert uri == to_data_uri(mime_type, data)
