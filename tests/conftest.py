# Test fixtures and configuration
import io
import sys
from pathlib import Path

import pytest
from PIL import Image

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


def _encode(img: Image.Image, fmt: str) -> bytes:
    output = io.BytesIO()
    img.save(output, format=fmt)
    return output.getvalue()


@pytest.fixture
def jpeg_bytes():
    """500x500 JPEG, small enough that it must not be upscaled."""
    return _encode(Image.new("RGB", (500, 500), (180, 40, 60)), "JPEG")


@pytest.fixture
def large_jpeg_bytes():
    """1600x1200 JPEG, wider than the compression limit."""
    return _encode(Image.new("RGB", (1600, 1200), (20, 90, 160)), "JPEG")


@pytest.fixture
def palette_png_bytes():
    """Palette-mode PNG, which the lossy encoder cannot write directly."""
    return _encode(Image.new("P", (1200, 300), 3), "PNG")


@pytest.fixture
def corrupt_bytes():
    """Bytes that only pretend to be a PNG."""
    return b"\x89PNG\r\n\x1a\n" + b"not really an image" * 4


@pytest.fixture
def fashion_analysis():
    """A well-formed fashion analysis as the model would return it."""
    return {
        "summary": "깔끔한 셋업에 포인트 운동화로 힘을 뺀 출근룩",
        "points": 8.5,
        "balance": 7,
        "sophistication": 6.5,
        "sense": 9,
        "hashtags": ["#출근룩", "#꾸안꾸", "#운동화는못참지"],
    }
