"""Test configuration and fixtures for cl_mage.

This module provides:
- Pytest configuration (markers)
- Environment fixture (init/term around every test)
- Synthetic media fixtures (JPEG with profiles, PNG with alpha, palette GIF/PNG,
  animated GIF, non-image data)
"""

from collections.abc import Callable
from io import BytesIO
from pathlib import Path

import pytest
from PIL import Image, ImageCms, ImageDraw

from cl_mage import init_environment, is_initialized, term_environment

# Dimensions of the reference photo used throughout the suite
SAMPLE_WIDTH = 500
SAMPLE_HEIGHT = 371


# ============================================================================
# Pytest Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers",
        "no_environment: do not initialize the image environment for this test",
    )


# ============================================================================
# Environment
# ============================================================================


@pytest.fixture(autouse=True)
def image_environment(request: pytest.FixtureRequest):
    """Bracket every test with init_environment() / term_environment()."""
    if request.node.get_closest_marker("no_environment"):
        yield
        if is_initialized():
            term_environment()
        return

    init_environment()
    yield
    if is_initialized():
        term_environment()


# ============================================================================
# Helpers
# ============================================================================


def _encode(img: Image.Image, fmt: str, **kwargs: object) -> bytes:
    buffer = BytesIO()
    img.save(buffer, format=fmt, **kwargs)
    return buffer.getvalue()


def _make_photo(width: int, height: int) -> Image.Image:
    """Grid pattern with a centred circle, similar to a real photo in structure."""
    img = Image.new("RGB", (width, height), color=(73, 109, 137))
    draw = ImageDraw.Draw(img)

    for i in range(0, width, 50):
        draw.line([(i, 0), (i, height)], fill=(255, 255, 255), width=2)
    for i in range(0, height, 50):
        draw.line([(0, i), (width, i)], fill=(255, 255, 255), width=2)

    cx, cy = width // 2, height // 2
    r = min(width, height) // 4
    draw.ellipse([cx - r, cy - r, cx + r, cy + r], fill=(200, 100, 100))
    return img


@pytest.fixture
def decoded() -> Callable[[bytes], tuple[str | None, tuple[int, int]]]:
    """Decode a blob independently of cl_mage and return (format, size)."""

    def _decoded(blob: bytes) -> tuple[str | None, tuple[int, int]]:
        with Image.open(BytesIO(blob)) as img:
            return img.format, img.size

    return _decoded


# ============================================================================
# Media Fixtures
# ============================================================================


@pytest.fixture
def profiled_jpeg_blob() -> bytes:
    """200x150 JPEG carrying both an EXIF description and an sRGB ICC profile."""
    img = _make_photo(200, 150)
    exif = img.getexif()
    exif[0x010E] = "cl_mage profiled image"
    icc = ImageCms.ImageCmsProfile(ImageCms.createProfile("sRGB")).tobytes()
    return _encode(img, "JPEG", quality=90, exif=exif.tobytes(), icc_profile=icc)


@pytest.fixture
def transparent_gif_blob() -> bytes:
    """100x100 palette GIF: transparent white background, opaque red 20x20 square."""
    img = Image.new("P", (100, 100), 0)
    img.putpalette([255, 255, 255, 255, 0, 0] + [0, 0, 0] * 254)
    draw = ImageDraw.Draw(img)
    draw.rectangle([40, 40, 59, 59], fill=1)
    return _encode(img, "GIF", transparency=0)


@pytest.fixture
def two_tone_palette_png_blob() -> bytes:
    """100x100 palette PNG, left half black and right half white, no transparency."""
    img = Image.new("P", (100, 100), 0)
    img.putpalette([0, 0, 0, 255, 255, 255] + [0, 0, 0] * 254)
    draw = ImageDraw.Draw(img)
    draw.rectangle([50, 0, 99, 99], fill=1)
    return _encode(img, "PNG")


@pytest.fixture
def sample_jpeg_blob() -> bytes:
    """500x371 JPEG with an EXIF description."""
    img = _make_photo(SAMPLE_WIDTH, SAMPLE_HEIGHT)
    exif = img.getexif()
    exif[0x010E] = "cl_mage test image"
    return _encode(img, "JPEG", quality=90, exif=exif.tobytes())


@pytest.fixture
def square_jpeg_blob() -> bytes:
    """1000x1000 JPEG."""
    return _encode(_make_photo(1000, 1000), "JPEG", quality=90)


@pytest.fixture
def transparent_png_blob() -> bytes:
    """100x100 fully transparent PNG with an opaque red 20x20 square in the middle."""
    img = Image.new("RGBA", (100, 100), (0, 0, 0, 0))
    draw = ImageDraw.Draw(img)
    draw.rectangle([40, 40, 59, 59], fill=(255, 0, 0, 255))
    return _encode(img, "PNG")


@pytest.fixture
def solid_png_blob() -> bytes:
    """200x100 opaque blue PNG."""
    return _encode(Image.new("RGB", (200, 100), (0, 0, 255)), "PNG")


@pytest.fixture
def animated_gif_blob() -> bytes:
    """64x48 GIF with three distinct frames."""
    frames = [
        Image.new("RGB", (64, 48), color)
        for color in ((255, 0, 0), (0, 255, 0), (0, 0, 255))
    ]
    return _encode(frames[0], "GIF", save_all=True, append_images=frames[1:], duration=100, loop=0)


@pytest.fixture
def non_image_blob() -> bytes:
    return b"this is definitely not an image, just some plain text bytes\n" * 4


@pytest.fixture
def sample_image_path(tmp_path: Path, sample_jpeg_blob: bytes) -> Path:
    """Write the 500x371 sample JPEG to disk."""
    path = tmp_path / "test.jpg"
    _ = path.write_bytes(sample_jpeg_blob)
    return path


@pytest.fixture
def temp_output_dir(tmp_path: Path) -> Path:
    """Provide clean temporary directory for test outputs."""
    output_dir = tmp_path / "output"
    output_dir.mkdir()
    return output_dir
