"""Engine configuration for image handles and the resize engine."""

from typing import Literal

from PIL import Image, ImageColor
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .utils.image_formats import get_pil_format

CanvasFormat = Literal["jpg", "jpeg", "png", "webp", "gif", "bmp", "tiff"]
ResampleFilter = Literal["lanczos", "bicubic", "bilinear", "nearest"]

TRANSPARENT = "none"

_RESAMPLE_FILTERS: dict[str, Image.Resampling] = {
    "lanczos": Image.Resampling.LANCZOS,
    "bicubic": Image.Resampling.BICUBIC,
    "bilinear": Image.Resampling.BILINEAR,
    "nearest": Image.Resampling.NEAREST,
}


class MageConfig(BaseModel):
    """Constants used by every handle created with this config.

    Attributes:
        canvas_format: Encoding format of the canvas produced by resize (default: jpg)
        background: Canvas background colour, "none" for transparent
        quality: Encoder quality for JPEG/WEBP output (1-100)
        resample: Filter used for the scaled resize (default: lanczos)
        report_first_failure: If True, resize returns False when any step fails.
                              If False, only the composite result is returned.
    """

    model_config = ConfigDict(frozen=True)

    canvas_format: CanvasFormat = "jpg"
    background: str = TRANSPARENT
    quality: int = Field(default=85, ge=1, le=100)
    resample: ResampleFilter = "lanczos"
    report_first_failure: bool = False

    @field_validator("background")
    @classmethod
    def validate_background(cls, v: str) -> str:
        if v.lower() == TRANSPARENT:
            return TRANSPARENT
        try:
            _ = ImageColor.getrgb(v)
        except ValueError as exc:
            raise ValueError(f"Unknown background colour: {v}") from exc
        return v

    @property
    def pil_format(self) -> str:
        return get_pil_format(self.canvas_format)

    @property
    def resample_filter(self) -> Image.Resampling:
        return _RESAMPLE_FILTERS[self.resample]

    @property
    def background_rgba(self) -> tuple[int, int, int, int]:
        if self.background == TRANSPARENT:
            return (0, 0, 0, 0)
        return ImageColor.getcolor(self.background, "RGBA")  # pyright: ignore[reportReturnType]


DEFAULT_CONFIG = MageConfig()
