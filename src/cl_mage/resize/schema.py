"""Letterbox resize parameters schema."""

from pydantic import BaseModel, Field


class ResizeParams(BaseModel):
    """Target canvas size for a letterbox resize.

    Attributes:
        width: Canvas width in pixels (must be positive)
        height: Canvas height in pixels (must be positive)
    """

    width: int = Field(gt=0, description="Target canvas width in pixels")
    height: int = Field(gt=0, description="Target canvas height in pixels")
