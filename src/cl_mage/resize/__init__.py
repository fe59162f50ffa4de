"""Letterbox resize: scale to cover, then centre on a canvas of the exact size."""

from .algo.letterbox import letterbox_image
from .engine import resize
from .schema import ResizeParams

__all__ = ["ResizeParams", "letterbox_image", "resize"]
