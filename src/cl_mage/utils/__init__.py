from .image_formats import get_pil_format  # noqa: F401
from .profiling import timed  # noqa: F401

__all__ = ["get_pil_format", "timed"]
