"""cl_mage - Image handles with letterbox resize over Pillow."""

from .config import DEFAULT_CONFIG, MageConfig
from .environment import environment, init_environment, is_initialized, term_environment
from .errors import (
    EnvironmentNotInitializedError,
    HandleDestroyedError,
    MageEnvironmentError,
    MageError,
)
from .handle import ImageContext, ImageHandle, create_image
from .resize import ResizeParams, letterbox_image

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_CONFIG",
    "MageConfig",
    "ImageContext",
    "ImageHandle",
    "ResizeParams",
    "create_image",
    "letterbox_image",
    "environment",
    "init_environment",
    "term_environment",
    "is_initialized",
    "MageError",
    "HandleDestroyedError",
    "EnvironmentNotInitializedError",
    "MageEnvironmentError",
    "__version__",
]
