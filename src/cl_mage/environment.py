"""Process-wide image environment.

init_environment() must be called once before any handle is created and
term_environment() once after every handle has been destroyed. There is no
reference counting across handles.
"""

from collections.abc import Iterator
from contextlib import contextmanager

from loguru import logger
from PIL import Image

from .errors import EnvironmentNotInitializedError, MageEnvironmentError

_initialized: bool = False


def init_environment() -> None:
    """Register the engine's codecs and open the environment window."""
    global _initialized

    if _initialized:
        raise MageEnvironmentError("Image environment is already initialized.")

    _ = Image.init()
    _initialized = True
    logger.debug(f"Image environment initialized ({len(Image.OPEN)} decoders registered)")


def term_environment() -> None:
    """Close the environment window. Handles must not be used afterwards."""
    global _initialized

    if not _initialized:
        raise MageEnvironmentError("Image environment is not initialized.")

    _initialized = False
    logger.debug("Image environment terminated")


def is_initialized() -> bool:
    return _initialized


def require_environment() -> None:
    if not _initialized:
        raise EnvironmentNotInitializedError()


@contextmanager
def environment() -> Iterator[None]:
    """
    Bracket a block with init_environment() / term_environment().

    Example:
        with environment():
            im = create_image()
            ...
    """
    init_environment()
    try:
        yield
    finally:
        term_environment()
