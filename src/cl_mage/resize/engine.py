"""Letterbox resize orchestration over an ImageHandle."""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from ..handle import ImageContext
from ..utils.profiling import timed
from .algo.scale import center_offset, scaled_size
from .schema import ResizeParams

if TYPE_CHECKING:
    from ..handle import ImageHandle


@timed
def resize(handle: ImageHandle, width: int, height: int) -> bool:
    """
    Resize an image to exactly width x height, keeping its aspect ratio.

    The algorithm is:
      - strip all comments and profile data
      - resample the image so it covers the new size
      - centre it on a blank canvas of the new size, cropping anything outside

    Args:
        handle: Handle holding the decoded image; its context is replaced
        width: Canvas width
        height: Canvas height

    Returns:
        Result of the composite step. Strip and resample results are logged but
        only count when handle.config.report_first_failure is set.

    Raises:
        pydantic.ValidationError: If width or height is not a positive int
        HandleDestroyedError: If the handle was already destroyed
    """
    params = ResizeParams(width=width, height=height)
    config = handle.config

    image_width = handle.width
    image_height = handle.height
    steps: list[tuple[str, bool]] = []

    if image_width > 0 and image_height > 0:
        scaled_width, scaled_height = scaled_size(
            image_width, image_height, params.width, params.height
        )
        steps.append(("strip", handle.strip()))
        steps.append(("resize", handle.resize_filtered(scaled_width, scaled_height)))
    else:
        logger.warning("resize called on a handle with no decoded image")
        scaled_width, scaled_height = 0, 0

    canvas = ImageContext.blank(params.width, params.height, config)
    done = handle.composite_center(
        canvas,
        center_offset(params.width, scaled_width),
        center_offset(params.height, scaled_height),
    )
    steps.append(("composite", done))

    failed = [name for name, ok in steps if not ok]
    if failed:
        logger.warning(
            f"resize {image_width}x{image_height} -> {params.width}x{params.height}: "
            f"failed steps {failed}"
        )
        if config.report_first_failure:
            return False

    return done
