"""Pure scale computation for the letterbox resize (no engine calls)."""

import math


def round_half_up(x: float) -> int:
    """Round to the nearest int, halves upward.

    Examples:
        round_half_up(0.5) == 1
        round_half_up(0.6) == 1
        round_half_up(0.3) == 0
    """
    return int(math.floor(x + 0.5))


def compute_scale(image_width: int, image_height: int, width: int, height: int) -> float:
    """Scale factor that makes the image cover a width x height canvas.

    1.0 when the target is the current size, otherwise the larger of the two
    axis ratios, so at least one scaled side matches the target.
    """
    if width == image_width and height == image_height:
        return 1.0
    return max(width / image_width, height / image_height)


def scaled_size(image_width: int, image_height: int, width: int, height: int) -> tuple[int, int]:
    """
    Size the image is resampled to before it is centred on the canvas.

    Each side is scaled with a 0.5 pre-offset before rounding, so an identity
    target still grows the image by one pixel per side.

    Examples: given an image of 1000x1000
        scaled_size(1000, 1000, 300, 500) == (500, 500)
        scaled_size(1000, 1000, 300, 200) == (300, 300)
    """
    scale = compute_scale(image_width, image_height, width, height)
    scaled_width = round_half_up(scale * (image_width + 0.5))
    scaled_height = round_half_up(scale * (image_height + 0.5))
    return scaled_width, scaled_height


def center_offset(target: int, scaled: int) -> int:
    """Offset that centres `scaled` within `target`, truncated toward zero."""
    return int((target - scaled) / 2)
