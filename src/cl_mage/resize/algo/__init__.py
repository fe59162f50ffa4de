"""Letterbox resize algorithms."""

from .letterbox import letterbox_image
from .scale import center_offset, compute_scale, round_half_up, scaled_size

__all__ = ["center_offset", "compute_scale", "letterbox_image", "round_half_up", "scaled_size"]
