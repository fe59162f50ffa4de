"""Format name helpers shared by the handle and the config."""

# Modes the JPEG encoder accepts without conversion
JPEG_MODES = ("RGB", "L", "CMYK")

# Formats whose encoders can write every frame of a multi-frame image
MULTI_FRAME_FORMATS = ("GIF", "PNG", "WEBP", "TIFF")


def get_pil_format(format_str: str) -> str:
    """Convert format string to PIL format name."""
    format_map = {
        "jpg": "JPEG",
        "jpeg": "JPEG",
        "png": "PNG",
        "webp": "WEBP",
        "gif": "GIF",
        "bmp": "BMP",
        "tiff": "TIFF",
    }
    return format_map.get(format_str.lower(), format_str.upper())


# Info keys that describe pixels or animation rather than metadata; strip keeps them
PIXEL_INFO_KEYS = ("transparency", "duration", "loop", "background", "disposal", "blend")

# Modes that Pillow only resamples with NEAREST
PALETTE_MODES = ("1", "P", "PA")


def truecolor_mode(mode: str, has_transparency: bool) -> str | None:
    """Mode to convert to before filtered resampling, or None when already truecolor."""
    if mode == "PA" or (has_transparency and mode in ("1", "L", "P", "RGB")):
        return "RGBA"
    if mode in PALETTE_MODES:
        return "RGB"
    return None
