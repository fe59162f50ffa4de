"""ImageHandle: single-owner wrapper around one native image context.

Lifecycle:
    init_environment()
    im = create_image()
    im.read_blob(data)
    im.resize(100, 100)     # 0 or more times
    out = im.export_blob()  # destroys the handle
    term_environment()

A handle may also be used as a context manager, which destroys it on exit
unless export_blob() already did.
"""

from __future__ import annotations

from io import BytesIO
from types import TracebackType

from loguru import logger
from PIL import Image

from .config import DEFAULT_CONFIG, MageConfig
from .environment import require_environment
from .errors import HandleDestroyedError
from .utils.image_formats import (
    JPEG_MODES,
    MULTI_FRAME_FORMATS,
    PIXEL_INFO_KEYS,
    truecolor_mode,
)

DECODE_ERRORS = (OSError, ValueError, SyntaxError, Image.DecompressionBombError)


class ImageContext:
    """Native image context: at most one decoded image plus its encode format.

    An empty context (nothing decoded yet) reports 0x0.
    """

    def __init__(self, image: Image.Image | None = None, format: str | None = None):
        self.image: Image.Image | None = image
        self.format: str | None = format

    @classmethod
    def blank(cls, width: int, height: int, config: MageConfig) -> ImageContext:
        """Create a canvas of exactly width x height filled with config.background."""
        image = Image.new("RGBA", (width, height), config.background_rgba)
        return cls(image, config.pil_format)

    @property
    def width(self) -> int:
        return self.image.width if self.image is not None else 0

    @property
    def height(self) -> int:
        return self.image.height if self.image is not None else 0

    def replace_image(self, image: Image.Image) -> None:
        if self.image is not None and self.image is not image:
            self.image.close()
        self.image = image

    def encode(self, config: MageConfig) -> bytes:
        if self.image is None:
            return b""

        image = self.image
        fmt = self.format or config.pil_format

        # Reset frame iteration before encoding
        if getattr(image, "n_frames", 1) > 1:
            image.seek(0)

        save_kwargs: dict[str, object] = {}

        # Savers only write profiles passed explicitly
        for key in ("exif", "icc_profile"):
            value = image.info.get(key)
            if value:
                save_kwargs[key] = value

        if fmt == "JPEG" and image.mode not in JPEG_MODES:
            image = image.convert("RGB")

        if fmt in ("JPEG", "WEBP"):
            save_kwargs["quality"] = config.quality

        if fmt in MULTI_FRAME_FORMATS and getattr(image, "n_frames", 1) > 1:
            save_kwargs["save_all"] = True

        buffer = BytesIO()
        try:
            image.save(buffer, format=fmt, **save_kwargs)
        except (OSError, ValueError, KeyError) as exc:
            logger.error(f"Failed to encode image as {fmt}: {exc}")
            return b""
        finally:
            if image is not self.image:
                image.close()

        return buffer.getvalue()

    def close(self) -> None:
        if self.image is not None:
            self.image.close()
            self.image = None


class ImageHandle:
    """Owns exactly one replaceable ImageContext slot.

    Every engine failure is reported as a boolean. Using the handle after
    destroy() or export_blob() raises HandleDestroyedError, and using it outside
    the environment window raises EnvironmentNotInitializedError.
    """

    def __init__(self, config: MageConfig | None = None):
        require_environment()
        self.config: MageConfig = config or DEFAULT_CONFIG
        self._context: ImageContext | None = ImageContext()

    @classmethod
    def create(cls, config: MageConfig | None = None) -> ImageHandle:
        return cls(config)

    def __enter__(self) -> ImageHandle:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if not self.is_destroyed:
            self.destroy()

    def __repr__(self) -> str:
        if self._context is None:
            return "<ImageHandle destroyed>"
        return f"<ImageHandle {self._context.format} {self.width}x{self.height}>"

    # ─────────────────────────────────────────────────────────────
    # Lifecycle
    # ─────────────────────────────────────────────────────────────

    @property
    def is_destroyed(self) -> bool:
        return self._context is None

    def _live_context(self) -> ImageContext:
        if self._context is None:
            raise HandleDestroyedError()
        require_environment()
        return self._context

    def destroy(self) -> None:
        """Release the native context. The handle must not be used afterwards."""
        if self._context is None:
            raise HandleDestroyedError()
        self._context.close()
        self._context = None

    # ─────────────────────────────────────────────────────────────
    # Decode / encode
    # ─────────────────────────────────────────────────────────────

    def read_blob(self, blob: bytes) -> bool:
        """Decode an encoded image into this handle.

        Returns False for empty, malformed or unsupported data and leaves the
        current context untouched.
        """
        context = self._live_context()

        if not blob:
            logger.warning("read_blob called with an empty blob")
            return False

        try:
            image = Image.open(BytesIO(blob))
        except DECODE_ERRORS as exc:
            logger.warning(f"Failed to identify image blob ({len(blob)} bytes): {exc}")
            return False

        try:
            image.load()
        except DECODE_ERRORS as exc:
            image.close()
            logger.warning(f"Failed to decode {image.format} blob ({len(blob)} bytes): {exc}")
            return False

        context.replace_image(image)
        context.format = image.format
        logger.debug(f"Decoded {image.format} image {image.width}x{image.height}")
        return True

    def export_blob(self) -> bytes:
        """Encode the current image in its current format and destroy the handle."""
        context = self._live_context()
        try:
            return context.encode(self.config)
        finally:
            self.destroy()

    # ─────────────────────────────────────────────────────────────
    # Queries
    # ─────────────────────────────────────────────────────────────

    @property
    def width(self) -> int:
        return self._live_context().width

    @property
    def height(self) -> int:
        return self._live_context().height

    @property
    def format(self) -> str | None:
        return self._live_context().format

    # ─────────────────────────────────────────────────────────────
    # Engine capabilities
    # ─────────────────────────────────────────────────────────────

    def strip(self) -> bool:
        """Remove comments and profiles (EXIF, ICC, XMP) without touching pixels."""
        context = self._live_context()
        if context.image is None:
            logger.warning("strip called on an empty image handle")
            return False

        image = context.image
        for key in list(image.info):
            if key not in PIXEL_INFO_KEYS:
                del image.info[key]
        image.getexif().clear()
        return True

    def resize_filtered(self, width: int, height: int) -> bool:
        """Resample the current image to exactly width x height.

        Palette and colour-keyed images are converted to truecolor first, since
        Pillow resamples palette modes with NEAREST regardless of the filter.
        """
        context = self._live_context()
        if context.image is None:
            logger.warning("resize_filtered called on an empty image handle")
            return False

        source = context.image
        mode = truecolor_mode(source.mode, "transparency" in source.info)

        try:
            if mode is not None:
                logger.debug(f"Converting {source.mode} image to {mode} before resampling")
                source = source.convert(mode)
            resized = source.resize((width, height), self.config.resample_filter)
        except (OSError, ValueError) as exc:
            logger.warning(f"Failed to resize image to {width}x{height}: {exc}")
            return False
        finally:
            if source is not context.image:
                source.close()

        context.replace_image(resized)
        return True

    def composite_center(self, canvas: ImageContext, x: int, y: int) -> bool:
        """Composite the current image over canvas at (x, y), then keep only canvas.

        Parts of the image outside the canvas are cropped. The original context
        is released and the canvas takes its place in the handle, whether or not
        the composite succeeded.
        """
        context = self._live_context()
        try:
            done = self._composite_over(context, canvas, x, y)
        finally:
            context.close()
            self._context = canvas
        return done

    @staticmethod
    def _composite_over(source: ImageContext, canvas: ImageContext, x: int, y: int) -> bool:
        if source.image is None or canvas.image is None:
            logger.warning("composite called without a source image")
            return False

        # Visible region of the source once placed at (x, y)
        src_left = max(0, -x)
        src_top = max(0, -y)
        dest_left = max(0, x)
        dest_top = max(0, y)
        visible_width = min(source.width - src_left, canvas.width - dest_left)
        visible_height = min(source.height - src_top, canvas.height - dest_top)

        if visible_width <= 0 or visible_height <= 0:
            return True

        try:
            overlay = source.image.convert("RGBA")
            canvas.image.alpha_composite(
                overlay,
                dest=(dest_left, dest_top),
                source=(
                    src_left,
                    src_top,
                    src_left + visible_width,
                    src_top + visible_height,
                ),
            )
        except (OSError, ValueError) as exc:
            logger.warning(f"Failed to composite image at ({x}, {y}): {exc}")
            return False

        return True

    def resize(self, width: int, height: int) -> bool:
        """Letterbox resize; see cl_mage.resize.engine.resize."""
        from .resize.engine import resize

        return resize(self, width, height)


def create_image(config: MageConfig | None = None) -> ImageHandle:
    """
    Create a new handle with a fresh, empty native context.

    Example:
        init_environment()
        im = create_image()
        ...
        term_environment()
    """
    return ImageHandle.create(config)
