"""Letterbox resize of a single image file."""

from pathlib import Path

from loguru import logger

from ...config import MageConfig
from ...handle import create_image
from ...utils.profiling import timed


@timed
def letterbox_image(
    *,
    input_path: str | Path,
    output_path: str | Path,
    width: int,
    height: int,
    config: MageConfig | None = None,
) -> str:
    """
    Letterbox a single image file and write the output.

    Requires an initialized environment.

    Args:
        input_path: Path to input image
        output_path: Path to output image
        width: Target width
        height: Target height
        config: Engine configuration (canvas format, quality, ...)

    Returns:
        Output file path as string

    Raises:
        FileNotFoundError: If input image does not exist
        OSError: If the input cannot be decoded or the output cannot be written
    """
    input_path = Path(input_path)
    output_path = Path(output_path)

    if not input_path.exists():
        raise FileNotFoundError(f"Input file not found: {input_path}")

    blob = input_path.read_bytes()

    with create_image(config) as im:
        if not im.read_blob(blob):
            raise OSError(f"Failed to decode image: {input_path}")

        if not im.resize(width, height):
            logger.warning(f"Letterbox of {input_path} reported failure")

        data = im.export_blob()

    _ = output_path.write_bytes(data)
    return str(output_path)
