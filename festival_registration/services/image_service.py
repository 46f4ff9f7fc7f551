"""ID photo reading and preview helpers."""
import io
import logging
from pathlib import Path
from typing import Optional, Tuple, Union

from PIL import Image, UnidentifiedImageError

from festival_registration.utils.exceptions import ImageReadError

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_EXTENSIONS = ("jpg", "jpeg", "png", "gif", "bmp")
PREVIEW_SIZE = (200, 250)


def read_image_file(path: Union[str, Path]) -> bytes:
    """
    Read an ID photo from disk.

    Args:
        path: Image file path

    Returns:
        Raw file bytes (no size or type enforcement)

    Raises:
        ImageReadError: If the file is missing or unreadable
    """
    try:
        return Path(path).read_bytes()
    except OSError as e:
        logger.error(f"Error reading image file {path}: {e}")
        raise ImageReadError(f"Error reading image file: {e}") from e


def read_uploaded_image(uploaded: Optional[object]) -> Optional[bytes]:
    """Bytes of a Streamlit upload, or None when nothing was uploaded."""
    if uploaded is None:
        return None

    try:
        data = uploaded.getvalue()
    except (AttributeError, OSError) as e:
        raise ImageReadError(f"Error reading image file: {e}") from e

    return data or None


def make_preview(image_bytes: bytes, size: Tuple[int, int] = PREVIEW_SIZE) -> bytes:
    """
    Scale an ID photo to fit the preview area.

    Args:
        image_bytes: Stored image data
        size: (width, height) box the preview must fit in

    Returns:
        PNG-encoded preview bytes

    Raises:
        ImageReadError: If the data is not a decodable image
    """
    try:
        with Image.open(io.BytesIO(image_bytes)) as img:
            preview = img.convert("RGBA") if img.mode not in ("RGB", "RGBA") else img.copy()
    except (UnidentifiedImageError, OSError, ValueError) as e:
        raise ImageReadError(f"Error displaying image: {e}") from e

    preview.thumbnail(size)

    output = io.BytesIO()
    preview.save(output, format="PNG")
    return output.getvalue()
