import base64
import logging
import mimetypes
from pathlib import Path
from typing import BinaryIO, Optional, Union

from recipe_vision.errors import ImageReadError
from recipe_vision.schema import SelectedImage

logger = logging.getLogger(__name__)

ImageSource = Union[SelectedImage, BinaryIO, str, Path]


def _guess_mime_type(name: str) -> str:
    guessed, _ = mimetypes.guess_type(name)
    return guessed or "application/octet-stream"


def _read_bytes(source: ImageSource) -> bytes:
    if isinstance(source, SelectedImage):
        return source.data
    try:
        if isinstance(source, (str, Path)):
            return Path(source).read_bytes()
        if hasattr(source, "seek"):
            source.seek(0)
        data = source.read()
    except (OSError, ValueError) as exc:
        raise ImageReadError(f"Could not read image: {exc}") from exc
    if not isinstance(data, bytes):
        raise ImageReadError("Image source must be opened in binary mode")
    return data


def load_image(
    source: Union[BinaryIO, str, Path],
    name: Optional[str] = None,
    mime_type: Optional[str] = None,
) -> SelectedImage:
    """Read a picked file into a SelectedImage.

    Works with paths, open binary files and Streamlit's UploadedFile
    (which carries ``name`` and ``type``).
    """
    if name is None:
        name = getattr(source, "name", None) or (str(source) if isinstance(source, (str, Path)) else "image")
        name = Path(name).name
    if mime_type is None:
        mime_type = getattr(source, "type", None) or _guess_mime_type(name)

    data = _read_bytes(source)
    logger.debug("Loaded image %s (%s, %d bytes)", name, mime_type, len(data))
    return SelectedImage(name=name, mime_type=mime_type, data=data)


def encode_to_base64(source: ImageSource) -> str:
    """Return the bare base64 payload, without any ``data:`` URL prefix."""
    return base64.b64encode(_read_bytes(source)).decode("ascii")
