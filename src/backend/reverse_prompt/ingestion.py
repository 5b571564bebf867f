import base64
import logging
from dataclasses import dataclass
from io import BytesIO
from typing import Optional, Tuple

from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImagePayload:
    filename: str
    mime_type: str
    data: bytes
    data_url: str
    width: Optional[int] = None
    height: Optional[int] = None

    @property
    def resolution(self) -> Optional[str]:
        if self.width is None or self.height is None:
            return None
        return f"{self.width}x{self.height}"


def is_image_mime(mime_type: Optional[str]) -> bool:
    return bool(mime_type) and mime_type.startswith("image/")


def to_data_url(data: bytes, mime_type: str) -> str:
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('utf-8')}"


def _read_dimensions(data: bytes, filename: str) -> Tuple[Optional[int], Optional[int]]:
    try:
        with Image.open(BytesIO(data)) as img:
            return img.width, img.height
    except (UnidentifiedImageError, OSError) as e:
        logger.warning(f"Could not read image dimensions for {filename}: {e}")
        return None, None


def load_image(filename: str, content_type: Optional[str], data: bytes) -> ImagePayload:
    if not is_image_mime(content_type):
        raise ValueError(f"Invalid file type '{content_type}'. Only images are allowed.")

    width, height = _read_dimensions(data, filename)
    return ImagePayload(
        filename=filename,
        mime_type=content_type,
        data=data,
        data_url=to_data_url(data, content_type),
        width=width,
        height=height,
    )
