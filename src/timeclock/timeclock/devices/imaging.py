"""Still capture and preview encoding.

The preview shown to the employee is mirrored, so stills are mirrored the
same way before encoding.
"""
from __future__ import annotations

import base64
import binascii
import io

from PIL import Image, ImageOps, UnidentifiedImageError

from ..core.constants import CAPTURE_JPEG_QUALITY, HAVE_CURRENT_DATA, PREVIEW_JPEG_QUALITY
from ..core.exceptions import FrameNotReadyError, ValidationError
from .camera import VideoStream

DATA_URL_PREFIX = "data:image/jpeg;base64,"


def _mirrored_jpeg(image: Image.Image, quality: int) -> bytes:
    buf = io.BytesIO()
    ImageOps.mirror(image.convert("RGB")).save(buf, format="JPEG", quality=quality)
    return buf.getvalue()


def capture_still(stream: VideoStream, *, quality: int = CAPTURE_JPEG_QUALITY) -> str:
    """Grab one frame from the live stream as a JPEG data URL."""
    if stream.ready_state < HAVE_CURRENT_DATA:
        raise FrameNotReadyError("A câmara ainda não tem imagem")
    jpeg = _mirrored_jpeg(stream.snapshot(), quality)
    return DATA_URL_PREFIX + base64.b64encode(jpeg).decode("ascii")


def encode_preview_frame(stream: VideoStream, *, quality: int = PREVIEW_JPEG_QUALITY) -> bytes | None:
    if not stream.active or stream.ready_state < HAVE_CURRENT_DATA:
        return None
    return _mirrored_jpeg(stream.snapshot(), quality)


def multipart_frame(jpeg: bytes) -> bytes:
    return b"--frame\r\nContent-Type: image/jpeg\r\n\r\n" + jpeg + b"\r\n"


def decode_data_url(data_url: str) -> Image.Image:
    """Decode an uploaded `data:image/...;base64,` photo (or bare base64)."""
    payload = (data_url or "").strip()
    if payload.startswith("data:"):
        _, _, payload = payload.partition(",")
    try:
        raw = base64.b64decode(payload, validate=True)
        image = Image.open(io.BytesIO(raw))
        image.load()
    except (binascii.Error, ValueError, UnidentifiedImageError, OSError):
        raise ValidationError("Fotografia inválida")
    return image
