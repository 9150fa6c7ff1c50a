from __future__ import annotations

import base64
import binascii
import io

from PIL import Image, UnidentifiedImageError

from ..core.constants import FACE_JPEG_QUALITY, MAX_FACE_IMAGE_SIDE
from ..core.exceptions import ValidationError
from .model import ImageArtifact


def decode_image_payload(payload: str) -> bytes:
    """Accept a ``data:image/...;base64,`` URL or bare base64 and return raw bytes."""

    if not payload or not payload.strip():
        raise ValidationError("Face capture is empty")

    data = payload.strip()
    if data.startswith("data:"):
        _, _, data = data.partition(",")

    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError):
        raise ValidationError("Face capture is not valid base64")


def normalize_face_image(raw: bytes) -> bytes:
    """Verify ``raw`` is an image and re-encode it as a bounded-size RGB JPEG."""

    try:
        with Image.open(io.BytesIO(raw)) as probe:
            probe.verify()
        # verify() leaves the image unusable; reopen to decode pixels.
        with Image.open(io.BytesIO(raw)) as img:
            img = img.convert("RGB")
            img.thumbnail((MAX_FACE_IMAGE_SIDE, MAX_FACE_IMAGE_SIDE))
            buf = io.BytesIO()
            img.save(buf, format="JPEG", quality=FACE_JPEG_QUALITY)
    except (UnidentifiedImageError, OSError, SyntaxError) as exc:
        raise ValidationError(f"Face capture is not a readable image: {exc}")

    return buf.getvalue()


def image_artifact_from_payload(payload: str) -> ImageArtifact:
    return ImageArtifact(data=normalize_face_image(decode_image_payload(payload)))
