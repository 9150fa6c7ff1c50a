from __future__ import annotations

import base64
import io

import pytest
from PIL import Image

from attendpro.core.constants import MAX_FACE_IMAGE_SIDE
from attendpro.core.exceptions import ValidationError
from attendpro.verification.image import decode_image_payload, image_artifact_from_payload, normalize_face_image


def _png_bytes(size=(1280, 960), mode="RGBA") -> bytes:
    buf = io.BytesIO()
    Image.new(mode, size, color=(200, 120, 80, 255) if mode == "RGBA" else 128).save(buf, format="PNG")
    return buf.getvalue()


def test_decode_accepts_data_url_and_bare_base64():
    raw = b"\x89PNGdata"
    encoded = base64.b64encode(raw).decode("ascii")
    assert decode_image_payload(encoded) == raw
    assert decode_image_payload(f"data:image/png;base64,{encoded}") == raw


@pytest.mark.parametrize("payload", ["", "   ", "not base64 at all!"])
def test_decode_rejects_bad_payload(payload):
    with pytest.raises(ValidationError):
        decode_image_payload(payload)


def test_normalize_reencodes_as_bounded_rgb_jpeg():
    out = normalize_face_image(_png_bytes())
    with Image.open(io.BytesIO(out)) as img:
        assert img.format == "JPEG"
        assert img.mode == "RGB"
        assert max(img.size) <= MAX_FACE_IMAGE_SIDE


def test_normalize_rejects_non_image():
    with pytest.raises(ValidationError):
        normalize_face_image(b"definitely not an image")


def test_artifact_from_data_url():
    encoded = base64.b64encode(_png_bytes(size=(64, 64), mode="L")).decode("ascii")
    artifact = image_artifact_from_payload(f"data:image/png;base64,{encoded}")
    assert artifact.data[:2] == b"\xff\xd8"
