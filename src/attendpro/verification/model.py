from __future__ import annotations

import base64
from dataclasses import dataclass, field
from typing import Union

from ..core.enums import VerificationMethod


@dataclass(frozen=True)
class ImageArtifact:
    """Face capture (JPEG bytes)."""

    data: bytes = field(repr=False)

    method = VerificationMethod.FACE

    def to_base64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")


@dataclass(frozen=True)
class PhysicalConfirmation:
    """One-shot touch sensor confirmation; carries no data."""

    method = VerificationMethod.FINGERPRINT


VerificationArtifact = Union[ImageArtifact, PhysicalConfirmation]


@dataclass(frozen=True)
class OracleVerdict:
    is_match: bool
    confidence: float


@dataclass(frozen=True)
class VerificationResult:
    passed: bool
    confidence: float
    method: VerificationMethod
    # True when no reference existed; the caller must store the capture as the master profile.
    enrolled: bool = False
