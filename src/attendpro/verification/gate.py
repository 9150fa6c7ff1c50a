from __future__ import annotations

import logging
from typing import Optional

from ..core.constants import DEFAULT_MATCH_THRESHOLD
from ..core.enums import VerificationMethod
from ..core.exceptions import VerificationServiceUnavailable
from .model import ImageArtifact, PhysicalConfirmation, VerificationArtifact, VerificationResult
from .oracle import ComparisonOracle, OracleError

logger = logging.getLogger(__name__)


class IdentityVerificationGate:
    """Decides whether a captured artifact proves the user's identity.

    Fails closed: if the oracle cannot answer, ``VerificationServiceUnavailable``
    is raised instead of returning a result.
    """

    def __init__(self, oracle: ComparisonOracle, *, threshold: float = DEFAULT_MATCH_THRESHOLD):
        self._oracle = oracle
        self._threshold = float(threshold)

    @property
    def threshold(self) -> float:
        return self._threshold

    def verify(self, captured: VerificationArtifact, enrolled: Optional[bytes]) -> VerificationResult:
        if isinstance(captured, PhysicalConfirmation):
            return VerificationResult(passed=True, confidence=100.0, method=VerificationMethod.FINGERPRINT)

        if not isinstance(captured, ImageArtifact):
            raise TypeError(f"Unsupported verification artifact: {type(captured)!r}")

        if not enrolled:
            return VerificationResult(passed=True, confidence=100.0, method=VerificationMethod.FACE, enrolled=True)

        try:
            verdict = self._oracle.compare(enrolled, captured.data)
        except OracleError as exc:
            logger.warning("Face comparison unavailable: %s", exc)
            raise VerificationServiceUnavailable() from exc

        passed = verdict.is_match and verdict.confidence >= self._threshold
        return VerificationResult(passed=passed, confidence=verdict.confidence, method=VerificationMethod.FACE)
