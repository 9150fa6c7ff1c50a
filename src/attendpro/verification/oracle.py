from __future__ import annotations

import base64
import logging
import math
from typing import Any, Protocol
from urllib.parse import urljoin

import requests

from ..core.constants import DEFAULT_ORACLE_TIMEOUT_SECONDS
from .model import OracleVerdict

logger = logging.getLogger(__name__)


class OracleError(Exception):
    """The comparison service could not produce a verdict."""


class ComparisonOracle(Protocol):
    def compare(self, reference_image: bytes, candidate_image: bytes) -> OracleVerdict:
        """Same-person judgment with a 0-100 confidence; raise ``OracleError`` on failure."""

        raise NotImplementedError


class HttpComparisonOracle:
    """Client for a face comparison service.

    Request: ``POST {base_url}/compare`` with both images base64 encoded.
    Response: ``{"isMatch": bool, "confidence": number}`` (``is_match`` accepted too).
    """

    def __init__(self, base_url: str, api_key: str | None = None, timeout: float = DEFAULT_ORACLE_TIMEOUT_SECONDS):
        self.base_url = base_url.rstrip("/") + "/"
        self.api_key = api_key
        self.timeout = timeout

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def _post(self, path: str, payload: dict[str, Any]) -> Any:
        url = urljoin(self.base_url, path.lstrip("/"))
        try:
            response = requests.post(url, json=payload, headers=self._headers(), timeout=self.timeout)
            response.raise_for_status()
            return response.json() if response.content else {}
        except requests.Timeout as exc:
            raise OracleError(f"comparison timed out after {self.timeout}s") from exc
        except requests.RequestException as exc:
            raise OracleError(f"comparison request failed: {exc}") from exc
        except ValueError as exc:
            raise OracleError("comparison response is not JSON") from exc

    def compare(self, reference_image: bytes, candidate_image: bytes) -> OracleVerdict:
        body = self._post(
            "compare",
            {
                "referenceImage": base64.b64encode(reference_image).decode("ascii"),
                "candidateImage": base64.b64encode(candidate_image).decode("ascii"),
            },
        )

        if not isinstance(body, dict):
            logger.warning("Malformed comparison response type=%s", type(body).__name__)
            raise OracleError("comparison response is malformed")

        is_match = body.get("isMatch", body.get("is_match"))
        confidence = body.get("confidence")
        # bool is an int subclass; NaN/inf would slip through the clamp below.
        valid_confidence = (
            isinstance(confidence, (int, float)) and not isinstance(confidence, bool) and math.isfinite(confidence)
        )
        if not isinstance(is_match, bool) or not valid_confidence:
            logger.warning("Malformed comparison response keys=%s", list(body.keys()))
            raise OracleError("comparison response is malformed")

        return OracleVerdict(is_match=is_match, confidence=max(0.0, min(100.0, float(confidence))))
