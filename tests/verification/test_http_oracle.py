from __future__ import annotations

import base64
from unittest.mock import MagicMock, patch

import pytest
import requests

from attendpro.core.exceptions import VerificationServiceUnavailable
from attendpro.verification.gate import IdentityVerificationGate
from attendpro.verification.model import ImageArtifact
from attendpro.verification.oracle import HttpComparisonOracle, OracleError


def _response(body, status=200):
    resp = MagicMock()
    resp.status_code = status
    resp.content = b"{}"
    resp.json.return_value = body
    if status >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(f"{status} error")
    else:
        resp.raise_for_status.return_value = None
    return resp


@patch("attendpro.verification.oracle.requests.post")
def test_compare_posts_both_images(mock_post):
    mock_post.return_value = _response({"isMatch": True, "confidence": 91.5})
    oracle = HttpComparisonOracle("http://faces.local/api", api_key="k", timeout=3)

    verdict = oracle.compare(b"ref", b"cand")

    assert verdict.is_match is True
    assert verdict.confidence == 91.5
    args, kwargs = mock_post.call_args
    assert args[0] == "http://faces.local/api/compare"
    assert kwargs["json"] == {
        "referenceImage": base64.b64encode(b"ref").decode("ascii"),
        "candidateImage": base64.b64encode(b"cand").decode("ascii"),
    }
    assert kwargs["headers"]["Authorization"] == "Bearer k"
    assert kwargs["timeout"] == 3


@patch("attendpro.verification.oracle.requests.post")
def test_snake_case_response_and_confidence_clamp(mock_post):
    mock_post.return_value = _response({"is_match": False, "confidence": 140})
    verdict = HttpComparisonOracle("http://faces.local").compare(b"a", b"b")
    assert verdict.is_match is False
    assert verdict.confidence == 100.0


@patch("attendpro.verification.oracle.requests.post")
def test_timeout_raises_oracle_error(mock_post):
    mock_post.side_effect = requests.Timeout("slow")
    with pytest.raises(OracleError, match="timed out"):
        HttpComparisonOracle("http://faces.local", timeout=1).compare(b"a", b"b")


@patch("attendpro.verification.oracle.requests.post")
def test_http_error_raises_oracle_error(mock_post):
    mock_post.return_value = _response({}, status=502)
    with pytest.raises(OracleError):
        HttpComparisonOracle("http://faces.local").compare(b"a", b"b")


@patch("attendpro.verification.oracle.requests.post")
def test_non_json_body_raises_oracle_error(mock_post):
    resp = _response(None)
    resp.json.side_effect = ValueError("no json")
    mock_post.return_value = resp
    with pytest.raises(OracleError, match="not JSON"):
        HttpComparisonOracle("http://faces.local").compare(b"a", b"b")


@patch("attendpro.verification.oracle.requests.post")
def test_malformed_body_raises_oracle_error(mock_post):
    mock_post.return_value = _response({"isMatch": "yes", "confidence": "high"})
    with pytest.raises(OracleError, match="malformed"):
        HttpComparisonOracle("http://faces.local").compare(b"a", b"b")


@pytest.mark.parametrize("confidence", [float("nan"), float("inf"), True])
@patch("attendpro.verification.oracle.requests.post")
def test_non_finite_or_bool_confidence_is_rejected(mock_post, confidence):
    mock_post.return_value = _response({"isMatch": True, "confidence": confidence})
    with pytest.raises(OracleError, match="malformed"):
        HttpComparisonOracle("http://faces.local").compare(b"a", b"b")


@patch("attendpro.verification.oracle.requests.post")
def test_nan_confidence_fails_closed_at_the_gate(mock_post):
    mock_post.return_value = _response({"isMatch": True, "confidence": float("nan")})
    gate = IdentityVerificationGate(HttpComparisonOracle("http://faces.local"))

    with pytest.raises(VerificationServiceUnavailable):
        gate.verify(ImageArtifact(data=b"cap"), b"ref")


@pytest.mark.parametrize("body", [[], "ok", None, 42])
@patch("attendpro.verification.oracle.requests.post")
def test_non_object_body_raises_oracle_error(mock_post, body):
    mock_post.return_value = _response(body)
    with pytest.raises(OracleError, match="malformed"):
        HttpComparisonOracle("http://faces.local").compare(b"a", b"b")


@patch("attendpro.verification.oracle.requests.post")
def test_list_body_becomes_service_unavailable(mock_post):
    mock_post.return_value = _response([])
    gate = IdentityVerificationGate(HttpComparisonOracle("http://faces.local"))

    with pytest.raises(VerificationServiceUnavailable):
        gate.verify(ImageArtifact(data=b"cap"), b"ref")
