from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, jsonify, request, session

from ..common.datetime_utils import parse_iso_date
from ..core.constants import DEFAULT_HISTORY_LIMIT, MAX_HISTORY_LIMIT, PRIVILEGED_ROLES
from ..core.exceptions import (
    AuthorizationError,
    BiometricMismatch,
    CameraAccessDenied,
    DeviceAccessDenied,
    DomainError,
    DuplicateSessionConflict,
    NoOpenSession,
    OutsideGeofence,
    PersistenceFailure,
    ValidationError,
    VerificationServiceUnavailable,
)
from ..container import Container
from ..geofence.position import ReportedPosition
from ..verification.image import image_artifact_from_payload
from ..verification.model import PhysicalConfirmation, VerificationArtifact

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (OutsideGeofence, 403),
    (AuthorizationError, 403),
    (BiometricMismatch, 401),
    (VerificationServiceUnavailable, 503),
    (DeviceAccessDenied, 400),
    (DuplicateSessionConflict, 409),
    (NoOpenSession, 409),
    (ValidationError, 400),
    (PersistenceFailure, 500),
)


def error_response(exc: DomainError):
    status = next((code for kind, code in _STATUS_BY_ERROR if isinstance(exc, kind)), 400)
    body = {"success": False, "code": exc.code, "message": str(exc)}
    if isinstance(exc, BiometricMismatch):
        body["confidence"] = exc.confidence
    if isinstance(exc, (BiometricMismatch, VerificationServiceUnavailable)):
        body["retryable"] = True
    if isinstance(exc, DuplicateSessionConflict) and exc.existing is not None:
        body["record"] = exc.existing.to_dict()
    return jsonify(body), status


def artifact_from_payload(payload: dict) -> VerificationArtifact | None:
    """Translate the capture part of a clock-in request into a verification artifact."""

    if payload.get("capture_error"):
        raise CameraAccessDenied()

    method = (payload.get("method") or "").lower()
    if not method:
        return None
    if method == "fingerprint":
        return PhysicalConfirmation()
    if method == "face":
        return image_artifact_from_payload(payload.get("image") or "")
    raise ValidationError(f"Unknown verification method: {method}")


def register(app: Flask, container: Container) -> None:
    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return jsonify({"success": False, "code": "LOGIN_REQUIRED", "message": "Please log in to continue"}), 401
            return view(*args, **kwargs)

        return wrapper

    def privileged_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return jsonify({"success": False, "code": "LOGIN_REQUIRED", "message": "Please log in to continue"}), 401

            if session.get("role") not in {r.value for r in PRIVILEGED_ROLES}:
                return error_response(AuthorizationError("Insufficient permissions"))

            return view(*args, **kwargs)

        return wrapper

    @app.route("/api/attendance/clock-in", methods=["POST"], endpoint="clock_in")
    @login_required
    def clock_in():
        payload = request.get_json(silent=True) or {}
        try:
            artifact = artifact_from_payload(payload)
            record = container.attendance_service.clock_in(
                int(session["user_id"]),
                position_provider=ReportedPosition.from_payload(payload),
                artifact=artifact,
            )
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Clock-in failed for user %s", session.get("user_id"))
            return jsonify({"success": False, "code": "INTERNAL_ERROR", "message": "System error during attendance logging."}), 500

        return jsonify({"success": True, "message": "Clock-in successful.", "record": record.to_dict()}), 200

    @app.route("/api/attendance/clock-out", methods=["POST"], endpoint="clock_out")
    @login_required
    def clock_out():
        try:
            record = container.attendance_service.clock_out(int(session["user_id"]))
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Clock-out failed for user %s", session.get("user_id"))
            return jsonify({"success": False, "code": "INTERNAL_ERROR", "message": "System error during attendance logging."}), 500

        return jsonify({"success": True, "message": "Clock-out complete.", "record": record.to_dict()}), 200

    @app.route("/api/attendance/today", methods=["GET"], endpoint="attendance_today")
    @login_required
    def attendance_today():
        user_id = int(session["user_id"])
        try:
            today = container.attendance_service.today()
            record = container.attendance_service.get_today_record(user_id, today)
            current = container.attendance_service.get_current_session(user_id)
        except DomainError as e:
            return error_response(e)

        return jsonify(
            {
                "date": today.strftime("%Y-%m-%d"),
                "record": record.to_dict() if record else None,
                "openSession": current.to_dict() if current else None,
            }
        ), 200

    @app.route("/api/attendance/history", methods=["GET"], endpoint="attendance_history")
    @login_required
    def attendance_history():
        limit = request.args.get("limit", type=int) or DEFAULT_HISTORY_LIMIT
        limit = max(1, min(limit, MAX_HISTORY_LIMIT))
        try:
            rows = container.attendance_service.get_history_ui(int(session["user_id"]), limit=limit)
        except DomainError as e:
            return error_response(e)
        return jsonify({"rows": rows}), 200

    @app.route("/api/attendance/hours", methods=["GET"], endpoint="attendance_hours")
    @login_required
    def attendance_hours():
        try:
            today = container.attendance_service.today()
            start_s = request.args.get("start")
            end_s = request.args.get("end")
            start = parse_iso_date(start_s) if start_s else today.replace(day=1)
            end = parse_iso_date(end_s) if end_s else today

            # Privileged users may look at anyone; others only at themselves.
            user_id = int(session["user_id"])
            if session.get("role") in {r.value for r in PRIVILEGED_ROLES}:
                user_id = request.args.get("user_id", type=int)

            data = container.hours_service.build_hours_report(start=start, end=end, user_id=user_id)
        except ValueError:
            return jsonify({"success": False, "code": "VALIDATION_ERROR", "message": "Dates must be YYYY-MM-DD"}), 400
        except DomainError as e:
            return error_response(e)

        return jsonify(
            {"start": start.strftime("%Y-%m-%d"), "end": end.strftime("%Y-%m-%d"), "rows": data.rows, "summary": data.summary}
        ), 200

    @app.route("/api/admin/reconcile", methods=["POST"], endpoint="admin_reconcile")
    @privileged_required
    def admin_reconcile():
        report = container.reconciler.sweep()
        return jsonify({"success": not report.aborted, "report": report.to_dict()}), 200
