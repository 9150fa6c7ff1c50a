from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""

    code = "DOMAIN_ERROR"


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    code = "VALIDATION_ERROR"


class NoOpenSession(ValidationError):
    """Raised on clock-out when the user has nothing to close."""

    code = "NO_OPEN_SESSION"


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""

    code = "AUTHENTICATION_FAILED"


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    code = "FORBIDDEN"


class OutsideGeofence(DomainError):
    """No authorized zone contains the current position."""

    code = "OUTSIDE_GEOFENCE"

    def __init__(self, message: str = "Not at an authorized work location. Check-in denied."):
        super().__init__(message)


class BiometricMismatch(DomainError):
    """The comparison oracle ran but the captured face was not accepted."""

    code = "BIOMETRIC_MISMATCH"

    def __init__(self, confidence: float):
        self.confidence = confidence
        super().__init__(f"Identity could not be confirmed (confidence {confidence:g}). Please recapture.")


class VerificationServiceUnavailable(DomainError):
    """The comparison oracle failed or timed out; access is denied."""

    code = "VERIFICATION_SERVICE_UNAVAILABLE"

    def __init__(self, message: str = "Verification service unavailable. Try again shortly."):
        super().__init__(message)


class DeviceAccessDenied(DomainError):
    """A device permission (camera, location) was refused by the user."""


class CameraAccessDenied(DeviceAccessDenied):
    code = "CAMERA_ACCESS_DENIED"

    def __init__(self, message: str = "Face Recognition Failure: Camera access denied."):
        super().__init__(message)


class LocationAccessDenied(DeviceAccessDenied):
    code = "LOCATION_ACCESS_DENIED"

    def __init__(self, message: str = "GPS fault: location unavailable."):
        super().__init__(message)


class DuplicateSessionConflict(DomainError):
    """An attendance record already exists for this user and day."""

    code = "DUPLICATE_SESSION"

    def __init__(self, message: str = "Attendance already recorded for today", *, existing=None):
        self.existing = existing
        super().__init__(message)


class PersistenceFailure(DomainError):
    """Storage read/write failed; carries the underlying cause text."""

    code = "PERSISTENCE_FAILURE"

    def __init__(self, cause: str, *, original: Optional[BaseException] = None):
        self.cause = cause
        self.original = original
        super().__init__(f"Storage failure: {cause}")
