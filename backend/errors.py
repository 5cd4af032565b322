class StudyError(Exception):
    """
    Base error for the study pipeline. Carries the HTTP status the routing
    layer answers with, plus optional structured details.
    """

    kind = "StudyError"
    status_code = 500

    def __init__(self, message: str, details: dict | None = None, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.details = details
        if status_code is not None:
            self.status_code = status_code

    def to_body(self) -> dict:
        body = {"status": "error", "message": self.message}
        if self.details:
            body["details"] = self.details
        return body


class InvalidRequest(StudyError):
    kind = "InvalidRequest"
    status_code = 400


class NotFound(StudyError):
    kind = "NotFound"
    status_code = 404


class RateLimited(StudyError):
    kind = "RateLimited"
    status_code = 429


class Unconfigured(StudyError):
    kind = "Unconfigured"
    status_code = 500


class UpstreamFailure(StudyError):
    kind = "UpstreamFailure"
    status_code = 502


class EmptyResponse(StudyError):
    kind = "EmptyResponse"
    status_code = 502


class SchemaViolation(UpstreamFailure):
    """Model output parsed, but does not have the shape required for the mode."""
