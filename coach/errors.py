"""
Error taxonomy for the coach API.

Every error is terminal for the request that raised it. The API layer turns
a CoachError into a JSON response using its status code and body.
"""

from typing import Any, Dict


class CoachError(Exception):
    """Base class for errors that map to an HTTP response"""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.message}


class ConfigurationError(CoachError):
    """Required configuration (the API credential) is missing"""

    status_code = 500


class InvalidRequestError(CoachError):
    """The client sent a malformed body"""

    status_code = 400


class PayloadTooLargeError(CoachError):
    status_code = 413


class UpstreamError(CoachError):
    """
    The generative API answered with a non-success status.

    The upstream status and raw body are passed through untouched.
    """

    status_code = 502

    def __init__(self, upstream_status: int, detail: str):
        super().__init__("Gemini call failed")
        self.upstream_status = upstream_status
        self.detail = detail

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.message,
            "status": self.upstream_status,
            "detail": self.detail,
        }


class UnexpectedError(CoachError):
    """Anything else. Carries no detail to the client."""

    status_code = 500

    def __init__(self):
        super().__init__("Unexpected error")
