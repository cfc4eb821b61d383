from __future__ import annotations


class PotluckError(RuntimeError):
    """Base error surfaced to the caller as ``{"error": message}``."""

    status_code = 400
    default_message = "Invalid request data"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidRequest(PotluckError):
    pass


class NotFound(PotluckError):
    status_code = 404
    default_message = "Not found"


class DuplicateJoin(PotluckError):
    default_message = "already joined"


class InsufficientParticipants(PotluckError):
    default_message = "Need at least 2 participants to run the draw"


class Unauthorized(PotluckError):
    status_code = 401
    default_message = "Invalid PIN"


class FeatureDisabled(PotluckError):
    status_code = 403
    default_message = "Secret Santa is not enabled"


class DrawFailed(PotluckError):
    status_code = 500
    default_message = "Failed to perform draw"
