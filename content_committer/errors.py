class CommitError(Exception):
    """Base error for a save-content invocation; maps to one HTTP status."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MethodNotAllowed(CommitError):
    status_code = 405


class ServerMisconfigured(CommitError):
    status_code = 500


class InvalidRequest(CommitError):
    status_code = 400


class UpstreamError(CommitError):
    status_code = 500
