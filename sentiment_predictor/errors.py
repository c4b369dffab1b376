class PredictionError(Exception):
    """Base class for every failure a submission can end with."""


class InputValidationError(PredictionError):
    """Staged input was rejected before any request was made."""


class ServiceError(PredictionError):
    """The service answered with a non-success status."""

    def __init__(self, status_code, message):
        super().__init__(message)
        self.status_code = status_code


class ContentError(PredictionError):
    """Success status, but the body does not have the expected shape."""


class SubmissionInProgress(PredictionError):
    """A submission was attempted while another one is still running."""
