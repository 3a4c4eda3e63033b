"""Error taxonomy shared by the parsing core and the HTTP layer."""


class JobTrackerError(Exception):
    """Base class for errors raised by the service layer."""


class ParseFailure(JobTrackerError):
    """Raw model text held no usable JSON object.

    ``reason`` is ``"no_json"`` when no ``{...}`` span exists at all and
    ``"malformed"`` when one exists but does not decode. Both usually mean
    the upstream generation call is worth retrying.
    """

    NO_JSON = "no_json"
    MALFORMED = "malformed"

    def __init__(self, reason: str, message: str | None = None) -> None:
        self.reason = reason
        if message is None:
            message = (
                "No valid JSON found in response"
                if reason == self.NO_JSON
                else "Failed to parse JSON response"
            )
        super().__init__(message)

    @property
    def retryable(self) -> bool:
        return self.reason in (self.NO_JSON, self.MALFORMED)


class SchemaCoercionWarning(UserWarning):
    """A job-field value had the wrong type and was coerced."""


class EmptyInputError(JobTrackerError):
    """Resume text was empty or whitespace only."""


class InvalidInputError(JobTrackerError):
    """Caller-supplied text failed a precondition (length, presence)."""


class UnsupportedFileTypeError(JobTrackerError):
    """Uploaded file type cannot be turned into plain text."""


class AIServiceUnavailableError(JobTrackerError):
    """The text-generation collaborator returned nothing."""
