# capture_api/errors.py


class CaptureAPIError(Exception):
    """Base class for errors raised by the capture API."""


class MissingInputError(CaptureAPIError):
    """The request did not carry both an image and a questions field."""


class InvalidQuestionsError(CaptureAPIError):
    """The questions field is not a non-empty JSON array of strings."""


class LLMError(CaptureAPIError):
    """The model call could not be made."""
