"""Exceptions raised by the room designer workflow."""


class RoomDesignerError(Exception):
    """Base class for workflow errors shown to the user."""


class MissingCredentialsError(RoomDesignerError):
    """Gemini API key is not configured."""


class ImageGenerationError(RoomDesignerError):
    """Gemini answered without an inline image."""


class AdviceFormatError(RoomDesignerError):
    """Advice text could not be split into tips and essentials."""


class SubmissionInProgressError(RoomDesignerError):
    """A submission is already running for this designer."""
