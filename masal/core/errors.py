"""Exceptions raised by the generation client."""


class MasalError(Exception):
    """Base class for story generation errors."""


class GenerationFailed(MasalError):
    """Story text could not be generated or did not have the expected shape."""


class IllustrationFailed(MasalError):
    """The image model returned no usable image."""


class SpeechFailed(MasalError):
    """The speech model returned no usable audio."""
