"""Exceptions raised while ingesting and analyzing audio."""


class AnalysisError(Exception):
    """Base class for failures that end the analysis flow in the ERROR state."""

    default_message = "An unexpected error occurred during processing."

    def __init__(self, message: str = None):
        super().__init__(message or self.default_message)


class SizeLimitExceeded(AnalysisError):
    """The selected file is larger than the upload ceiling."""

    default_message = "File is too large. Please select an audio file under 20MB."


class ReadFailure(AnalysisError):
    """The selected file could not be read or encoded."""

    default_message = "Failed to read file"


class EmptyResponse(AnalysisError):
    """The model returned no text."""

    default_message = "No response from AI"


class ParseFailure(AnalysisError):
    """The model's text did not match the requested output schema."""

    default_message = "The AI response could not be parsed."


class ServiceNotConfigured(AnalysisError):
    """No API key has been set on the analysis service."""

    default_message = "API key not configured. Please set your OpenAI API key first."


class InvalidTransition(RuntimeError):
    """An event was applied to a state that does not accept it."""

    def __init__(self, state, event):
        self.state = state
        self.event = event
        super().__init__(f"Cannot apply {type(event).__name__} in state {state.value}")


class UnsupportedAudioFormat(AnalysisError):
    """The model cannot take audio in this format."""

    default_message = "Unsupported audio format. Please upload an MP3 or WAV file."
