"""Audio transcription and analysis using a hosted OpenAI audio model."""

import json
import logging
from typing import Optional, Tuple

import openai
from openai import OpenAI
from pydantic import ValidationError

from audio_insights.errors import (
    AnalysisError,
    EmptyResponse,
    ParseFailure,
    ServiceNotConfigured,
    UnsupportedAudioFormat,
)
from audio_insights.models import AnalysisResult, Sentiment


logger = logging.getLogger(__name__)


# Audio-capable chat models
ANALYSIS_MODELS = {
    "gpt-audio": {
        "name": "GPT Audio",
        "description": "Best transcription and analysis quality.",
        "default": True,
    },
    "gpt-audio-mini": {
        "name": "GPT Audio Mini",
        "description": "Faster and cheaper, fine for short recordings.",
        "default": False,
    },
    "gpt-4o-audio-preview": {
        "name": "GPT-4o Audio (Preview)",
        "description": "Previous generation audio model.",
        "default": False,
    },
}

DEFAULT_MODEL = next(model_id for model_id, info in ANALYSIS_MODELS.items() if info["default"])

ANALYSIS_PROMPT = """Please transcribe this audio and provide a detailed analysis.
Return the response in a structured JSON format with the following fields:
- transcription: The full text transcription of the audio.
- executiveSummary: A concise professional summary of the discussion.
- actionItems: A list of objects with 'task' and 'assignee' (use 'Unassigned' if not mentioned).
- sentiment: One of 'Positive', 'Neutral', or 'Negative'.
- sentimentReasoning: A brief explanation of the sentiment choice."""

RESPONSE_SCHEMA = {
    "type": "object",
    "properties": {
        "transcription": {"type": "string"},
        "executiveSummary": {"type": "string"},
        "actionItems": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "task": {"type": "string"},
                    "assignee": {"type": "string"},
                },
                "required": ["task", "assignee"],
                "additionalProperties": False,
            },
        },
        "sentiment": {"type": "string", "enum": [s.value for s in Sentiment]},
        "sentimentReasoning": {"type": "string"},
    },
    "required": ["transcription", "executiveSummary", "actionItems", "sentiment", "sentimentReasoning"],
    "additionalProperties": False,
}

# MIME types the API takes, by the format name it expects
AUDIO_FORMATS = {
    "audio/mpeg": "mp3",
    "audio/mp3": "mp3",
    "audio/x-mp3": "mp3",
    "audio/wav": "wav",
    "audio/x-wav": "wav",
    "audio/wave": "wav",
    "audio/vnd.wave": "wav",
}


def audio_format_for(mime_type: str) -> str:
    """
    Map a MIME type such as ``audio/x-wav`` to the API's audio format name.

    Raises:
        UnsupportedAudioFormat: For anything other than MP3 or WAV
    """
    normalized = mime_type.split(";")[0].strip().lower()
    if normalized not in AUDIO_FORMATS:
        raise UnsupportedAudioFormat(
            f"Unsupported audio format ({mime_type}). Please upload an MP3 or WAV file."
        )
    return AUDIO_FORMATS[normalized]


def build_response_format() -> dict:
    """Structured output declaration sent with every analysis request."""
    return {
        "type": "json_schema",
        "json_schema": {
            "name": "audio_analysis",
            "strict": True,
            "schema": RESPONSE_SCHEMA,
        },
    }


def parse_analysis(text: Optional[str]) -> AnalysisResult:
    """
    Parse the model's raw text into an AnalysisResult.

    Raises:
        EmptyResponse: If there is no text
        ParseFailure: If the text is not JSON matching the requested schema
    """
    if text is None or not text.strip():
        raise EmptyResponse()

    try:
        return AnalysisResult.model_validate_json(text)
    except ValidationError as e:
        try:
            json.loads(text)
        except json.JSONDecodeError:
            raise ParseFailure(f"The AI response was not valid JSON: {e.errors()[0]['msg']}") from e
        raise ParseFailure(f"The AI response did not match the expected format: {e}") from e


class AudioAnalysisService:
    """Transcribe and analyze audio through the OpenAI API."""

    def __init__(self):
        self.client: Optional[OpenAI] = None
        self.api_key: Optional[str] = None

    def set_api_key(self, api_key: str) -> Tuple[bool, str]:
        """
        Set and validate the OpenAI API key.

        Returns:
            Tuple of (success: bool, message: str)
        """
        if not api_key or not api_key.strip():
            return False, "API key cannot be empty."

        api_key = api_key.strip()

        if not api_key.startswith("sk-"):
            return False, "Invalid API key format. OpenAI API keys should start with 'sk-'."

        try:
            self.client = OpenAI(api_key=api_key)
        except openai.OpenAIError as e:
            self.client = None
            self.api_key = None
            return False, f"Error setting API key: {str(e)}"

        self.api_key = api_key
        return True, "API key set successfully."

    def clear_api_key(self):
        """Forget the current key and client."""
        self.client = None
        self.api_key = None

    def is_configured(self) -> bool:
        """Check if the service is properly configured with an API key."""
        return self.client is not None and self.api_key is not None

    def analyze_audio(self, base64_audio: str, mime_type: str, model: str = DEFAULT_MODEL) -> AnalysisResult:
        """
        Send one base64-encoded recording to the model and parse its analysis.

        This is a single best-effort call: no retry and no streaming.

        Args:
            base64_audio: The file contents, base64-encoded
            mime_type: MIME type of the file, e.g. ``audio/mpeg``
            model: Key of ANALYSIS_MODELS to use

        Returns:
            The parsed AnalysisResult

        Raises:
            ServiceNotConfigured: If no API key has been set
            UnsupportedAudioFormat: If the file is not MP3 or WAV
            EmptyResponse: If the model returned no text
            ParseFailure: If the text does not match the requested schema
            AnalysisError: For any API failure
        """
        if not self.is_configured():
            raise ServiceNotConfigured()

        if model not in ANALYSIS_MODELS:
            raise ValueError(f"Invalid model: {model}. Must be one of: {list(ANALYSIS_MODELS.keys())}")

        audio_format = audio_format_for(mime_type)

        messages = [
            {
                "role": "user",
                "content": [
                    {
                        "type": "input_audio",
                        "input_audio": {
                            "data": base64_audio,
                            "format": audio_format,
                        },
                    },
                    {"type": "text", "text": ANALYSIS_PROMPT},
                ],
            }
        ]

        logger.info("Requesting analysis from %s (%s)", model, mime_type)
        try:
            response = self.client.chat.completions.create(
                model=model,
                modalities=["text"],
                messages=messages,
                response_format=build_response_format(),
            )
        except openai.AuthenticationError as e:
            raise AnalysisError("Invalid API key. Please check your OpenAI API key.") from e
        except openai.RateLimitError as e:
            if "insufficient_quota" in str(e).lower():
                raise AnalysisError("Insufficient quota. Please check your OpenAI account billing.") from e
            raise AnalysisError("Rate limit exceeded. Please try again later.") from e
        except openai.OpenAIError as e:
            raise AnalysisError(f"Error during analysis: {str(e)}") from e

        if not response.choices:
            raise EmptyResponse()

        message = response.choices[0].message
        refusal = getattr(message, "refusal", None)
        if refusal:
            raise EmptyResponse(f"No response from AI: {refusal}")

        return parse_analysis(message.content)

    @staticmethod
    def get_model_choices() -> list:
        """Get list of (label, model_id) choices for the model selector."""
        choices = []
        for model_id, info in ANALYSIS_MODELS.items():
            label = info["name"]
            if info.get("default"):
                label += " (Default)"
            choices.append((label, model_id))
        return choices
