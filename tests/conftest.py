import json
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from audio_insights.inference import AudioAnalysisService


SAMPLE_RESPONSE = {
    "transcription": "hello",
    "executiveSummary": "s",
    "actionItems": [],
    "sentiment": "Neutral",
    "sentimentReasoning": "r",
}


class FakeUpload:
    """Stands in for Streamlit's UploadedFile."""

    def __init__(self, name="meeting.mp3", content=b"ID3fake-audio", type="audio/mpeg", size=None):
        self.name = name
        self.type = type
        self._content = content
        self.size = len(content) if size is None else size
        self.reads = 0

    def getvalue(self):
        self.reads += 1
        return self._content


class FakeService:
    """Records calls and returns a canned result or raises."""

    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []

    def analyze_audio(self, base64_audio, mime_type, model):
        self.calls.append((base64_audio, mime_type, model))
        if self.error is not None:
            raise self.error
        return self.result


def chat_response(content, refusal=None):
    message = SimpleNamespace(content=content, refusal=refusal)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


@pytest.fixture
def sample_json():
    return json.dumps(SAMPLE_RESPONSE)


@pytest.fixture
def configured_service():
    service = AudioAnalysisService()
    service.client = MagicMock()
    service.api_key = "sk-test"
    return service
