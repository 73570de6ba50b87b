import asyncio
import base64

from audio_insights.errors import EmptyResponse, ParseFailure
from audio_insights.ingestion import MAX_UPLOAD_BYTES
from audio_insights.inference import DEFAULT_MODEL
from audio_insights.models import AnalysisResult, AppState
from audio_insights.pipeline import run_analysis
from audio_insights.state import AppSession

from conftest import SAMPLE_RESPONSE, FakeService, FakeUpload


RESULT = AnalysisResult.model_validate(SAMPLE_RESPONSE)


def run(upload, service, **kwargs):
    seen = []
    final = asyncio.run(run_analysis(AppSession(), upload, service, on_change=seen.append, **kwargs))
    return final, [s.state for s in seen]


def test_successful_analysis_walks_every_state():
    service = FakeService(result=RESULT)

    final, states = run(FakeUpload(content=b"abc"), service)

    assert states == [AppState.UPLOADING, AppState.ANALYZING, AppState.COMPLETED]
    assert final.result.to_wire() == SAMPLE_RESPONSE
    assert final.error is None
    assert service.calls == [(base64.b64encode(b"abc").decode("ascii"), "audio/mpeg", DEFAULT_MODEL)]


def test_oversized_file_fails_before_any_network_call():
    service = FakeService(result=RESULT)
    upload = FakeUpload(size=MAX_UPLOAD_BYTES + 1)

    final, states = run(upload, service)

    assert states == [AppState.ERROR]
    assert "too large" in final.error
    assert service.calls == []
    assert upload.reads == 0


def test_empty_response_ends_in_error():
    final, states = run(FakeUpload(), FakeService(error=EmptyResponse()))

    assert states[-1] == AppState.ERROR
    assert AppState.COMPLETED not in states
    assert final.error == "No response from AI"
    assert final.result is None


def test_parse_failure_ends_in_error():
    final, _ = run(FakeUpload(), FakeService(error=ParseFailure("bad json")))

    assert final.state == AppState.ERROR
    assert final.error == "bad json"


def test_unexpected_exception_ends_in_error():
    final, _ = run(FakeUpload(), FakeService(error=RuntimeError("socket closed")))

    assert final.state == AppState.ERROR
    assert final.error == "socket closed"


def test_exception_without_message_gets_generic_text():
    final, _ = run(FakeUpload(), FakeService(error=RuntimeError()))

    assert final.error == "An unexpected error occurred during processing."


def test_missing_mime_type_falls_back_to_mpeg():
    service = FakeService(result=RESULT)

    final, _ = run(FakeUpload(type=""), service, model="gpt-audio-mini")

    assert service.calls[0][1:] == ("audio/mpeg", "gpt-audio-mini")
    assert final.mime_type == "audio/mpeg"
