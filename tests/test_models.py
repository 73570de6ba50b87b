import json

import pytest
from pydantic import ValidationError

from audio_insights.models import UNASSIGNED, ActionItem, AnalysisResult, AppState, Sentiment

from conftest import SAMPLE_RESPONSE


def test_sample_response_round_trips(sample_json):
    result = AnalysisResult.model_validate_json(sample_json)

    assert result.transcription == "hello"
    assert result.executive_summary == "s"
    assert result.action_items == []
    assert result.sentiment is Sentiment.NEUTRAL
    assert result.sentiment_reasoning == "r"
    assert result.to_wire() == SAMPLE_RESPONSE


def test_action_items_keep_order():
    payload = dict(SAMPLE_RESPONSE, actionItems=[
        {"task": "Send notes", "assignee": "Dana"},
        {"task": "Book room", "assignee": "Lee"},
    ])
    result = AnalysisResult.model_validate(payload)

    assert [item.task for item in result.action_items] == ["Send notes", "Book room"]


@pytest.mark.parametrize("item", [
    {"task": "Follow up"},
    {"task": "Follow up", "assignee": None},
    {"task": "Follow up", "assignee": "   "},
])
def test_missing_assignee_reads_unassigned(item):
    assert ActionItem.model_validate(item).assignee == UNASSIGNED


def test_unknown_sentiment_is_rejected():
    with pytest.raises(ValidationError):
        AnalysisResult.model_validate(dict(SAMPLE_RESPONSE, sentiment="Mixed"))


def test_result_is_immutable(sample_json):
    result = AnalysisResult.model_validate_json(sample_json)

    with pytest.raises(ValidationError):
        result.transcription = "changed"


def test_python_names_are_accepted():
    result = AnalysisResult(
        transcription="t",
        executive_summary="s",
        action_items=[ActionItem(task="x")],
        sentiment=Sentiment.POSITIVE,
        sentiment_reasoning="r",
    )

    assert json.loads(result.model_dump_json(by_alias=True))["actionItems"] == [
        {"task": "x", "assignee": "Unassigned"}
    ]


def test_transcribing_state_is_declared():
    assert AppState("TRANSCRIBING") is AppState.TRANSCRIBING
