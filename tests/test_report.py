import pytest

from audio_insights.models import ActionItem, AnalysisResult, Sentiment
from audio_insights.report import build_markdown_report, report_file_name

from conftest import SAMPLE_RESPONSE


HEADINGS = [
    "## Executive Summary",
    "## Sentiment Analysis",
    "## Action Items",
    "## Full Transcription",
]


@pytest.mark.parametrize("file_name, expected", [
    ("meeting.mp3", "meeting_report.md"),
    ("standup.2024.wav", "standup.2024_report.md"),
    ("noext", "noext_report.md"),
    (None, "analysis_report.md"),
    ("", "analysis_report.md"),
])
def test_report_file_name(file_name, expected):
    assert report_file_name(file_name) == expected


def test_headings_appear_in_order():
    result = AnalysisResult.model_validate(SAMPLE_RESPONSE)

    report = build_markdown_report(result, "meeting.mp3")

    positions = [report.index(heading) for heading in HEADINGS]
    assert positions == sorted(positions)
    assert report.startswith("# Audio Analysis: meeting.mp3")


def test_report_body():
    result = AnalysisResult(
        transcription="We ship Friday.",
        executive_summary="Release planning.",
        action_items=[
            ActionItem(task="Tag release", assignee="Sam"),
            ActionItem(task="Update docs"),
        ],
        sentiment=Sentiment.POSITIVE,
        sentiment_reasoning="Upbeat discussion.",
    )

    report = build_markdown_report(result, "release.m4a")

    assert "**Tone:** Positive" in report
    assert "**Reasoning:** Upbeat discussion." in report
    assert "- [ ] **Tag release** (Assignee: Sam)" in report
    assert "- [ ] **Update docs** (Assignee: Unassigned)" in report
    assert report.rstrip().endswith("We ship Friday.")


def test_empty_action_items_show_placeholder():
    result = AnalysisResult.model_validate(SAMPLE_RESPONSE)

    report = build_markdown_report(result, "meeting.mp3")

    assert "No specific action items identified." in report
    assert "- [ ]" not in report
