"""Markdown report export for a completed analysis."""

from pathlib import PurePath
from typing import Optional

from audio_insights.models import AnalysisResult


REPORT_MIME_TYPE = "text/markdown"


def report_file_name(file_name: Optional[str]) -> str:
    """Download name for the report, e.g. ``meeting.mp3`` -> ``meeting_report.md``."""
    stem = PurePath(file_name).stem if file_name else ""
    return f"{stem or 'analysis'}_report.md"


def build_markdown_report(result: AnalysisResult, file_name: Optional[str]) -> str:
    """Render the analysis as a Markdown document."""
    if result.action_items:
        action_lines = "\n".join(
            f"- [ ] **{item.task}** (Assignee: {item.assignee})" for item in result.action_items
        )
    else:
        action_lines = "_No specific action items identified._"

    sections = [
        f"# Audio Analysis: {file_name or 'Untitled'}",
        f"## Executive Summary\n{result.executive_summary}",
        "## Sentiment Analysis\n"
        f"**Tone:** {result.sentiment.value}\n"
        f"**Reasoning:** {result.sentiment_reasoning}",
        f"## Action Items\n{action_lines}",
        f"## Full Transcription\n{result.transcription}",
    ]
    return "\n\n".join(sections) + "\n"
