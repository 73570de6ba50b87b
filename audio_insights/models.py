"""Data models for audio analysis results and application state."""

from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator


UNASSIGNED = "Unassigned"


class AppState(str, Enum):
    """Top-level states of the upload -> analysis flow."""

    IDLE = "IDLE"
    UPLOADING = "UPLOADING"
    TRANSCRIBING = "TRANSCRIBING"  # Declared for compatibility, never entered
    ANALYZING = "ANALYZING"
    COMPLETED = "COMPLETED"
    ERROR = "ERROR"


class Sentiment(str, Enum):
    """Overall tone of the recording."""

    POSITIVE = "Positive"
    NEUTRAL = "Neutral"
    NEGATIVE = "Negative"


class ActionItem(BaseModel):
    """A single task extracted from the recording."""

    model_config = ConfigDict(frozen=True)

    task: str
    assignee: str = UNASSIGNED

    @field_validator("assignee", mode="before")
    @classmethod
    def _default_assignee(cls, value):
        if value is None or (isinstance(value, str) and not value.strip()):
            return UNASSIGNED
        return value


class AnalysisResult(BaseModel):
    """
    Structured output of one inference call.

    Field aliases match the JSON shape requested from the model, so a raw
    response can be validated directly with ``model_validate_json``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    transcription: str
    executive_summary: str = Field(alias="executiveSummary")
    action_items: List[ActionItem] = Field(alias="actionItems")
    sentiment: Sentiment
    sentiment_reasoning: str = Field(alias="sentimentReasoning")

    def to_wire(self) -> dict:
        """Return the result in the camelCase shape the model produced."""
        return self.model_dump(mode="json", by_alias=True)
