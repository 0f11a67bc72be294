"""Interaction log entries and the preference model derived from them."""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from aac_engine.models.suggestions import SuggestionType


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SuggestionInteraction(BaseModel):
    """One accept/ignore decision. Immutable once written."""

    model_config = ConfigDict(frozen=True)

    suggestion_text: str
    suggestion_type: SuggestionType
    context_words: tuple[str, ...] = ()
    was_selected: bool
    confidence_at_time: float = Field(default=0.0, ge=0.0, le=1.0)
    hour_of_day: int = Field(ge=0, le=23)
    day_of_week: int = Field(ge=0, le=6)
    category: Optional[str] = None
    timestamp: datetime = Field(default_factory=_utcnow)

    @field_validator("timestamp")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # Logs written without an offset are read as UTC
        return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


class AccuracyPoint(BaseModel):
    timestamp: datetime
    accuracy: float


class PreferenceModel(BaseModel):
    """Counters derived from the interaction log."""

    selected_counts: dict[str, int] = Field(default_factory=dict)
    ignored_counts: dict[str, int] = Field(default_factory=dict)
    context_patterns: dict[str, dict[str, int]] = Field(default_factory=dict)
    sentence_counts: dict[str, int] = Field(default_factory=dict)
    accuracy_history: list[AccuracyPoint] = Field(default_factory=list)
    total_interactions: int = 0

    @property
    def total_selected(self) -> int:
        return sum(self.selected_counts.values())

    @property
    def total_ignored(self) -> int:
        return sum(self.ignored_counts.values())

    @property
    def accuracy(self) -> float:
        selected = self.total_selected
        return selected / (selected + self.total_ignored + 1)


class WordCount(BaseModel):
    word: str
    count: int


class LearningStatistics(BaseModel):
    total_interactions: int = 0
    selection_rate: float = 0.0
    top_selected_words: list[WordCount] = Field(default_factory=list)
    top_ignored_words: list[WordCount] = Field(default_factory=list)
    model_accuracy: float = 0.0
    intent_distribution: dict[str, int] = Field(default_factory=dict)
    frequent_sentences: list[WordCount] = Field(default_factory=list)
    accuracy_history_size: int = 0
