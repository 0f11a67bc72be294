"""Learned usage records kept by the pattern and intent stores."""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class IntentType(str, Enum):
    """Coarse communicative purpose of an utterance."""

    DESIRE = "desire"
    EMOTION = "emotion"
    QUESTION = "question"
    REQUEST = "request"
    GREETING = "greeting"
    THANKS = "thanks"
    STATEMENT = "statement"


class WordRecord(BaseModel):
    word: str
    frequency: int = 0
    last_used_at: datetime = Field(default_factory=_utcnow)
    context_hours: set[int] = Field(default_factory=set)
    confidence: float = Field(default=1.0, ge=0.0, le=1.0)
    last_corrected_at: Optional[datetime] = None


class TransitionRecord(BaseModel):
    """Edge from a one- or two-word token to the following word."""

    from_token: str
    to_word: str
    frequency: float = 0.0


class PhraseRecord(BaseModel):
    text: str
    frequency: int = 0
    last_used_at: datetime = Field(default_factory=_utcnow)
    hour_of_day: int = Field(default=0, ge=0, le=23)
    day_of_week: int = Field(default=0, ge=0, le=6)
    topics: set[str] = Field(default_factory=set)
    category: str | None = None
    word_count: int = 0


class IntentPattern(BaseModel):
    intent_type: IntentType
    trigger_words: list[str] = Field(default_factory=list)
    common_completions: list[str] = Field(default_factory=list)
    frequency: int = 0
    confidence: float = Field(default=0.5, ge=0.0, le=1.0)


class IntentionSequence(BaseModel):
    first_intent: IntentType
    second_intent: IntentType
    frequency: int = 0
    average_gap_seconds: float = 0.0


class IntentPrediction(BaseModel):
    intent: IntentType
    confidence: float = Field(ge=0.0, le=1.0)
    example_completions: list[str] = Field(default_factory=list)


class ContextualEmbedding(BaseModel):
    """Phrases chosen after a given context, grouped by the context's intent."""

    phrase: str
    semantic_category: str
    related_phrases: list[str] = Field(default_factory=list)
    usage_count: int = 0
    last_used_at: datetime = Field(default_factory=_utcnow)


class CorrectionRecord(BaseModel):
    """A suggested word the user replaced with another one."""

    suggested: str
    actual: str
    frequency: int = 0
    contexts: list[str] = Field(default_factory=list)
    last_corrected_at: datetime = Field(default_factory=_utcnow)


class WordPair(BaseModel):
    from_word: str
    to_word: str
    frequency: float
    confidence: float = Field(ge=0.0, le=1.0)


class VocabularyAnalysis(BaseModel):
    total_words: int = 0
    average_word_length: float = 0.0
    most_common_words: list[str] = Field(default_factory=list)
    preferred_sentence_length: float = 0.0
    vocabulary_diversity: float = 0.0
