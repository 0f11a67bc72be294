"""Suggestion and grammar models returned to callers."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class SuggestionType(str, Enum):
    """Where a suggestion came from, in descending ranking priority."""

    CATEGORY_CONTEXTUAL = "category_contextual"
    PERSONALIZED = "personalized"
    COMMON_PHRASE = "common_phrase"
    FULL_SENTENCE = "full_sentence"
    TENSE_VARIATION = "tense_variation"
    COMPLETION = "completion"
    NEXT_WORD = "next_word"
    TEMPORAL = "temporal"
    SYNONYM = "synonym"
    CONTEXTUAL = "contextual"


TYPE_PRIORITY: tuple[SuggestionType, ...] = tuple(SuggestionType)


class Suggestion(BaseModel):
    """A ranked candidate shown to the user. Never persisted."""

    text: str
    confidence: float = Field(ge=0.0, le=1.0)
    type: SuggestionType
    context: Optional[str] = None

    @field_validator("confidence", mode="before")
    @classmethod
    def _clamp(cls, value: float) -> float:
        return min(1.0, max(0.0, float(value)))


class GrammaticalSuggestion(BaseModel):
    """A single proposed repair of an utterance."""

    original: str
    corrected: str
    confidence: float = Field(ge=0.0, le=1.0)
    explanation: str
    rule: str
    position: int = 0


class GrammarCheckResult(BaseModel):
    best_correction: Optional[GrammaticalSuggestion] = None
    suggestions: list[GrammaticalSuggestion] = Field(default_factory=list)


# ------------------------------------------------------------------
# Request bodies
# ------------------------------------------------------------------


class SuggestionRequest(BaseModel):
    current_words: list[str] = Field(default_factory=list)
    available_words: list[str] = Field(default_factory=list)
    max_suggestions: Optional[int] = Field(default=None, ge=0, le=50)
    category: Optional[str] = None
    category_vocabulary: list[str] = Field(default_factory=list)


class UtteranceRequest(BaseModel):
    text: str
    category: Optional[str] = None


class SelectionRequest(BaseModel):
    suggestion: Suggestion
    context_words: list[str] = Field(default_factory=list)
    category: Optional[str] = None


class IgnoredRequest(BaseModel):
    suggestions: list[Suggestion] = Field(default_factory=list)
    context_words: list[str] = Field(default_factory=list)
    category: Optional[str] = None


class CorrectionRequest(BaseModel):
    suggested: str = Field(min_length=1)
    actual: str = Field(min_length=1)
    context_words: list[str] = Field(default_factory=list)


class SentenceCompletedRequest(BaseModel):
    text: str


class GrammarCheckRequest(BaseModel):
    words: list[str] = Field(default_factory=list)


class WordVariations(BaseModel):
    word: str
    base_form: str
    variations: list[str] = Field(default_factory=list)
    is_verb: bool = False
    is_noun: bool = False
    is_adjective: bool = False
