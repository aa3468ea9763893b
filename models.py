from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class Topic(str, Enum):
    ADDITION = "addition"
    SUBTRACTION = "subtraction"
    MULTIPLICATION = "multiplication"
    DIVISION = "division"


# canonical order, used to make random choice over a set reproducible
TOPIC_ORDER = list(Topic)


class PracticeMode(str, Enum):
    SELECTION = "selection"
    PRACTICE = "practice"


class Question(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    answer: int
    topic: Topic
    level: int = 1


class Explanation(BaseModel):
    model_config = ConfigDict(frozen=True)

    tip: str
    explanation: str


class HistoryEntry(BaseModel):
    """One answered question. Only ``ai_feedback`` is filled in later, by copy."""

    model_config = ConfigDict(frozen=True)

    question_text: str
    topic: Topic
    correct: bool
    answer: int
    given: Optional[float] = None
    level: int
    time_taken_seconds: float
    explanation: str
    tip: str
    ai_feedback: Optional[str] = None
