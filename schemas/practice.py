# schemas/practice.py
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from models import PracticeMode, Topic

# ---------- Session ----------


class QuestionOut(BaseModel):
    # the expected answer stays on the server
    model_config = ConfigDict(from_attributes=True)
    text: str
    topic: Topic
    level: int


class HistoryEntryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
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


class SessionOut(BaseModel):
    ok: bool = True
    mode: PracticeMode
    level: int
    accuracy: float
    accuracy_percent: int
    topics: List[Topic]
    question: Optional[QuestionOut] = None
    history: List[HistoryEntryOut]


# ---------- Topics ----------


class TopicToggle(BaseModel):
    topic: Topic
    enabled: bool


class TopicState(BaseModel):
    topic: Topic
    enabled: bool


class TopicsOut(BaseModel):
    ok: bool = True
    topics: List[TopicState]


# ---------- Start / submit ----------


class StartRequest(BaseModel):
    # when given, replaces whatever was toggled on before
    topics: Optional[List[Topic]] = None


class SubmitRequest(BaseModel):
    answer: str
    # Client may send it; otherwise the server times the question itself.
    elapsed_seconds: Optional[float] = None


class SubmitOut(BaseModel):
    ok: bool = True
    index: int
    entry: HistoryEntryOut
    session: SessionOut


# ---------- Feedback ----------


class FeedbackOut(BaseModel):
    ok: bool = True
    index: int
    ai_feedback: Optional[str] = None
    entry: HistoryEntryOut
