# routers/practice.py
from __future__ import annotations

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, HTTPException

from deps.session import get_tracker
from models import TOPIC_ORDER
from schemas.practice import (
    FeedbackOut,
    HistoryEntryOut,
    QuestionOut,
    SessionOut,
    StartRequest,
    SubmitOut,
    SubmitRequest,
    TopicsOut,
    TopicState,
    TopicToggle,
)
from session import NoTopicsSelected, PracticeStateError, SessionTracker

logger = logging.getLogger("adaptive-maths.api")

router = APIRouter(prefix="/practice", tags=["practice"])

Tracker = Annotated[SessionTracker, Depends(get_tracker)]


def _session_out(tracker: SessionTracker) -> SessionOut:
    snap = tracker.snapshot()
    return SessionOut(
        mode=snap["mode"],
        level=snap["level"],
        accuracy=round(snap["accuracy"], 2),
        accuracy_percent=snap["accuracy_percent"],
        topics=snap["topics"],
        question=QuestionOut.model_validate(snap["question"]) if snap["question"] else None,
        history=[HistoryEntryOut.model_validate(h) for h in snap["history"]],
    )


def _topics_out(tracker: SessionTracker) -> TopicsOut:
    enabled = set(tracker.snapshot()["topics"])
    return TopicsOut(topics=[TopicState(topic=t, enabled=t in enabled) for t in TOPIC_ORDER])


def _conflict(e: PracticeStateError) -> HTTPException:
    return HTTPException(status_code=409, detail=str(e))


@router.get("", response_model=SessionOut)
def get_session(tracker: Tracker):
    return _session_out(tracker)


@router.get("/topics", response_model=TopicsOut)
def list_topics(tracker: Tracker):
    return _topics_out(tracker)


@router.post("/topics", response_model=TopicsOut)
def toggle_topic(req: TopicToggle, tracker: Tracker):
    try:
        tracker.toggle_topic(req.topic, req.enabled)
    except PracticeStateError as e:
        raise _conflict(e)
    return _topics_out(tracker)


@router.post("/start")
def start_practice(tracker: Tracker, req: Optional[StartRequest] = None):
    topics = req.topics if req is not None else None
    try:
        tracker.start(topics)
    except NoTopicsSelected as e:
        # user-facing validation message, nothing changed
        return {"ok": False, "error": str(e)}
    except PracticeStateError as e:
        raise _conflict(e)
    return _session_out(tracker)


@router.post("/submit", response_model=SubmitOut)
def submit_answer(req: SubmitRequest, tracker: Tracker):
    try:
        index, entry = tracker.submit_indexed(req.answer, req.elapsed_seconds)
    except PracticeStateError as e:
        raise _conflict(e)
    session = _session_out(tracker)
    return SubmitOut(
        index=index,
        entry=HistoryEntryOut.model_validate(entry),
        session=session,
    )


@router.post("/history/{index}/feedback", response_model=FeedbackOut)
async def request_feedback(index: int, tracker: Tracker):
    try:
        entry = await tracker.request_feedback(index)
    except IndexError:
        raise HTTPException(status_code=404, detail="history entry not found")
    except Exception as e:
        logger.exception("Feedback request for entry %d failed", index)
        raise HTTPException(status_code=502, detail=f"feedback_error: {type(e).__name__}: {e}")
    return FeedbackOut(
        index=index,
        ai_feedback=entry.ai_feedback,
        entry=HistoryEntryOut.model_validate(entry),
    )


@router.post("/reset", response_model=SessionOut)
def reset_practice(tracker: Tracker):
    tracker.reset()
    return _session_out(tracker)
