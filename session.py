# Session aggregate and the tracker that drives it through topic selection and practice.

from __future__ import annotations

import inspect
import logging
import math
import random as _rnd
import re
import threading
import time
from typing import Any, Callable, Dict, Iterable, List, Optional, Set, Tuple

from starlette.concurrency import run_in_threadpool

from config import PRACTICE_SEED, RESET_LEVEL_POLICY, ResetLevelPolicy
from explain import explain
from feedback import FeedbackFn, canned_feedback
from generator import generate_question
from levels import MIN_LEVEL, clamp_level, next_level
from models import TOPIC_ORDER, HistoryEntry, PracticeMode, Question, Topic

logger = logging.getLogger("adaptive-maths.session")

NO_TOPICS_MSG = "Please select at least one topic to start!"

# --- Answer parsing ---------------------------------------------------------------
LEN_LIMIT = 100
_ALLOWED_RE = re.compile(r"^[0-9+\-.eE\s]{1,100}$")
NOT_A_NUMBER = float("nan")  # never equal to anything, itself included


class PracticeError(Exception):
    pass


class NoTopicsSelected(PracticeError, ValueError):
    pass


class PracticeStateError(PracticeError):
    pass


def parse_answer(text: Optional[str]) -> float:
    """Parse typed answer text; anything unusable becomes NaN so it is scored wrong."""
    if text is None or not isinstance(text, str):
        return NOT_A_NUMBER
    s = text.strip()
    if not s or len(s) > LEN_LIMIT or _ALLOWED_RE.fullmatch(s) is None:
        return NOT_A_NUMBER
    try:
        return float(s)
    except ValueError:
        return NOT_A_NUMBER


def accuracy(history: Iterable[HistoryEntry]) -> float:
    entries = list(history)
    if not entries:
        return 0.0
    return 100 * sum(1 for h in entries if h.correct) / len(entries)


def accuracy_percent(value: float) -> int:
    # half-up, like the progress label expects (66.5 -> 67)
    return int(math.floor(value + 0.5))


class Session:
    """Mutable state of one learner's practice: level, topics, history, current question."""

    def __init__(self, level: int = MIN_LEVEL) -> None:
        self.level = clamp_level(level)
        self.topics: Set[Topic] = set()
        self.history: List[HistoryEntry] = []
        self.question: Optional[Question] = None
        self.mode = PracticeMode.SELECTION
        # bumped on every start/reset so late feedback can tell runs apart
        self.run = 0

    @property
    def accuracy(self) -> float:
        return accuracy(self.history)

    def ordered_topics(self) -> List[Topic]:
        return [t for t in TOPIC_ORDER if t in self.topics]


class SessionTracker:
    def __init__(
        self,
        session: Optional[Session] = None,
        *,
        rng: Optional[_rnd.Random] = None,
        feedback: FeedbackFn = canned_feedback,
        reset_policy: ResetLevelPolicy = RESET_LEVEL_POLICY,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        self.session = session or Session()
        self.rng = rng or _rnd.Random(PRACTICE_SEED)
        self.reset_policy = ResetLevelPolicy(reset_policy)
        self._feedback = feedback
        self._clock = clock
        self._posed_at: Optional[float] = None
        self._lock = threading.Lock()

    # --- helpers ---------------------------------------------------------------

    def _require(self, mode: PracticeMode) -> None:
        if self.session.mode != mode:
            raise PracticeStateError(
                f"not allowed in {self.session.mode.value} mode (needs {mode.value})"
            )

    def _pose_question(self) -> None:
        s = self.session
        s.question = generate_question(s.level, s.ordered_topics(), self.rng)
        self._posed_at = self._clock()

    def _entry(self, index: int) -> HistoryEntry:
        if index < 0 or index >= len(self.session.history):
            raise IndexError(f"no history entry at index {index}")
        return self.session.history[index]

    # --- topic selection -------------------------------------------------------

    def toggle_topic(self, topic: Topic | str, enabled: bool) -> List[Topic]:
        topic = Topic(topic)
        with self._lock:
            self._require(PracticeMode.SELECTION)
            if enabled:
                self.session.topics.add(topic)
            else:
                self.session.topics.discard(topic)
            return self.session.ordered_topics()

    def start(self, topics: Optional[Iterable[Topic | str]] = None) -> Question:
        """
        Enter practice with the enabled topics (or ``topics``, replacing them).

        Raises NoTopicsSelected, leaving everything untouched, when nothing is enabled.
        """
        chosen = None if topics is None else {Topic(t) for t in topics}
        with self._lock:
            s = self.session
            self._require(PracticeMode.SELECTION)
            if chosen is None:
                chosen = set(s.topics)
            if not chosen:
                raise NoTopicsSelected(NO_TOPICS_MSG)

            s.topics = chosen
            s.history = []
            s.run += 1
            s.mode = PracticeMode.PRACTICE
            self._pose_question()
            logger.info(
                "Practice started at level %d with %s",
                s.level,
                ", ".join(t.value for t in s.ordered_topics()),
            )
            return s.question

    # --- practice --------------------------------------------------------------

    def submit(
        self, answer_text: Optional[str], elapsed_seconds: Optional[float] = None
    ) -> HistoryEntry:
        return self.submit_indexed(answer_text, elapsed_seconds)[1]

    def submit_indexed(
        self, answer_text: Optional[str], elapsed_seconds: Optional[float] = None
    ) -> Tuple[int, HistoryEntry]:
        """Score an answer; returns the new entry with its history index."""
        with self._lock:
            self._require(PracticeMode.PRACTICE)
            s = self.session
            q = s.question

            if elapsed_seconds is None:
                now = self._clock()
                elapsed_seconds = now - (now if self._posed_at is None else self._posed_at)
            elapsed = max(0.0, float(elapsed_seconds))

            given = parse_answer(answer_text)
            correct = given == q.answer
            tips = explain(q)

            entry = HistoryEntry(
                question_text=q.text,
                topic=q.topic,
                correct=correct,
                answer=q.answer,
                given=given if math.isfinite(given) else None,
                level=s.level,
                time_taken_seconds=elapsed,
                explanation=tips.explanation,
                tip=tips.tip,
            )
            s.history.append(entry)
            index = len(s.history) - 1
            logger.debug(
                "Answered %r correct=%s in %.1fs at level %d", q.text, correct, elapsed, s.level
            )

            new_level = next_level(s.history)
            if new_level != s.level:
                logger.info("Level %d -> %d after %d answers", s.level, new_level, len(s.history))
            s.level = new_level

            self._pose_question()
            return index, entry

    async def request_feedback(self, index: int) -> HistoryEntry:
        """
        Ask the feedback collaborator about history entry ``index`` and store its reply.

        An entry that already has feedback is returned as-is. A reply that lands
        after the run was reset or restarted is not stored.
        """
        with self._lock:
            entry = self._entry(index)
            run = self.session.run
        if entry.ai_feedback is not None:
            return entry

        if inspect.iscoroutinefunction(self._feedback):
            result = self._feedback(entry.question_text, entry.correct)
        else:
            # blocking reviewers run off the event loop
            result = await run_in_threadpool(self._feedback, entry.question_text, entry.correct)
        if inspect.isawaitable(result):
            result = await result
        text = str(result)

        with self._lock:
            if self.session.run != run:
                logger.warning("Dropping feedback for entry %d from a finished run", index)
                return entry.model_copy(update={"ai_feedback": text})
            current = self.session.history[index]
            if current.ai_feedback is not None:
                return current
            updated = current.model_copy(update={"ai_feedback": text})
            self.session.history[index] = updated
            return updated

    def reset(self) -> None:
        with self._lock:
            s = self.session
            s.mode = PracticeMode.SELECTION
            s.topics = set()
            s.history = []
            s.question = None
            s.run += 1
            if self.reset_policy is ResetLevelPolicy.RESTART:
                s.level = MIN_LEVEL
            self._posed_at = None
            logger.info("Back to topic selection (next run at level %d)", s.level)

    # --- read side -------------------------------------------------------------

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            s = self.session
            acc = s.accuracy
            return {
                "mode": s.mode,
                "level": s.level,
                "topics": s.ordered_topics(),
                "question": s.question,
                "history": list(s.history),
                "accuracy": acc,
                "accuracy_percent": accuracy_percent(acc),
            }
