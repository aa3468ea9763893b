from __future__ import annotations

from typing import Awaitable, Callable, Union

# (question_text, correct) -> feedback text, sync or async
FeedbackFn = Callable[[str, bool], Union[str, Awaitable[str]]]

PRAISE = "Great job! You're on the right track!"
NUDGE = "Oops! Try again. Remember to double-check your math!"


async def canned_feedback(question_text: str, correct: bool) -> str:
    """Stand-in for a model-backed reviewer; only looks at correctness."""
    return PRAISE if correct else NUDGE
