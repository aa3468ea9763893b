# Question generator: random operands scaled by level, one enabled topic per question.

from __future__ import annotations

import random as _rnd
from typing import Callable, Dict, Iterable, Optional, Tuple

from models import TOPIC_ORDER, Question, Topic

OPERAND_SCALE = 5  # operands are drawn from [-level*5, level*5]


def _addition(a: int, b: int) -> Tuple[str, int]:
    return f"{a} + {b}", a + b


def _subtraction(a: int, b: int) -> Tuple[str, int]:
    return f"{a} - {b}", a - b


def _multiplication(a: int, b: int) -> Tuple[str, int]:
    return f"{a} × {b}", a * b


def _division(a: int, b: int) -> Tuple[str, int]:
    # the quotient is chosen first and the dividend back-computed, so it is always exact
    divisor = 1 if b == 0 else b
    return f"{a * divisor} ÷ {divisor}", a


_BUILDERS: Dict[Topic, Callable[[int, int], Tuple[str, int]]] = {
    Topic.ADDITION: _addition,
    Topic.SUBTRACTION: _subtraction,
    Topic.MULTIPLICATION: _multiplication,
    Topic.DIVISION: _division,
}


def operand_range(level: int) -> int:
    return level * OPERAND_SCALE


def _coerce(topic):
    try:
        return Topic(topic)
    except ValueError:
        return topic


def _ordered(topics: Iterable[Topic]) -> list:
    pool = list(dict.fromkeys(_coerce(t) for t in topics))
    known = [t for t in TOPIC_ORDER if t in pool]
    # anything outside the enum keeps its given position after the known ones
    return known + [t for t in pool if t not in known]


def generate_question(
    level: int, topics: Iterable[Topic], rng: Optional[_rnd.Random] = None
) -> Question:
    """
    Build a question for ``level`` on one topic picked uniformly from ``topics``.

    ``topics`` must be non-empty; the caller guarantees it. Pass a seeded
    ``random.Random`` as ``rng`` for reproducible output.
    """
    rng = rng or _rnd.Random()
    bound = operand_range(level)
    a = rng.randint(-bound, bound)
    b = rng.randint(-bound, bound)

    pool = _ordered(topics)
    topic = pool[rng.randrange(len(pool))]

    build = _BUILDERS.get(topic, _addition)
    text, answer = build(a, b)
    if topic not in _BUILDERS:
        topic = Topic.ADDITION
    return Question(text=text, answer=answer, topic=topic, level=level)
