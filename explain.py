from __future__ import annotations

from typing import Dict

from models import Explanation, Question

DEFAULT_TIP = "Follow the appropriate math operation."

TIPS: Dict[str, str] = {
    "+": "Add the numbers together.",
    "-": "Subtract the second number from the first.",
    "×": "Multiply the two numbers together.",
    "*": "Multiply the two numbers together.",
    "÷": "Divide the first number by the second.",
    "/": "Divide the first number by the second.",
}


def split_question(text: str) -> tuple[str, str, str]:
    """Split "<left> <op> <right>"; anything else comes back as (text, "", "")."""
    parts = text.split(" ")
    if len(parts) != 3:
        return text, "", ""
    left, op, right = parts
    return left, op, right


def explain(question: Question) -> Explanation:
    # pure formatting: the stored answer is trusted, nothing is recomputed
    left, op, right = split_question(question.text)
    tip = TIPS.get(op, DEFAULT_TIP)
    worked = " ".join(p for p in (left, op, right) if p)
    return Explanation(tip=tip, explanation=f"{worked} = {question.answer}.\n{tip}")
