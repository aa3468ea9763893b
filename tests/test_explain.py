from explain import DEFAULT_TIP, explain, split_question
from models import Question, Topic


def _q(text, answer, topic=Topic.ADDITION):
    return Question(text=text, answer=answer, topic=topic)


def test_addition_explanation():
    e = explain(_q("3 + 4", 7))
    assert e.tip == "Add the numbers together."
    assert e.explanation == "3 + 4 = 7.\nAdd the numbers together."


def test_subtraction_with_negative_operand():
    e = explain(_q("-2 - -3", 1, Topic.SUBTRACTION))
    assert e.explanation == "-2 - -3 = 1.\nSubtract the second number from the first."


def test_multiplication_sign_gets_its_own_tip():
    e = explain(_q("6 × -2", -12, Topic.MULTIPLICATION))
    assert e.tip == "Multiply the two numbers together."
    assert e.explanation.startswith("6 × -2 = -12.\n")


def test_division():
    e = explain(_q("-12 ÷ 4", -3, Topic.DIVISION))
    assert e.explanation == "-12 ÷ 4 = -3.\nDivide the first number by the second."


def test_unknown_operator_gets_generic_tip():
    e = explain(_q("7 % 3", 1))
    assert e.tip == DEFAULT_TIP
    assert e.explanation == f"7 % 3 = 1.\n{DEFAULT_TIP}"


def test_malformed_text_is_kept_whole():
    assert split_question("seven") == ("seven", "", "")
    e = explain(_q("seven", 7))
    assert e.explanation == f"seven = 7.\n{DEFAULT_TIP}"


def test_answer_is_trusted_not_recomputed():
    e = explain(_q("2 + 2", 5))
    assert e.explanation.startswith("2 + 2 = 5.")
