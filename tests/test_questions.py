# tests/test_questions.py
import random

import pytest

from hrad import Config, calculate_answer, generate_question, parse_number


class ScriptedRng:
    """Returns prepared operands and operator instead of random ones."""

    def __init__(self, operands, operator):
        self.operands = list(operands)
        self.operator = operator

    def randint(self, low, high):
        assert (low, high) == (Config.OPERAND_MIN, Config.OPERAND_MAX)
        return self.operands.pop(0)

    def choice(self, options):
        assert self.operator in options
        return self.operator


def test_generated_questions_stay_in_range():
    rng = random.Random(1234)

    for _ in range(500):
        prompt, answer = generate_question(rng)
        left, operator, right = prompt.split(" ")
        a, b = int(left), int(right)

        assert 1 <= a <= 9 and 1 <= b <= 9
        assert operator in ("+", "-", "*", "/")
        expected = {"+": a + b, "-": a - b, "*": a * b, "/": a // b}[operator]
        assert answer == expected


def test_every_operator_shows_up():
    rng = random.Random(7)

    operators = {generate_question(rng)[0].split(" ")[1] for _ in range(200)}

    assert operators == set(Config.OPERATORS)


@pytest.mark.parametrize("operands, operator, prompt, answer", [
    ((3, 4), "+", "3 + 4", 7),
    ((2, 9), "-", "2 - 9", -7),
    ((6, 7), "*", "6 * 7", 42),
    ((7, 2), "/", "7 / 2", 3),
    ((9, 3), "/", "9 / 3", 3),
])
def test_generate_question_with_scripted_draws(operands, operator, prompt, answer):
    assert generate_question(ScriptedRng(operands, operator)) == (prompt, answer)


def test_division_by_zero_uses_fallback():
    assert calculate_answer(5, "/", 0) == Config.DIVISION_FALLBACK == 1


def test_unknown_operator_is_rejected():
    with pytest.raises(ValueError):
        calculate_answer(2, "^", 3)


@pytest.mark.parametrize("text, expected", [
    ("12", 12),
    ("  -3 \n", -3),
    ("abc", None),
    ("", None),
    ("4.5", None),
    ("+7", 7),
    ("1_0", None),
    ("١", None),
    (None, None),
])
def test_parse_number(text, expected):
    assert parse_number(text) == expected
