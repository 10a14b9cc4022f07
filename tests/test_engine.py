"""
Testing pure game logic.
"""

import random

import pytest

from eatbite.engine import (
    all_codes,
    format_code,
    format_score,
    generate_random_code,
    is_win,
    parse_code,
    score,
    validate_code,
)
from eatbite.errors import CodeValidationError, DuplicateDigits, InvalidLength
from eatbite.types import Score


@pytest.mark.parametrize("guess,expected", [
    ((5, 2, 7), (3, 0)),
    ((7, 5, 2), (0, 3)),
    ((5, 7, 2), (1, 2)),
    ((1, 3, 4), (0, 0)),
    ((7, 5, 1), (0, 2)),
])
def test_score_golden(guess, expected):
    assert score((5, 2, 7), guess) == expected


def test_score_returns_named_pair():
    result = score((5, 2, 7), (5, 7, 2))
    assert result.eat == 1
    assert result.bite == 2


def test_score_never_exceeds_three_and_self_is_win():
    codes = all_codes()
    for secret in codes[::97]:
        assert score(secret, secret) == Score(3, 0)
        for guess in codes:
            result = score(secret, guess)
            assert result.eat + result.bite <= 3


def test_all_codes_is_the_720_permutations():
    codes = all_codes()
    assert len(codes) == 720
    assert len(set(codes)) == 720
    for code in codes:
        assert len(set(code)) == 3


def test_parse_code_keeps_only_digits():
    assert parse_code("527") == (5, 2, 7)
    assert parse_code(" 5-2 7\n") == (5, 2, 7)


@pytest.mark.parametrize("text", ["", "12", "1234", "abc", "5 2"])
def test_parse_code_wrong_length(text):
    with pytest.raises(InvalidLength):
        parse_code(text)


@pytest.mark.parametrize("text", ["112", "555", "7a7b1"])
def test_parse_code_duplicates(text):
    with pytest.raises(DuplicateDigits):
        parse_code(text)


def test_validation_errors_are_value_errors():
    with pytest.raises(ValueError):
        parse_code("99")
    with pytest.raises(CodeValidationError):
        validate_code([1, 2, 10])


def test_validate_code_rejects_bools():
    with pytest.raises(CodeValidationError):
        validate_code([True, 0, 2])
    assert validate_code([1, 0, 2]) == (1, 0, 2)


def test_generate_random_code_shape_and_spread():
    seen = set()
    for _ in range(2000):
        code = generate_random_code()
        assert len(code) == 3
        assert len(set(code)) == 3
        for digit in code:
            assert 0 <= digit <= 9
        seen.update(code)
    # every digit shows up somewhere over many draws
    assert seen == set(range(10))


def test_generate_random_code_is_reproducible_with_seed():
    assert generate_random_code(random.Random(5)) == generate_random_code(random.Random(5))


def test_is_win_and_formatting():
    assert is_win(Score(3, 0)) is True
    assert is_win(Score(1, 2)) is False
    assert format_code((0, 4, 9)) == "049"
    assert format_score(Score(1, 2)) == "1 Eat, 2 Bite"
