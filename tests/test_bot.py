"""
Testing the bot's candidate filtering and guess selection.
"""

import random

import pytest

from eatbite.bot import GameBot, filter_candidates
from eatbite.engine import all_codes, score
from eatbite.errors import NoConsistentCandidate
from eatbite.types import Observation, Score


def test_no_memory_means_every_code_is_possible():
    bot = GameBot()
    assert bot.candidate_set() == all_codes()


def test_remember_appends_in_order_without_dedup():
    bot = GameBot()
    bot.remember((1, 2, 3), (1, 1))
    bot.remember((4, 5, 6), (0, 2))
    bot.remember((4, 5, 6), (0, 2))

    assert len(bot.memory) == 3
    assert bot.memory[0] == Observation((1, 2, 3), Score(1, 1))
    assert bot.memory[1] == bot.memory[2]


def test_candidates_reproduce_every_recorded_score():
    bot = GameBot()
    bot.remember((1, 2, 3), (0, 1))
    bot.remember((4, 5, 6), (1, 0))

    candidates = bot.candidate_set()
    assert candidates
    for candidate in candidates:
        for guess, result in bot.memory:
            assert score(candidate, guess) == result


def test_candidate_set_never_grows_and_keeps_the_secret():
    rng = random.Random(3)
    secret = (8, 0, 4)
    memory = []
    previous = len(filter_candidates(memory))

    for _ in range(8):
        guess = rng.choice(all_codes())
        memory.append(Observation(guess, score(secret, guess)))
        candidates = filter_candidates(memory)
        assert len(candidates) <= previous
        assert secret in candidates
        previous = len(candidates)


def test_next_guess_is_a_candidate():
    bot = GameBot(random.Random(11))
    bot.remember((1, 2, 3), (0, 1))
    bot.remember((4, 5, 6), (1, 0))
    assert bot.next_guess() in bot.candidate_set()


def test_next_guess_is_deterministic_with_seeded_rng():
    a = GameBot(random.Random(7))
    b = GameBot(random.Random(7))
    for bot in (a, b):
        bot.remember((0, 1, 2), (0, 1))
    assert a.next_guess() == b.next_guess()


def test_contradictory_memory_raises_instead_of_guessing():
    bot = GameBot()
    bot.remember((1, 2, 3), (3, 0))
    bot.remember((1, 2, 3), (0, 0))

    with pytest.raises(NoConsistentCandidate) as info:
        bot.next_guess()
    assert info.value.observations == 2


def test_bot_finds_the_secret_by_feedback_alone():
    secret = (9, 3, 6)
    bot = GameBot(random.Random(0))

    for _ in range(50):
        guess = bot.next_guess()
        result = score(secret, guess)
        if result.eat == 3:
            break
        bot.remember(guess, result)
    else:
        pytest.fail("bot never found the secret")

    assert guess == secret


def test_reset_clears_memory():
    bot = GameBot()
    bot.remember((1, 2, 3), (0, 0))
    bot.reset()
    assert bot.memory == []
    assert len(bot.candidate_set()) == 720
