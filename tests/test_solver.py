from collections import Counter
from itertools import islice

import pytest

from mastermind.feedback import KeyPegs, score, shield
from mastermind.pattern import Pattern
from mastermind.solver import InconsistentFeedbackError, Solver, solve


def P(digits):
    return Pattern.from_digits(digits)


def test_opening_is_fixed():
    assert str(Solver.initial_guess()) == "1122"
    for secret in ("1111", "3456", "6666"):
        breaker = Solver(shield(P(secret)))
        assert breaker.play() == P("1122")


def test_opening_does_not_call_oracle():
    calls = []

    def oracle(guess):
        calls.append(guess)
        return KeyPegs(4, 0)

    breaker = Solver(oracle)
    breaker.play()
    assert calls == []
    assert breaker.play() is None
    assert calls == [P("1122")]


def test_win_on_first_guess():
    code1 = P("1122")
    breaker = Solver(shield(code1))
    g = breaker.play()
    assert score(code1, g).win
    assert breaker.play() is None


def test_retain_same_response():
    code2 = P("1123")
    breaker = Solver(shield(code2))
    guess1 = breaker.play()
    response = score(code2, guess1)
    assert not response.win
    assert response == KeyPegs(3, 0)

    breaker.retain_same_response(response)
    assert not breaker.s.contains(P("5223"))
    keep = P("5122")
    assert score(guess1, keep) == response
    assert breaker.s.contains(keep)


def test_last_guess_before_play_is_an_error():
    breaker = Solver(shield(P("1234")))
    with pytest.raises(RuntimeError):
        breaker.last_guess()


def test_history_is_append_only():
    secret = P("6543")
    breaker = Solver(shield(secret))
    seen = []
    for g in breaker:
        seen.append(g)
        assert breaker.guessed == seen
        assert breaker.last_guess() == g
    assert seen[-1] == secret
    assert len(set(seen)) == len(seen)


def test_candidate_set_shrinks_every_turn():
    secret = P("2345")
    breaker = Solver(shield(secret))
    sizes = []
    while breaker.play() is not None:
        sizes.append(len(breaker.s))
        assert secret in breaker.s
    assert sizes == sorted(sizes, reverse=True)


def test_lying_oracle_is_reported():
    # Never a win, always "nothing matches": no code can satisfy that for long.
    breaker = Solver(lambda guess: KeyPegs(0, 0))
    with pytest.raises(InconsistentFeedbackError):
        for _ in range(20):
            breaker.play()


def test_best_guesses_sorted_and_next_guess_prefers_candidates():
    breaker = Solver(shield(P("1234")))
    breaker.play()
    breaker.retain_same_response(score(P("1234"), P("1122")))
    best = breaker.best_guesses()
    assert best == sorted(best)
    assert P("1122") not in best
    high = breaker.guess_score(best[0])
    assert all(breaker.guess_score(g) == high for g in best)

    chosen = breaker.next_guess()
    assert chosen in best
    live = [g for g in best if g in breaker.s]
    assert chosen == (live[0] if live else best[0])


def test_iteration_bounded_by_turn_budget():
    breaker = Solver(shield(P("6655")))
    assert len(list(islice(breaker, 2))) == 2


def test_solve_rejects_empty_budget():
    with pytest.raises(ValueError):
        solve(P("1234"), max_turns=0)


def test_every_secret_is_broken_in_five():
    turns = Counter()
    for secret in Pattern.enumerate():
        guesses = solve(secret, max_turns=10)
        assert guesses[-1] == secret, f"failed on {secret}: {guesses}"
        turns[len(guesses)] += 1
    assert sum(turns.values()) == Pattern.cardinality()
    assert max(turns) <= 5
