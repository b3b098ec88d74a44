from collections import Counter

import numpy as np
import pytest

from mastermind.feedback import KeyPegs, consistent_with, decode, feedback_table, score, shield
from mastermind.pattern import CARDINALITY, Pattern


def P(digits):
    return Pattern.from_digits(digits)


@pytest.mark.parametrize(
    "secret, guess, expected",
    [
        ("1234", "2555", KeyPegs(0, 1)),
        ("1234", "1234", KeyPegs(4, 0)),
        ("1122", "1112", KeyPegs(3, 0)),
        ("1234", "4321", KeyPegs(0, 4)),
        ("1234", "5656", KeyPegs(0, 0)),
        ("2445", "1122", KeyPegs(0, 1)),
        ("1123", "1122", KeyPegs(3, 0)),
        ("3345", "1122", KeyPegs(0, 0)),
        ("1133", "3311", KeyPegs(0, 4)),
    ],
)
def test_known_scores(secret, guess, expected):
    assert score(P(secret), P(guess)) == expected


def test_self_score_is_the_only_win():
    for p in Pattern.enumerate():
        assert score(p, p) == KeyPegs(4, 0)
    probe = P("1223")
    wins = [p for p in Pattern.enumerate() if score(probe, p).win]
    assert wins == [probe]


def test_duplicates_capped_by_secret_multiplicity():
    # Three 1s in the guess, one in the secret: only one peg for color 1.
    fb = score(P("1234"), P("5111"))
    assert fb.blacks + fb.whites == 1


def test_totals_never_exceed_board_size():
    probes = [P(d) for d in ("1111", "1122", "1123", "1234", "6543")]
    for a in probes:
        for b in Pattern.enumerate():
            fb = score(a, b)
            assert fb.blacks + fb.whites <= 4


def test_full_tally_iff_same_multiset_of_colors():
    patterns = list(Pattern.enumerate())
    colors = [Counter(p.symbols()) for p in patterns]
    # one id per multiset of colors
    ids = {}
    color_ids = np.array([ids.setdefault(frozenset(c.items()), len(ids)) for c in colors])
    same_colors = color_ids[:, None] == color_ids[None, :]

    table = feedback_table().astype(np.int64)
    full = table // 5 + table % 5 == 4
    assert np.array_equal(full, same_colors)
    # the plain scorer agrees on a sample of the pairs
    for a in patterns[::37]:
        for b in patterns:
            fb = score(a, b)
            assert (fb.blacks + fb.whites == 4) == (colors[a.index] == colors[b.index])


def test_keypegs_validation():
    with pytest.raises(ValueError):
        KeyPegs(3, 2)
    with pytest.raises(ValueError):
        KeyPegs(-1, 0)


def test_keypegs_text():
    assert str(KeyPegs(1, 2)) == "BWW"
    assert str(KeyPegs()) == ""
    assert KeyPegs.parse("BWW") == KeyPegs(1, 2)
    assert KeyPegs.parse("bbbb") == KeyPegs(4, 0)
    assert KeyPegs.parse("-") == KeyPegs(0, 0)
    with pytest.raises(ValueError):
        KeyPegs.parse("WB")


def test_keypegs_are_hashable():
    counts = {KeyPegs(1, 2): 3}
    counts[KeyPegs(1, 2)] += 1
    assert counts == {KeyPegs(1, 2): 4}


def test_shield_closes_over_secret():
    codemaker = shield(P("1122"))
    assert codemaker(P("1112")) == KeyPegs(3, 0)
    assert codemaker(P("1122")).win


def test_consistent_with_delegates_to_score():
    guess, secret = P("1122"), P("1123")
    fb = score(secret, guess)
    assert consistent_with(secret, guess, fb)
    assert not consistent_with(P("5223"), guess, fb)
    assert consistent_with(P("5122"), guess, fb)


def test_feedback_table_matches_score():
    table = feedback_table()
    assert table.shape == (CARDINALITY, CARDINALITY)
    rows = [0, 1, 7, 43, 259, 500, 777, 1000, CARDINALITY - 1]
    for g in rows:
        guess = Pattern.at(g)
        for secret in Pattern.enumerate():
            assert decode(table[g, secret.index]) == score(secret, guess)
