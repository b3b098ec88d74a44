from mastermind.constraints import CandidateSet
from mastermind.feedback import consistent_with, score
from mastermind.pattern import CARDINALITY, Pattern


def test_all_contains_every_pattern():
    s = CandidateSet.all()
    assert len(s) == s.size() == CARDINALITY
    assert all(s.contains(p) for p in Pattern.enumerate())
    assert [p.index for p in s] == list(range(CARDINALITY))


def test_pruning_after_knuth_opening():
    guess = Pattern.from_digits("1122")
    secret = Pattern.from_digits("1123")
    fb = score(secret, guess)  # should be BBB

    s = CandidateSet.all()
    removed = s.filter_keep(lambda p: consistent_with(p, guess, fb))

    assert removed == CARDINALITY - len(s)
    assert secret in s
    assert Pattern.from_digits("5122") in s
    assert Pattern.from_digits("5223") not in s
    assert guess not in s  # a non-winning guess is never consistent with itself


def test_pruning_is_monotonic_with_more_feedback():
    secret = Pattern.from_digits("3456")
    s = CandidateSet.all()
    sizes = [len(s)]
    for digits in ("1122", "1344", "3526", "3456"):
        guess = Pattern.from_digits(digits)
        fb = score(secret, guess)
        before = set(s)
        s.filter_keep(lambda p: consistent_with(p, guess, fb))
        assert set(s).issubset(before)
        assert secret in s
        sizes.append(len(s))
    assert sizes == sorted(sizes, reverse=True)
    assert list(s) == [secret]


def test_indices_and_mask_are_copies():
    s = CandidateSet.all()
    s.filter_keep(lambda p: p.index % 2 == 0)
    assert len(s) == CARDINALITY // 2
    mask = s.mask()
    mask[:] = True
    assert len(s) == CARDINALITY // 2
    assert list(s.indices()[:3]) == [0, 2, 4]
