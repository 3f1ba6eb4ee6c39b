import json

import pytest

from iavlkit import rand
from iavlkit.rand import STR_CHARS, Rand


def test_rand_str_length():
    assert len(rand.rand_str(243)) == 243


def test_rand_bytes_length():
    assert len(rand.rand_bytes(243)) == 243


def _all_outputs():
    rand.seed(1)
    perm = rand.rand_perm(10)
    return (
        f"perm: {json.dumps(perm)}\n"
        f"randInt: {rand.rand_int()}\n"
        f"randInt31: {rand.rand_int31()}\n"
    )


def test_determinism():
    first = _all_outputs()
    for _ in range(100):
        assert _all_outputs() == first


def test_same_seed_same_sequence():
    a, b = Rand(42), Rand(42)
    assert [a.int63() for _ in range(5)] == [b.int63() for _ in range(5)]
    assert a.random_str(30) == b.random_str(30)


def test_reseed_restarts_sequence():
    r = Rand(3)
    first = r.random_bytes(16)
    r.seed(3)
    assert r.random_bytes(16) == first


def test_random_str_charset():
    s = Rand(9).random_str(500)
    assert len(s) == 500
    assert set(s) <= set(STR_CHARS)


def test_random_str_zero_length():
    assert Rand(1).random_str(0) == ""


def test_perm_is_permutation():
    assert sorted(Rand(5).perm(50)) == list(range(50))


def test_int_ranges():
    r = Rand(11)
    for _ in range(200):
        assert 0 <= r.int31() < 2**31
        assert 0 <= r.int63() < 2**63
        assert 0 <= r.intn(7) < 7
        assert 0.0 <= r.float64() < 1.0


def test_intn_rejects_non_positive():
    with pytest.raises(ValueError):
        Rand(1).intn(0)


def test_perm_rejects_negative():
    with pytest.raises(ValueError):
        Rand(1).perm(-1)


def test_bool_takes_both_values():
    r = Rand(7)
    assert {r.bool() for _ in range(200)} == {True, False}