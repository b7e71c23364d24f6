import random

import pytest

from sortscope.digits import digit_at, digit_count, stable_digit_sort, weights


def test_single_digit_pass():
    assert stable_digit_sort([5, 3, 8, 1], 1) == [1, 3, 5, 8]


def test_uniform_digit_is_identity():
    # every tens digit is 0 here
    assert stable_digit_sort([1, 3, 5, 8], 10) == [1, 3, 5, 8]
    assert stable_digit_sort([8, 1, 5, 3], 10) == [8, 1, 5, 3]


def test_idempotent():
    once = stable_digit_sort([170, 45, 75, 90, 802, 24, 2, 66], 10)
    assert stable_digit_sort(once, 10) == once


def test_stable_on_equal_digits():
    assert stable_digit_sort([21, 11, 31, 12], 1) == [21, 11, 31, 12]
    assert stable_digit_sort([13, 23, 11, 21], 10) == [13, 11, 23, 21]


def test_input_untouched():
    src = [3, 1, 2]
    out = stable_digit_sort(src, 1)
    assert src == [3, 1, 2]
    assert out is not src


def test_textbook_trace():
    arr = [170, 45, 75, 90, 802, 24, 2, 66]
    arr = stable_digit_sort(arr, 1)
    assert arr == [170, 90, 802, 2, 24, 45, 75, 66]
    arr = stable_digit_sort(arr, 10)
    assert arr == [802, 2, 24, 45, 66, 170, 75, 90]
    arr = stable_digit_sort(arr, 100)
    assert arr == [2, 24, 45, 66, 75, 90, 170, 802]


@pytest.mark.parametrize("seed", range(5))
def test_all_weights_match_sorted(seed):
    rng = random.Random(seed)
    arr = [rng.randint(0, 10**5) for _ in range(60)]
    out = list(arr)
    for w in weights(max(arr)):
        out = stable_digit_sort(out, w)
    assert out == sorted(arr)


def test_other_base():
    arr = [0x3A, 0x1F, 0x20, 0x05]
    out = arr
    for w in weights(max(arr), base=16):
        out = stable_digit_sort(out, w, base=16)
    assert out == sorted(arr)


def test_digit_helpers():
    assert digit_at(802, 1) == 2
    assert digit_at(802, 10) == 0
    assert digit_at(802, 100) == 8
    assert digit_count(0) == 1
    assert digit_count(9) == 1
    assert digit_count(10) == 2
    assert digit_count(71.9) == 2


def test_weights():
    assert list(weights(0)) == [1]
    assert list(weights(8)) == [1]
    assert list(weights(10)) == [1, 10]
    assert list(weights(99)) == [1, 10]
    assert list(weights(802)) == [1, 10, 100]
