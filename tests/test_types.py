"""Tests for _types module."""
import math

import pytest

from idleclicker._types import check_operator, compare, safe_pow


def test_compare_operators():
    assert compare(5, ">=", 3)
    assert compare(3, ">=", 3)
    assert not compare(2, ">=", 3)

    assert compare(3, "<=", 5)
    assert compare(3, "<=", 3)
    assert not compare(4, "<=", 3)

    assert compare(5, ">", 3)
    assert not compare(3, ">", 3)

    assert compare(3, "<", 5)
    assert not compare(3, "<", 3)

    assert compare(3, "==", 3)
    assert not compare(3, "==", 4)

    assert compare(3, "!=", 4)
    assert not compare(3, "!=", 3)


def test_compare_unknown_operator():
    with pytest.raises(ValueError, match="Unknown operator"):
        compare(1, "??", 2)


def test_check_operator():
    assert check_operator(">=") == ">="
    with pytest.raises(ValueError, match="Unknown operator"):
        check_operator("=>")


def test_safe_pow():
    assert safe_pow(2, 10) == 1024.0
    assert safe_pow(1.5, 0) == 1.0


def test_safe_pow_saturates():
    assert safe_pow(10, 400) == math.inf
