from __future__ import annotations

import math
import operator
from typing import Callable

_OPS: dict[str, Callable[[float, float], bool]] = {
    ">=": operator.ge,
    "<=": operator.le,
    ">": operator.gt,
    "<": operator.lt,
    "==": operator.eq,
    "!=": operator.ne,
}


def compare(left: float, op: str, right: float) -> bool:
    """Compare two values using a string operator."""
    fn = _OPS.get(op)
    if fn is None:
        raise ValueError(f"Unknown operator: {op!r}. Expected one of {list(_OPS)}")
    return fn(left, right)


def check_operator(op: str) -> str:
    """Return *op* unchanged, raising early if it is not a known operator."""
    if op not in _OPS:
        raise ValueError(f"Unknown operator: {op!r}. Expected one of {list(_OPS)}")
    return op


def safe_pow(base: float, exponent: int) -> float:
    """base ** exponent, saturating to inf instead of raising OverflowError."""
    try:
        return float(base) ** exponent
    except OverflowError:
        return math.inf
